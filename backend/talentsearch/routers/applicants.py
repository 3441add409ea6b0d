import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from talentsearch.database import get_db
from talentsearch.dependencies import get_current_user, get_index_manager
from talentsearch.models.applicant import ApplicantProfile
from talentsearch.schemas.applicant import ApplicantDocument, ApplicantProfileUpdate
from talentsearch.schemas.auth import CurrentUser
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.utils.timestamps import utc_now

router = APIRouter(prefix="/applicants", tags=["applicants"])


def _own_profile(user: CurrentUser, db: Session) -> ApplicantProfile | None:
    return db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user.user_id).first()


@router.get("/me", response_model=ApplicantDocument)
async def get_my_profile(
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    profile = _own_profile(user, db)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    return profile.to_document()


@router.put("/me", response_model=ApplicantDocument)
async def upsert_my_profile(
    req: ApplicantProfileUpdate,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    if user.role != "applicant":
        raise HTTPException(status_code=403, detail="Not authorized to access this resource")

    now = utc_now()
    profile = _own_profile(user, db)
    if profile is None:
        profile = ApplicantProfile(id=str(uuid.uuid4()), user_id=user.user_id, created_at=now)
        db.add(profile)
    profile.apply(req)
    profile.updated_at = now
    db.commit()
    db.refresh(profile)

    document = profile.to_document()
    background_tasks.add_task(index_manager.index_applicant, document)
    return document


@router.delete("/me")
async def delete_my_profile(
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    profile = _own_profile(user, db)
    if not profile:
        raise HTTPException(status_code=404, detail="Profile not found")
    profile_id = profile.id
    db.delete(profile)
    db.commit()

    background_tasks.add_task(index_manager.delete_applicant, profile_id)
    return {"message": "Profile deleted"}
