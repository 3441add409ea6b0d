import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from talentsearch.database import get_db
from talentsearch.dependencies import get_index_manager, require_roles
from talentsearch.models.job import Job
from talentsearch.schemas.auth import CurrentUser
from talentsearch.schemas.job import JobCreate, JobDocument, JobUpdate
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.utils.timestamps import utc_now

router = APIRouter(prefix="/jobs", tags=["jobs"])


def _get_owned_job(job_id: str, user: CurrentUser, db: Session) -> Job:
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    if user.role != "admin" and job.created_by != user.user_id:
        raise HTTPException(status_code=403, detail="Not authorized to access this resource")
    return job


@router.post("", response_model=JobDocument, status_code=201)
async def create_job(
    req: JobCreate,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    now = utc_now()
    job = Job(id=str(uuid.uuid4()), created_by=user.user_id, created_at=now, updated_at=now)
    job.apply(req)
    db.add(job)
    db.commit()
    db.refresh(job)

    document = job.to_document()
    background_tasks.add_task(index_manager.index_job, document)
    return document


@router.get("/{job_id}", response_model=JobDocument)
async def get_job(job_id: str, db: Session = Depends(get_db)):
    job = db.query(Job).filter(Job.id == job_id).first()
    if not job:
        raise HTTPException(status_code=404, detail="Job not found")
    return job.to_document()


@router.put("/{job_id}", response_model=JobDocument)
async def update_job(
    job_id: str,
    req: JobUpdate,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    job = _get_owned_job(job_id, user, db)

    current = job.to_document().model_dump()
    current.update(req.model_dump(exclude_unset=True))
    job.apply(JobCreate.model_validate(current))
    job.updated_at = utc_now()
    db.commit()
    db.refresh(job)

    document = job.to_document()
    background_tasks.add_task(index_manager.index_job, document)
    return document


@router.delete("/{job_id}")
async def delete_job(
    job_id: str,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    job = _get_owned_job(job_id, user, db)
    db.delete(job)
    db.commit()

    background_tasks.add_task(index_manager.delete_job, job_id)
    return {"message": "Job deleted"}
