import uuid

from fastapi import APIRouter, BackgroundTasks, Depends, HTTPException
from sqlalchemy.orm import Session

from talentsearch.database import get_db
from talentsearch.dependencies import get_index_manager, require_roles
from talentsearch.models.company import Company
from talentsearch.schemas.auth import CurrentUser
from talentsearch.schemas.company import CompanyCreate, CompanyDocument, CompanyUpdate
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.utils.timestamps import utc_now

router = APIRouter(prefix="/companies", tags=["companies"])


def _get_owned_company(company_id: str, user: CurrentUser, db: Session) -> Company:
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    if user.role != "admin" and company.created_by != user.user_id:
        raise HTTPException(status_code=403, detail="Not authorized to access this resource")
    return company


@router.post("", response_model=CompanyDocument, status_code=201)
async def create_company(
    req: CompanyCreate,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    now = utc_now()
    company = Company(id=str(uuid.uuid4()), created_by=user.user_id, created_at=now, updated_at=now)
    company.apply(req)
    db.add(company)
    db.commit()
    db.refresh(company)

    document = company.to_document()
    background_tasks.add_task(index_manager.index_company, document)
    return document


@router.get("/{company_id}", response_model=CompanyDocument)
async def get_company(company_id: str, db: Session = Depends(get_db)):
    company = db.query(Company).filter(Company.id == company_id).first()
    if not company:
        raise HTTPException(status_code=404, detail="Company not found")
    return company.to_document()


@router.put("/{company_id}", response_model=CompanyDocument)
async def update_company(
    company_id: str,
    req: CompanyUpdate,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    company = _get_owned_company(company_id, user, db)

    current = company.to_document().model_dump()
    current.update(req.model_dump(exclude_unset=True))
    company.apply(CompanyCreate.model_validate(current))
    company.updated_at = utc_now()
    db.commit()
    db.refresh(company)

    document = company.to_document()
    background_tasks.add_task(index_manager.index_company, document)
    return document


@router.delete("/{company_id}")
async def delete_company(
    company_id: str,
    background_tasks: BackgroundTasks,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    db: Session = Depends(get_db),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    company = _get_owned_company(company_id, user, db)
    db.delete(company)
    db.commit()

    background_tasks.add_task(index_manager.delete_company, company_id)
    return {"message": "Company deleted"}
