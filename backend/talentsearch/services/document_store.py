from typing import Iterator

from sqlalchemy.orm import Session, sessionmaker

from talentsearch.models import ApplicantProfile, Company, Job
from talentsearch.schemas.applicant import ApplicantDocument
from talentsearch.schemas.company import CompanyDocument
from talentsearch.schemas.job import JobDocument
from talentsearch.services.query_translator import StoreQuery


class DocumentStore:
    """
    Read-side adapter over the canonical SQLite store.

    Opens one session per call, so a single instance can be shared by
    concurrent requests. Rows are converted to documents before the session
    closes.
    """

    def __init__(self, session_factory: sessionmaker[Session], full_text: bool = True):
        self._session_factory = session_factory
        self.full_text = full_text

    def get_job(self, job_id: str) -> JobDocument | None:
        with self._session_factory() as db:
            job = db.query(Job).filter(Job.id == job_id).first()
            return job.to_document() if job else None

    def get_applicant_by_user(self, user_id: str) -> ApplicantDocument | None:
        with self._session_factory() as db:
            profile = db.query(ApplicantProfile).filter(ApplicantProfile.user_id == user_id).first()
            return profile.to_document() if profile else None

    def get_company(self, company_id: str) -> CompanyDocument | None:
        with self._session_factory() as db:
            company = db.query(Company).filter(Company.id == company_id).first()
            return company.to_document() if company else None

    def find_jobs(self, store_query: StoreQuery) -> tuple[int, list[JobDocument]]:
        with self._session_factory() as db:
            query = db.query(Job).filter(*store_query.criteria)
            total = query.count()
            rows = (
                query.order_by(*store_query.order_by)
                .offset(store_query.offset)
                .limit(store_query.limit)
                .all()
            )
            return total, [row.to_document() for row in rows]

    def find_applicants(self, store_query: StoreQuery) -> tuple[int, list[ApplicantDocument]]:
        with self._session_factory() as db:
            query = db.query(ApplicantProfile).filter(*store_query.criteria)
            total = query.count()
            rows = (
                query.order_by(*store_query.order_by)
                .offset(store_query.offset)
                .limit(store_query.limit)
                .all()
            )
            return total, [row.to_document() for row in rows]

    def iter_jobs(self) -> Iterator[JobDocument]:
        with self._session_factory() as db:
            for job in db.query(Job).order_by(Job.created_at).yield_per(500):
                yield job.to_document()

    def iter_applicants(self) -> Iterator[ApplicantDocument]:
        with self._session_factory() as db:
            for profile in db.query(ApplicantProfile).order_by(ApplicantProfile.created_at).yield_per(500):
                yield profile.to_document()

    def iter_companies(self) -> Iterator[CompanyDocument]:
        with self._session_factory() as db:
            for company in db.query(Company).order_by(Company.created_at).yield_per(500):
                yield company.to_document()
