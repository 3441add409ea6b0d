from fastapi import APIRouter, Depends, HTTPException, Query

from talentsearch.config import settings
from talentsearch.dependencies import (
    get_current_user,
    get_document_store,
    get_index_manager,
    get_retrieval_service,
    require_roles,
)
from talentsearch.schemas.applicant import ApplicantHit
from talentsearch.schemas.auth import CurrentUser
from talentsearch.schemas.job import JobHit
from talentsearch.schemas.search import (
    ApplicantSearchResponse,
    CandidateRecommendationResponse,
    JobRecommendationResponse,
    JobSearchResponse,
    ReindexResponse,
)
from talentsearch.services.document_store import DocumentStore
from talentsearch.services.index_manager import (
    SearchIndexManager,
    project_applicant,
    project_company,
    project_job,
)
from talentsearch.services.retrieval_service import RetrievalService
from talentsearch.services.search_types import (
    ApplicantFilters,
    DocumentKind,
    InvalidSearchQuery,
    JobFilters,
    SearchResult,
)

router = APIRouter(prefix="/search", tags=["search"])


def _split_values(values: list[str] | None) -> list[str]:
    """Accept both repeated keys and comma-separated values."""
    if not values:
        return []
    return [part.strip() for value in values for part in value.split(",") if part.strip()]


def _job_hits(result: SearchResult) -> list[JobHit]:
    return [JobHit(**hit.document, score=hit.score) for hit in result.hits]


def _applicant_hits(result: SearchResult) -> list[ApplicantHit]:
    return [ApplicantHit(**hit.document, score=hit.score) for hit in result.hits]


@router.get("/jobs", response_model=JobSearchResponse)
def search_jobs(
    query: str = "",
    page: int = 1,
    limit: int = settings.default_page_size,
    job_type: str | None = Query(None, alias="jobType"),
    experience: str | None = None,
    remote: bool | None = None,
    location_type: str | None = Query(None, alias="locationType"),
    location: str | None = None,
    min_salary: float | None = Query(None, alias="minSalary"),
    max_salary: float | None = Query(None, alias="maxSalary"),
    categories: list[str] | None = Query(None),
    retrieval: RetrievalService = Depends(get_retrieval_service),
):
    filters = JobFilters(
        job_type=job_type,
        experience_level=experience,
        remote=remote,
        location_type=location_type,
        location=location,
        min_salary=min_salary,
        max_salary=max_salary,
        categories=_split_values(categories),
    )
    try:
        result = retrieval.search_jobs(query, filters, page=page, page_size=limit)
    except InvalidSearchQuery as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    jobs = _job_hits(result)
    return JobSearchResponse(
        count=len(jobs),
        total=result.total,
        total_pages=result.total_pages(limit),
        current_page=page,
        jobs=jobs,
        search_mode=result.mode,
    )


@router.get("/applicants", response_model=ApplicantSearchResponse)
def search_applicants(
    query: str = "",
    page: int = 1,
    limit: int = settings.default_page_size,
    skills: list[str] | None = Query(None),
    job_types: list[str] | None = Query(None, alias="jobTypes"),
    remote: bool | None = None,
    _user: CurrentUser = Depends(require_roles("employer", "admin")),
    retrieval: RetrievalService = Depends(get_retrieval_service),
):
    filters = ApplicantFilters(
        skills=_split_values(skills),
        job_types=_split_values(job_types),
        remote=remote,
    )
    try:
        result = retrieval.search_applicants(query, filters, page=page, page_size=limit)
    except InvalidSearchQuery as exc:
        raise HTTPException(status_code=400, detail=str(exc)) from exc

    applicants = _applicant_hits(result)
    return ApplicantSearchResponse(
        count=len(applicants),
        total=result.total,
        total_pages=result.total_pages(limit),
        current_page=page,
        applicants=applicants,
        search_mode=result.mode,
    )


@router.get("/recommendations/jobs", response_model=JobRecommendationResponse)
def recommend_jobs(
    user: CurrentUser = Depends(get_current_user),
    store: DocumentStore = Depends(get_document_store),
    retrieval: RetrievalService = Depends(get_retrieval_service),
):
    profile = store.get_applicant_by_user(user.user_id)
    if profile is None:
        return JobRecommendationResponse(count=0, recommendations=[])

    result = retrieval.get_job_recommendations(profile, limit=settings.recommendation_limit)
    recommendations = _job_hits(result)
    return JobRecommendationResponse(
        count=len(recommendations),
        recommendations=recommendations,
        search_mode=result.mode,
    )


@router.get("/recommendations/candidates/{job_id}", response_model=CandidateRecommendationResponse)
def recommend_candidates(
    job_id: str,
    user: CurrentUser = Depends(require_roles("employer", "admin")),
    store: DocumentStore = Depends(get_document_store),
    retrieval: RetrievalService = Depends(get_retrieval_service),
):
    job = store.get_job(job_id)
    if job is None:
        raise HTTPException(status_code=400, detail=f"No job found with id {job_id}")
    if user.role != "admin" and job.created_by != user.user_id:
        raise HTTPException(status_code=403, detail="Not authorized to access this resource")

    result = retrieval.get_candidate_recommendations(job, limit=settings.recommendation_limit)
    recommendations = _applicant_hits(result)
    return CandidateRecommendationResponse(
        count=len(recommendations),
        recommendations=recommendations,
        search_mode=result.mode,
    )


@router.post("/reindex", response_model=ReindexResponse)
def reindex(
    _admin: CurrentUser = Depends(require_roles("admin")),
    store: DocumentStore = Depends(get_document_store),
    index_manager: SearchIndexManager = Depends(get_index_manager),
):
    if not index_manager.is_connected:
        raise HTTPException(status_code=503, detail="Search index is not connected")

    jobs = index_manager.reindex(
        DocumentKind.JOBS, ((job.id, project_job(job)) for job in store.iter_jobs())
    )
    applicants = index_manager.reindex(
        DocumentKind.APPLICANTS, ((a.id, project_applicant(a)) for a in store.iter_applicants())
    )
    companies = index_manager.reindex(
        DocumentKind.COMPANIES, ((c.id, project_company(c)) for c in store.iter_companies())
    )
    return ReindexResponse(jobs=jobs, applicants=applicants, companies=companies)
