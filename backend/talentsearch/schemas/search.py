from talentsearch.schemas.applicant import ApplicantHit
from talentsearch.schemas.base import ApiModel
from talentsearch.schemas.job import JobHit
from talentsearch.services.search_types import SearchMode


class JobSearchResponse(ApiModel):
    success: bool = True
    count: int
    total: int
    total_pages: int
    current_page: int
    jobs: list[JobHit]
    search_mode: SearchMode


class ApplicantSearchResponse(ApiModel):
    success: bool = True
    count: int
    total: int
    total_pages: int
    current_page: int
    applicants: list[ApplicantHit]
    search_mode: SearchMode


class JobRecommendationResponse(ApiModel):
    success: bool = True
    count: int
    recommendations: list[JobHit]
    search_mode: SearchMode | None = None


class CandidateRecommendationResponse(ApiModel):
    success: bool = True
    count: int
    recommendations: list[ApplicantHit]
    search_mode: SearchMode | None = None


class ReindexResponse(ApiModel):
    success: bool = True
    jobs: int
    applicants: int
    companies: int
