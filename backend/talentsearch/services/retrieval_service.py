import logging

from talentsearch.schemas.applicant import ApplicantDocument
from talentsearch.schemas.job import JobDocument
from talentsearch.services.recommendation_engine import candidate_query_for_job, job_query_for_applicant
from talentsearch.services.search_backends import BackendSelector
from talentsearch.services.search_types import (
    ApplicantFilters,
    JobFilters,
    SearchMode,
    SearchQuery,
    SearchResult,
)

logger = logging.getLogger(__name__)


class RetrievalService:
    """
    Single entry point for search and recommendations.

    The backend is fixed by the selector at startup: the primary index when
    it was reachable, the document store otherwise. A connected search that
    matches nothing is a valid empty result and is not retried against the
    store. Backend errors are logged and turned into empty results.
    """

    def __init__(self, selector: BackendSelector):
        self._selector = selector

    @property
    def mode(self) -> SearchMode:
        return self._selector.mode

    def search_jobs(
        self,
        free_text: str = "",
        filters: JobFilters | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> SearchResult:
        query = SearchQuery(free_text=free_text, filters=filters or JobFilters(), page=page, page_size=page_size)
        query.validate()
        backend = self._selector.active
        try:
            return backend.search_jobs(query)
        except Exception:
            logger.exception("Job search failed on %s", backend.mode.value)
            return SearchResult.empty(backend.mode)

    def search_applicants(
        self,
        free_text: str = "",
        filters: ApplicantFilters | None = None,
        page: int = 1,
        page_size: int = 10,
    ) -> SearchResult:
        query = SearchQuery(
            free_text=free_text, filters=filters or ApplicantFilters(), page=page, page_size=page_size
        )
        query.validate()
        backend = self._selector.active
        try:
            return backend.search_applicants(query)
        except Exception:
            logger.exception("Applicant search failed on %s", backend.mode.value)
            return SearchResult.empty(backend.mode)

    def get_job_recommendations(self, profile: ApplicantDocument, limit: int = 10) -> SearchResult:
        backend = self._selector.active
        rec = job_query_for_applicant(profile, limit=limit)
        if rec.is_empty:
            return SearchResult.empty(backend.mode)
        try:
            return backend.recommend_jobs(rec)
        except Exception:
            logger.exception("Job recommendations failed on %s", backend.mode.value)
            return SearchResult.empty(backend.mode)

    def get_candidate_recommendations(self, job: JobDocument, limit: int = 10) -> SearchResult:
        backend = self._selector.active
        rec = candidate_query_for_job(job, limit=limit)
        if rec.is_empty:
            return SearchResult.empty(backend.mode)
        try:
            return backend.recommend_candidates(rec)
        except Exception:
            logger.exception("Candidate recommendations failed on %s", backend.mode.value)
            return SearchResult.empty(backend.mode)
