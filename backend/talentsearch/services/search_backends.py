"""
The two interchangeable retrieval backends and the selector that picks one
at startup.
"""
from abc import ABC, abstractmethod
from typing import Any

from talentsearch.services import query_translator
from talentsearch.services.document_store import DocumentStore
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.services.search_types import (
    CandidateRecommendationQuery,
    DocumentKind,
    JobRecommendationQuery,
    SearchHit,
    SearchMode,
    SearchQuery,
    SearchResult,
)


class SearchBackend(ABC):
    mode: SearchMode

    @abstractmethod
    def search_jobs(self, query: SearchQuery) -> SearchResult: ...

    @abstractmethod
    def search_applicants(self, query: SearchQuery) -> SearchResult: ...

    @abstractmethod
    def recommend_jobs(self, rec: JobRecommendationQuery) -> SearchResult: ...

    @abstractmethod
    def recommend_candidates(self, rec: CandidateRecommendationQuery) -> SearchResult: ...


class PrimaryIndexBackend(SearchBackend):
    mode = SearchMode.PRIMARY_INDEX

    def __init__(self, index_manager: SearchIndexManager):
        self._index = index_manager

    def _execute(self, kind: DocumentKind, body: dict[str, Any], count_hits: bool = True) -> SearchResult:
        response = self._index.search(kind, body)
        hits = [
            SearchHit(document={**hit["_source"], "id": hit["_id"]}, score=hit.get("_score"))
            for hit in response["hits"]["hits"]
        ]
        total = response["hits"]["total"]["value"] if count_hits else len(hits)
        return SearchResult(total=total, hits=hits, mode=self.mode)

    def search_jobs(self, query: SearchQuery) -> SearchResult:
        return self._execute(DocumentKind.JOBS, query_translator.job_index_query(query))

    def search_applicants(self, query: SearchQuery) -> SearchResult:
        return self._execute(DocumentKind.APPLICANTS, query_translator.applicant_index_query(query))

    def recommend_jobs(self, rec: JobRecommendationQuery) -> SearchResult:
        body = query_translator.job_recommendation_index_query(rec)
        return self._execute(DocumentKind.JOBS, body, count_hits=False)

    def recommend_candidates(self, rec: CandidateRecommendationQuery) -> SearchResult:
        body = query_translator.candidate_recommendation_index_query(rec)
        return self._execute(DocumentKind.APPLICANTS, body, count_hits=False)


class FallbackStoreBackend(SearchBackend):
    mode = SearchMode.FALLBACK_STORE

    def __init__(self, store: DocumentStore):
        self._store = store

    def _result(self, total: int, documents: list) -> SearchResult:
        hits = [SearchHit(document=doc.model_dump(), score=None) for doc in documents]
        return SearchResult(total=total, hits=hits, mode=self.mode)

    def search_jobs(self, query: SearchQuery) -> SearchResult:
        store_query = query_translator.job_store_query(query, full_text=self._store.full_text)
        return self._result(*self._store.find_jobs(store_query))

    def search_applicants(self, query: SearchQuery) -> SearchResult:
        store_query = query_translator.applicant_store_query(query, full_text=self._store.full_text)
        return self._result(*self._store.find_applicants(store_query))

    def recommend_jobs(self, rec: JobRecommendationQuery) -> SearchResult:
        _, jobs = self._store.find_jobs(query_translator.job_recommendation_store_query(rec))
        return self._result(len(jobs), jobs)

    def recommend_candidates(self, rec: CandidateRecommendationQuery) -> SearchResult:
        _, applicants = self._store.find_applicants(query_translator.candidate_recommendation_store_query(rec))
        return self._result(len(applicants), applicants)


class BackendSelector:
    """
    Chooses the active backend once, from the index manager's connectivity
    at construction time. The fallback backend is always available.
    """

    def __init__(self, index_manager: SearchIndexManager, store: DocumentStore):
        self.primary = PrimaryIndexBackend(index_manager)
        self.fallback = FallbackStoreBackend(store)
        self.active: SearchBackend = self.primary if index_manager.is_connected else self.fallback

    @property
    def mode(self) -> SearchMode:
        return self.active.mode
