from unittest.mock import MagicMock

import pytest

from talentsearch.schemas.applicant import ApplicantDocument
from talentsearch.services.index_manager import SearchIndexManager
from talentsearch.services.retrieval_service import RetrievalService
from talentsearch.services.search_backends import BackendSelector
from talentsearch.services.search_types import InvalidSearchQuery, JobFilters, SearchMode

STAMP = "2024-01-01T00:00:00.000000Z"


@pytest.fixture
def connected(es_client):
    manager = SearchIndexManager(es_client)
    manager.connect()
    return manager


class TestBackendSelection:
    def test_connected_index_is_primary(self, connected):
        selector = BackendSelector(connected, MagicMock())
        assert selector.mode is SearchMode.PRIMARY_INDEX
        assert selector.active is selector.primary

    def test_disconnected_index_uses_store(self):
        selector = BackendSelector(SearchIndexManager(None), MagicMock())
        assert selector.mode is SearchMode.FALLBACK_STORE
        assert selector.active is selector.fallback


class TestRetrievalService:
    def test_invalid_pagination_raises(self, connected, es_client):
        service = RetrievalService(BackendSelector(connected, MagicMock()))
        with pytest.raises(InvalidSearchQuery):
            service.search_jobs(page=0)
        with pytest.raises(InvalidSearchQuery):
            service.search_applicants(page_size=0)
        es_client.search.assert_not_called()

    def test_backend_failure_is_empty_result(self, connected, es_client):
        es_client.search.side_effect = RuntimeError("timeout")
        service = RetrievalService(BackendSelector(connected, MagicMock()))

        result = service.search_jobs("python", JobFilters(remote=True))
        assert result.total == 0
        assert result.hits == []
        assert result.mode is SearchMode.PRIMARY_INDEX

    def test_store_failure_is_empty_result(self):
        store = MagicMock()
        store.find_applicants.side_effect = RuntimeError("database is locked")
        service = RetrievalService(BackendSelector(SearchIndexManager(None), store))

        result = service.search_applicants("python")
        assert result.total == 0
        assert result.mode is SearchMode.FALLBACK_STORE

    def test_hits_carry_id_and_score(self, connected, es_client):
        es_client.search.return_value = {
            "hits": {"total": {"value": 1}, "hits": [{"_id": "j-9", "_score": 2.0, "_source": {"position": "Dev"}}]}
        }
        service = RetrievalService(BackendSelector(connected, MagicMock()))

        result = service.search_jobs("dev")
        assert result.hits[0].document == {"position": "Dev", "id": "j-9"}
        assert result.hits[0].score == 2.0
        assert result.total_pages(10) == 1

    def test_recommendation_total_is_hit_count(self, connected, es_client):
        es_client.search.return_value = {
            "hits": {"total": {"value": 40}, "hits": [{"_id": "j-1", "_score": 1.0, "_source": {}}]}
        }
        profile = ApplicantDocument(
            id="p-1", user_id="u-1", created_at=STAMP, updated_at=STAMP, skills=[{"name": "Go"}]
        )
        service = RetrievalService(BackendSelector(connected, MagicMock()))

        result = service.get_job_recommendations(profile, limit=5)
        assert result.total == 1
        assert es_client.search.call_args.kwargs["size"] == 5

    def test_empty_profile_skips_backend(self, connected, es_client):
        profile = ApplicantDocument(id="p-1", user_id="u-1", created_at=STAMP, updated_at=STAMP)
        service = RetrievalService(BackendSelector(connected, MagicMock()))

        assert service.get_job_recommendations(profile).total == 0
        es_client.search.assert_not_called()
