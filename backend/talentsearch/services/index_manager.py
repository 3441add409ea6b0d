import logging
from typing import Any, Iterable

from elasticsearch import Elasticsearch
from elasticsearch.helpers import bulk

from talentsearch.config import Settings
from talentsearch.schemas.applicant import ApplicantDocument
from talentsearch.schemas.company import CompanyDocument
from talentsearch.schemas.job import JobDocument
from talentsearch.services.index_mappings import MAPPINGS
from talentsearch.services.search_types import DocumentKind

logger = logging.getLogger(__name__)


def project_job(job: JobDocument) -> dict[str, Any]:
    return job.model_dump(mode="json", exclude={"id"})


def project_applicant(applicant: ApplicantDocument) -> dict[str, Any]:
    return applicant.model_dump(mode="json", exclude={"id"})


def project_company(company: CompanyDocument) -> dict[str, Any]:
    return company.model_dump(mode="json", exclude={"id"})


class SearchIndexManager:
    """
    Owns the search engine's index schema and mirrors canonical writes.

    Connectivity is decided once by connect(); while disconnected every
    index operation is a no-op. Mirroring errors are logged and swallowed
    so they never reach the write path.
    """

    def __init__(self, client: Elasticsearch | None, index_prefix: str = ""):
        self._client = client
        self._index_prefix = index_prefix
        self.is_connected = False

    @classmethod
    def from_settings(cls, settings: Settings) -> "SearchIndexManager":
        if not settings.elasticsearch_enabled:
            return cls(None, settings.index_prefix)
        basic_auth = None
        if settings.elasticsearch_username:
            basic_auth = (settings.elasticsearch_username, settings.elasticsearch_password or "")
        client = Elasticsearch(settings.elasticsearch_url, basic_auth=basic_auth)
        return cls(client, settings.index_prefix)

    def index_name(self, kind: DocumentKind) -> str:
        return f"{self._index_prefix}{kind.value}"

    def connect(self) -> bool:
        if self._client is None:
            logger.info("Search engine disabled; serving searches from the document store.")
            self.is_connected = False
            return False
        try:
            info = self._client.info()
            logger.info("Elasticsearch connected: %s", info.get("name", "unknown"))
            self.ensure_indices()
        except Exception as exc:
            logger.error("Elasticsearch connection failed: %s", exc)
            self.is_connected = False
            return False
        self.is_connected = True
        return True

    def ensure_indices(self):
        """Create each missing index with its mapping; existing indices are left untouched."""
        for kind, mapping in MAPPINGS.items():
            index = self.index_name(kind)
            if self._client.indices.exists(index=index):
                continue
            self._client.indices.create(index=index, mappings=mapping)
            logger.info("Index created: %s", index)

    def close(self):
        if self._client is not None:
            self._client.close()

    # ------------------------------------------------------------------
    # Document lifecycle
    # ------------------------------------------------------------------

    def index_document(self, kind: DocumentKind, doc_id: str, fields: dict[str, Any]):
        if not self.is_connected:
            return
        try:
            self._client.index(index=self.index_name(kind), id=doc_id, document=fields)
        except Exception as exc:
            logger.error("Failed to index %s document %s: %s", kind.value, doc_id, exc)

    def delete_document(self, kind: DocumentKind, doc_id: str):
        if not self.is_connected:
            return
        try:
            self._client.delete(index=self.index_name(kind), id=doc_id)
        except Exception as exc:
            logger.error("Failed to delete %s document %s: %s", kind.value, doc_id, exc)

    def index_job(self, job: JobDocument):
        self.index_document(DocumentKind.JOBS, job.id, project_job(job))

    def index_applicant(self, applicant: ApplicantDocument):
        self.index_document(DocumentKind.APPLICANTS, applicant.id, project_applicant(applicant))

    def index_company(self, company: CompanyDocument):
        self.index_document(DocumentKind.COMPANIES, company.id, project_company(company))

    def delete_job(self, job_id: str):
        self.delete_document(DocumentKind.JOBS, job_id)

    def delete_applicant(self, applicant_id: str):
        self.delete_document(DocumentKind.APPLICANTS, applicant_id)

    def delete_company(self, company_id: str):
        self.delete_document(DocumentKind.COMPANIES, company_id)

    def reindex(self, kind: DocumentKind, documents: Iterable[tuple[str, dict[str, Any]]]) -> int:
        """Bulk-upsert (id, fields) pairs. Returns the number of documents indexed."""
        if not self.is_connected:
            return 0
        actions = (
            {"_op_type": "index", "_index": self.index_name(kind), "_id": doc_id, "_source": fields}
            for doc_id, fields in documents
        )
        try:
            indexed, errors = bulk(self._client, actions, raise_on_error=False)
        except Exception as exc:
            logger.error("Reindex of %s failed: %s", kind.value, exc)
            return 0
        if errors:
            logger.error("Reindex of %s finished with %d errors", kind.value, len(errors))
        return indexed

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def search(self, kind: DocumentKind, body: dict[str, Any]):
        """Run a search request body. Errors propagate to the caller."""
        return self._client.search(index=self.index_name(kind), **body)
