"""
Request-scoped query and result types shared by the translator, the
backends and the retrieval service.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class SearchMode(str, Enum):
    PRIMARY_INDEX = "primary-index"
    FALLBACK_STORE = "fallback-store"


class DocumentKind(str, Enum):
    JOBS = "jobs"
    APPLICANTS = "applicants"
    COMPANIES = "companies"


class InvalidSearchQuery(ValueError):
    pass


@dataclass
class JobFilters:
    job_type: str | None = None
    experience_level: str | None = None
    remote: bool | None = None
    location_type: str | None = None
    location: str | None = None
    min_salary: float | None = None
    max_salary: float | None = None
    categories: list[str] = field(default_factory=list)


@dataclass
class ApplicantFilters:
    skills: list[str] = field(default_factory=list)
    job_types: list[str] = field(default_factory=list)
    remote: bool | None = None


@dataclass
class SearchQuery:
    free_text: str = ""
    filters: JobFilters | ApplicantFilters = field(default_factory=JobFilters)
    page: int = 1
    page_size: int = 10

    def __post_init__(self):
        self.free_text = (self.free_text or "").strip()

    def validate(self):
        if not isinstance(self.page, int) or self.page < 1:
            raise InvalidSearchQuery("Invalid pagination parameters")
        if not isinstance(self.page_size, int) or self.page_size < 1:
            raise InvalidSearchQuery("Invalid pagination parameters")

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


@dataclass
class JobRecommendationQuery:
    """Implicit job query derived from an applicant profile."""

    skills: list[str]
    titles: list[str]
    remote_only: bool = False
    job_types: list[str] = field(default_factory=list)
    limit: int = 10

    @property
    def is_empty(self) -> bool:
        return not self.skills and not self.titles


@dataclass
class CandidateRecommendationQuery:
    """Implicit applicant query derived from a job's requirements."""

    requirements: list[str]
    responsibilities: list[str]
    position: str
    exclude_remote_only: bool = False
    limit: int = 10

    @property
    def is_empty(self) -> bool:
        return not self.requirements and not self.responsibilities and not self.position.strip()


@dataclass
class SearchHit:
    document: dict[str, Any]
    score: float | None = None


@dataclass
class SearchResult:
    total: int
    hits: list[SearchHit]
    mode: SearchMode

    @classmethod
    def empty(cls, mode: SearchMode) -> "SearchResult":
        return cls(total=0, hits=[], mode=mode)

    def total_pages(self, page_size: int) -> int:
        return math.ceil(self.total / page_size)
