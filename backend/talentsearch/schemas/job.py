from typing import Literal

from pydantic import AliasChoices, Field

from talentsearch.schemas.base import ApiModel

JobType = Literal["full-time", "part-time", "contract", "internship", "temporary"]
ExperienceLevel = Literal["entry", "mid-level", "senior", "executive"]
LocationType = Literal["onsite", "remote", "hybrid"]
SalaryPeriod = Literal["hourly", "daily", "weekly", "monthly", "yearly"]


class JobLocation(ApiModel):
    city: str | None = None
    state: str | None = None
    country: str | None = None
    remote: bool = False
    type: LocationType = "onsite"


class SalaryRange(ApiModel):
    min: float | None = None
    max: float | None = None
    currency: str = "USD"
    period: SalaryPeriod = "yearly"


class JobCreate(ApiModel):
    position: str = Field(validation_alias=AliasChoices("position", "title"))
    company: str
    description: str = ""
    requirements: list[str] = []
    responsibilities: list[str] = []
    location: JobLocation = Field(default_factory=JobLocation)
    salary: SalaryRange | None = None
    job_type: JobType = "full-time"
    experience_level: ExperienceLevel = "mid-level"
    categories: list[str] = []
    tags: list[str] = []


class JobUpdate(ApiModel):
    position: str | None = Field(default=None, validation_alias=AliasChoices("position", "title"))
    company: str | None = None
    description: str | None = None
    requirements: list[str] | None = None
    responsibilities: list[str] | None = None
    location: JobLocation | None = None
    salary: SalaryRange | None = None
    job_type: JobType | None = None
    experience_level: ExperienceLevel | None = None
    categories: list[str] | None = None
    tags: list[str] | None = None


class JobDocument(JobCreate):
    id: str
    created_by: str
    created_at: str
    updated_at: str


class JobHit(JobDocument):
    score: float | None = None
