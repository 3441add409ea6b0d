from typing import Literal

from talentsearch.schemas.base import ApiModel
from talentsearch.schemas.job import JobType

SkillLevel = Literal["beginner", "intermediate", "advanced", "expert"]


class Skill(ApiModel):
    name: str
    level: SkillLevel = "intermediate"


class WorkExperience(ApiModel):
    position: str
    company: str
    description: str | None = None


class Education(ApiModel):
    institution: str
    degree: str
    field: str


class ApplicantProfileUpdate(ApiModel):
    headline: str | None = None
    summary: str | None = None
    skills: list[Skill] = []
    work_experience: list[WorkExperience] = []
    education: list[Education] = []
    preferred_job_types: list[JobType] = []
    preferred_locations: list[str] = []
    preferred_industries: list[str] = []
    is_remote_only: bool = False


class ApplicantDocument(ApplicantProfileUpdate):
    id: str
    user_id: str
    created_at: str
    updated_at: str


class ApplicantHit(ApplicantDocument):
    score: float | None = None
