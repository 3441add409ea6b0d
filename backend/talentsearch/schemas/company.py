from pydantic import Field

from talentsearch.schemas.base import ApiModel


class CompanyLocation(ApiModel):
    city: str | None = None
    state: str | None = None
    country: str | None = None


class CompanyCreate(ApiModel):
    name: str
    description: str | None = None
    industry: list[str] = []
    location: CompanyLocation = Field(default_factory=CompanyLocation)
    website: str | None = None
    size: str | None = None
    founded: int | None = None
    specialties: list[str] = []


class CompanyUpdate(ApiModel):
    name: str | None = None
    description: str | None = None
    industry: list[str] | None = None
    location: CompanyLocation | None = None
    website: str | None = None
    size: str | None = None
    founded: int | None = None
    specialties: list[str] | None = None


class CompanyDocument(CompanyCreate):
    id: str
    created_by: str
    created_at: str
    updated_at: str
