from sqlalchemy import JSON, Column, Integer, Text
from talentsearch.database import Base
from talentsearch.schemas.company import CompanyCreate, CompanyDocument, CompanyLocation


class Company(Base):
    __tablename__ = "companies"

    id = Column(Text, primary_key=True)
    name = Column(Text, nullable=False)
    description = Column(Text)
    industry = Column(JSON, nullable=False, default=list)
    location_city = Column(Text)
    location_state = Column(Text)
    location_country = Column(Text)
    website = Column(Text)
    size = Column(Text)
    founded = Column(Integer)
    specialties = Column(JSON, nullable=False, default=list)
    created_by = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    def apply(self, data: CompanyCreate):
        self.name = data.name
        self.description = data.description
        self.industry = list(data.industry)
        self.location_city = data.location.city
        self.location_state = data.location.state
        self.location_country = data.location.country
        self.website = data.website
        self.size = data.size
        self.founded = data.founded
        self.specialties = list(data.specialties)

    def to_document(self) -> CompanyDocument:
        return CompanyDocument(
            id=self.id,
            name=self.name,
            description=self.description,
            industry=self.industry or [],
            location=CompanyLocation(
                city=self.location_city,
                state=self.location_state,
                country=self.location_country,
            ),
            website=self.website,
            size=self.size,
            founded=self.founded,
            specialties=self.specialties or [],
            created_by=self.created_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
