from sqlalchemy import JSON, Boolean, Column, Float, Text
from talentsearch.database import Base
from talentsearch.schemas.job import JobCreate, JobDocument, JobLocation, SalaryRange


class Job(Base):
    __tablename__ = "jobs"

    id = Column(Text, primary_key=True)
    position = Column(Text, nullable=False)
    company = Column(Text, nullable=False)
    description = Column(Text, nullable=False, default="")
    requirements = Column(JSON, nullable=False, default=list)
    responsibilities = Column(JSON, nullable=False, default=list)
    location_city = Column(Text)
    location_state = Column(Text)
    location_country = Column(Text)
    location_remote = Column(Boolean, nullable=False, default=False)
    location_type = Column(Text, nullable=False, default="onsite")
    salary_min = Column(Float)
    salary_max = Column(Float)
    salary_currency = Column(Text)
    salary_period = Column(Text)
    job_type = Column(Text, nullable=False)
    experience_level = Column(Text, nullable=False)
    categories = Column(JSON, nullable=False, default=list)
    tags = Column(JSON, nullable=False, default=list)
    created_by = Column(Text, nullable=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    def apply(self, data: JobCreate):
        """Copy validated fields onto the row, flattening location and salary."""
        self.position = data.position
        self.company = data.company
        self.description = data.description
        self.requirements = list(data.requirements)
        self.responsibilities = list(data.responsibilities)
        self.location_city = data.location.city
        self.location_state = data.location.state
        self.location_country = data.location.country
        self.location_remote = data.location.remote
        self.location_type = data.location.type
        salary = data.salary
        self.salary_min = salary.min if salary else None
        self.salary_max = salary.max if salary else None
        self.salary_currency = salary.currency if salary else None
        self.salary_period = salary.period if salary else None
        self.job_type = data.job_type
        self.experience_level = data.experience_level
        self.categories = list(data.categories)
        self.tags = list(data.tags)

    def to_document(self) -> JobDocument:
        salary = None
        if self.salary_currency is not None:
            salary = SalaryRange(
                min=self.salary_min,
                max=self.salary_max,
                currency=self.salary_currency,
                period=self.salary_period,
            )
        return JobDocument(
            id=self.id,
            position=self.position,
            company=self.company,
            description=self.description or "",
            requirements=self.requirements or [],
            responsibilities=self.responsibilities or [],
            location=JobLocation(
                city=self.location_city,
                state=self.location_state,
                country=self.location_country,
                remote=bool(self.location_remote),
                type=self.location_type,
            ),
            salary=salary,
            job_type=self.job_type,
            experience_level=self.experience_level,
            categories=self.categories or [],
            tags=self.tags or [],
            created_by=self.created_by,
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
