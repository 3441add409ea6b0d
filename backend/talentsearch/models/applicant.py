from sqlalchemy import JSON, Boolean, Column, Text
from talentsearch.database import Base
from talentsearch.schemas.applicant import ApplicantDocument, ApplicantProfileUpdate


class ApplicantProfile(Base):
    __tablename__ = "applicant_profiles"

    id = Column(Text, primary_key=True)
    user_id = Column(Text, nullable=False, unique=True)
    headline = Column(Text)
    summary = Column(Text)
    skills = Column(JSON, nullable=False, default=list)
    work_experience = Column(JSON, nullable=False, default=list)
    education = Column(JSON, nullable=False, default=list)
    preferred_job_types = Column(JSON, nullable=False, default=list)
    preferred_locations = Column(JSON, nullable=False, default=list)
    preferred_industries = Column(JSON, nullable=False, default=list)
    is_remote_only = Column(Boolean, nullable=False, default=False)
    created_at = Column(Text, nullable=False)
    updated_at = Column(Text, nullable=False)

    def apply(self, data: ApplicantProfileUpdate):
        dumped = data.model_dump()
        for key in (
            "headline",
            "summary",
            "skills",
            "work_experience",
            "education",
            "preferred_job_types",
            "preferred_locations",
            "preferred_industries",
            "is_remote_only",
        ):
            setattr(self, key, dumped[key])

    def to_document(self) -> ApplicantDocument:
        return ApplicantDocument(
            id=self.id,
            user_id=self.user_id,
            headline=self.headline,
            summary=self.summary,
            skills=self.skills or [],
            work_experience=self.work_experience or [],
            education=self.education or [],
            preferred_job_types=self.preferred_job_types or [],
            preferred_locations=self.preferred_locations or [],
            preferred_industries=self.preferred_industries or [],
            is_remote_only=bool(self.is_remote_only),
            created_at=self.created_at,
            updated_at=self.updated_at,
        )
