from talentsearch.models.job import Job
from talentsearch.models.applicant import ApplicantProfile
from talentsearch.models.company import Company

__all__ = ["Job", "ApplicantProfile", "Company"]
