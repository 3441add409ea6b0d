"""
Derive implicit queries from profiles and jobs.

Recommendations are a pure ranking over the jobs or applicants that pass
the hard filters; excluding jobs an applicant already applied to is left
to application tracking.
"""
from talentsearch.schemas.applicant import ApplicantDocument
from talentsearch.schemas.job import JobDocument
from talentsearch.services.search_types import CandidateRecommendationQuery, JobRecommendationQuery


def _distinct(values) -> list[str]:
    result: list[str] = []
    seen: set[str] = set()
    for value in values:
        value = (value or "").strip()
        if value and value.lower() not in seen:
            seen.add(value.lower())
            result.append(value)
    return result


def job_query_for_applicant(profile: ApplicantDocument, limit: int = 10) -> JobRecommendationQuery:
    return JobRecommendationQuery(
        skills=_distinct(skill.name for skill in profile.skills),
        titles=_distinct(exp.position for exp in profile.work_experience),
        remote_only=profile.is_remote_only,
        job_types=list(profile.preferred_job_types),
        limit=limit,
    )


def candidate_query_for_job(job: JobDocument, limit: int = 10) -> CandidateRecommendationQuery:
    return CandidateRecommendationQuery(
        requirements=_distinct(job.requirements),
        responsibilities=_distinct(job.responsibilities),
        position=job.position.strip(),
        exclude_remote_only=not job.location.remote,
        limit=limit,
    )
