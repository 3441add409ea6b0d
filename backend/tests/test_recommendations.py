from talentsearch.schemas.applicant import ApplicantDocument
from talentsearch.schemas.job import JobDocument
from talentsearch.services.recommendation_engine import candidate_query_for_job, job_query_for_applicant

STAMP = "2024-01-01T00:00:00.000000Z"


def _profile(**fields):
    return ApplicantDocument(id="p-1", user_id="u-1", created_at=STAMP, updated_at=STAMP, **fields)


def _job(**fields):
    defaults = {"position": "Engineer", "company": "Acme"}
    defaults.update(fields)
    return JobDocument(id="j-1", created_by="e-1", created_at=STAMP, updated_at=STAMP, **defaults)


class TestJobQueryForApplicant:
    def test_collects_skills_and_titles(self):
        profile = _profile(
            skills=[{"name": "Python"}, {"name": "python"}, {"name": " SQL "}],
            work_experience=[{"position": "Backend Engineer", "company": "Initech"}],
            preferred_job_types=["contract"],
            is_remote_only=True,
        )
        rec = job_query_for_applicant(profile, limit=5)
        assert rec.skills == ["Python", "SQL"]
        assert rec.titles == ["Backend Engineer"]
        assert rec.remote_only is True
        assert rec.job_types == ["contract"]
        assert rec.limit == 5
        assert not rec.is_empty

    def test_empty_profile(self):
        rec = job_query_for_applicant(_profile())
        assert rec.is_empty
        assert rec.remote_only is False


class TestCandidateQueryForJob:
    def test_onsite_job_excludes_remote_only(self):
        rec = candidate_query_for_job(_job(requirements=["Python"], responsibilities=["Ship"]))
        assert rec.requirements == ["Python"]
        assert rec.responsibilities == ["Ship"]
        assert rec.position == "Engineer"
        assert rec.exclude_remote_only is True

    def test_remote_job_keeps_everyone(self):
        rec = candidate_query_for_job(_job(location={"remote": True, "type": "remote"}))
        assert rec.exclude_remote_only is False

    def test_blank_job_is_empty(self):
        rec = candidate_query_for_job(_job(position="  "))
        assert rec.is_empty
