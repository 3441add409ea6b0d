def _job_payload(**overrides):
    payload = {
        "position": "Software Engineer",
        "company": "Acme Corp",
        "description": "Build APIs in Python",
        "requirements": ["Python", "SQL"],
        "responsibilities": ["Ship features"],
        "location": {"city": "Dublin", "country": "Ireland", "remote": False, "type": "onsite"},
        "salary": {"min": 50000, "max": 70000},
        "jobType": "full-time",
        "experienceLevel": "mid-level",
        "categories": ["engineering"],
    }
    payload.update(overrides)
    return payload


class TestJobsCRUD:
    def test_create_job(self, client, auth):
        r = client.post("/api/v1/jobs", json=_job_payload(), headers=auth("employer"))
        assert r.status_code == 201
        data = r.json()
        assert data["position"] == "Software Engineer"
        assert data["company"] == "Acme Corp"
        assert data["createdBy"] == "employer-1"
        assert data["salary"]["currency"] == "USD"
        assert data["location"]["remote"] is False

    def test_create_job_accepts_title_alias(self, client, auth):
        payload = _job_payload()
        del payload["position"]
        payload["title"] = "Data Engineer"
        r = client.post("/api/v1/jobs", json=payload, headers=auth("employer"))
        assert r.status_code == 201
        assert r.json()["position"] == "Data Engineer"

    def test_applicant_cannot_create_job(self, client, auth):
        r = client.post("/api/v1/jobs", json=_job_payload(), headers=auth("applicant"))
        assert r.status_code == 403

    def test_create_requires_token(self, client):
        r = client.post("/api/v1/jobs", json=_job_payload())
        assert r.status_code == 401

    def test_get_job(self, client, auth):
        job_id = client.post("/api/v1/jobs", json=_job_payload(), headers=auth("employer")).json()["id"]

        r = client.get(f"/api/v1/jobs/{job_id}")
        assert r.status_code == 200
        assert r.json()["id"] == job_id

    def test_update_job(self, client, auth):
        h = auth("employer")
        created = client.post("/api/v1/jobs", json=_job_payload(), headers=h).json()

        r = client.put(f"/api/v1/jobs/{created['id']}", json={"position": "Staff Engineer"}, headers=h)
        assert r.status_code == 200
        data = r.json()
        assert data["position"] == "Staff Engineer"
        assert data["company"] == "Acme Corp"
        assert data["requirements"] == ["Python", "SQL"]
        assert data["updatedAt"] >= created["updatedAt"]

    def test_update_by_other_employer_forbidden(self, client, auth):
        job_id = client.post("/api/v1/jobs", json=_job_payload(), headers=auth("employer")).json()["id"]

        r = client.put(f"/api/v1/jobs/{job_id}", json={"position": "X"}, headers=auth("employer", "employer-2"))
        assert r.status_code == 403

    def test_admin_can_update_any_job(self, client, auth):
        job_id = client.post("/api/v1/jobs", json=_job_payload(), headers=auth("employer")).json()["id"]

        r = client.put(f"/api/v1/jobs/{job_id}", json={"company": "Globex"}, headers=auth("admin"))
        assert r.status_code == 200
        assert r.json()["company"] == "Globex"

    def test_delete_job(self, client, auth):
        h = auth("employer")
        job_id = client.post("/api/v1/jobs", json=_job_payload(), headers=h).json()["id"]

        r = client.delete(f"/api/v1/jobs/{job_id}", headers=h)
        assert r.status_code == 200

        r = client.get(f"/api/v1/jobs/{job_id}")
        assert r.status_code == 404

    def test_unknown_job_returns_404(self, client, auth):
        r = client.put("/api/v1/jobs/missing", json={"position": "X"}, headers=auth("admin"))
        assert r.status_code == 404


class TestJobMirroring:
    def test_create_indexes_job(self, indexed_client, es_client, auth):
        r = indexed_client.post("/api/v1/jobs", json=_job_payload(), headers=auth("employer"))
        assert r.status_code == 201

        es_client.index.assert_called_once()
        kwargs = es_client.index.call_args.kwargs
        assert kwargs["index"] == "jobs"
        assert kwargs["id"] == r.json()["id"]
        assert kwargs["document"]["position"] == "Software Engineer"
        assert kwargs["document"]["location"]["remote"] is False
        assert "id" not in kwargs["document"]

    def test_update_reindexes_job(self, indexed_client, es_client, auth):
        h = auth("employer")
        job_id = indexed_client.post("/api/v1/jobs", json=_job_payload(), headers=h).json()["id"]

        indexed_client.put(f"/api/v1/jobs/{job_id}", json={"position": "Lead"}, headers=h)
        assert es_client.index.call_count == 2
        assert es_client.index.call_args.kwargs["document"]["position"] == "Lead"

    def test_delete_removes_from_index(self, indexed_client, es_client, auth):
        h = auth("employer")
        job_id = indexed_client.post("/api/v1/jobs", json=_job_payload(), headers=h).json()["id"]

        indexed_client.delete(f"/api/v1/jobs/{job_id}", headers=h)
        es_client.delete.assert_called_once_with(index="jobs", id=job_id)

    def test_indexing_failure_does_not_fail_write(self, indexed_client, es_client, auth):
        es_client.index.side_effect = RuntimeError("cluster unavailable")

        r = indexed_client.post("/api/v1/jobs", json=_job_payload(), headers=auth("employer"))
        assert r.status_code == 201
        assert indexed_client.get(f"/api/v1/jobs/{r.json()['id']}").status_code == 200

