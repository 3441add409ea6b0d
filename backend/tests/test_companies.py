COMPANY = {
    "name": "Acme Corp",
    "description": "Makes everything",
    "industry": ["manufacturing"],
    "location": {"city": "Cork", "country": "Ireland"},
    "founded": 1949,
}


class TestCompanies:
    def test_create_company(self, client, auth):
        r = client.post("/api/v1/companies", json=COMPANY, headers=auth("employer"))
        assert r.status_code == 201
        data = r.json()
        assert data["name"] == "Acme Corp"
        assert data["location"]["city"] == "Cork"
        assert data["createdBy"] == "employer-1"

    def test_applicant_cannot_create_company(self, client, auth):
        r = client.post("/api/v1/companies", json=COMPANY, headers=auth("applicant"))
        assert r.status_code == 403

    def test_get_company(self, client, auth):
        company_id = client.post("/api/v1/companies", json=COMPANY, headers=auth("employer")).json()["id"]

        r = client.get(f"/api/v1/companies/{company_id}")
        assert r.status_code == 200
        assert r.json()["founded"] == 1949

    def test_update_company(self, client, auth):
        h = auth("employer")
        company_id = client.post("/api/v1/companies", json=COMPANY, headers=h).json()["id"]

        r = client.put(f"/api/v1/companies/{company_id}", json={"website": "https://acme.example"}, headers=h)
        assert r.status_code == 200
        assert r.json()["website"] == "https://acme.example"
        assert r.json()["name"] == "Acme Corp"

    def test_update_by_other_employer_forbidden(self, client, auth):
        company_id = client.post("/api/v1/companies", json=COMPANY, headers=auth("employer")).json()["id"]

        r = client.put(
            f"/api/v1/companies/{company_id}", json={"name": "Hijacked"}, headers=auth("employer", "employer-2")
        )
        assert r.status_code == 403

    def test_delete_company(self, indexed_client, es_client, auth):
        h = auth("employer")
        company_id = indexed_client.post("/api/v1/companies", json=COMPANY, headers=h).json()["id"]
        assert es_client.index.call_args.kwargs["index"] == "companies"

        assert indexed_client.delete(f"/api/v1/companies/{company_id}", headers=h).status_code == 200
        es_client.delete.assert_called_once_with(index="companies", id=company_id)
        assert indexed_client.get(f"/api/v1/companies/{company_id}").status_code == 404
