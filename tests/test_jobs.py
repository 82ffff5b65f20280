"""
Test suite for job endpoints.

Tests cover:
- Job creation (auth + validation)
- Job listing with filters
- Job retrieval, update and deletion
- Error envelope
"""

import pytest


class TestJobCreation:
    """Tests for POST /jobs"""

    def test_create_job_success(self, client, companies, user_headers, sample_job_data):
        response = client.post("/jobs", json=sample_job_data, headers=user_headers)

        assert response.status_code == 201
        job = response.json()["job"]
        assert isinstance(job["id"], int)
        assert {k: job[k] for k in sample_job_data} == sample_job_data

    def test_numeric_equity_becomes_string(self, client, companies, user_headers, sample_job_data):
        response = client.post("/jobs", json={**sample_job_data, "equity": 0.1}, headers=user_headers)

        assert response.status_code == 201
        assert response.json()["job"]["equity"] == "0.1"

    def test_unauth_for_anon(self, client, companies, sample_job_data):
        response = client.post("/jobs", json=sample_job_data)

        assert response.status_code == 401
        assert response.json()["error"]["status"] == 401

    def test_bad_token(self, client, companies, sample_job_data):
        response = client.post("/jobs", json=sample_job_data, headers={"Authorization": "Bearer not-a-jwt"})

        assert response.status_code == 401

    def test_missing_fields(self, client, companies, user_headers):
        response = client.post("/jobs", json={"title": "Dev", "salary": 100000}, headers=user_headers)

        assert response.status_code == 400
        assert isinstance(response.json()["error"]["message"], list)

    @pytest.mark.parametrize("override", [
        {"salary": 0},
        {"equity": "1.5"},
        {"equity": "lots"},
        {"title": ""},
        {"id": 5},
    ])
    def test_invalid_data(self, client, companies, user_headers, sample_job_data, override):
        response = client.post("/jobs", json={**sample_job_data, **override}, headers=user_headers)

        assert response.status_code == 400

    def test_unknown_company(self, client, companies, user_headers, sample_job_data):
        response = client.post("/jobs", json={**sample_job_data, "company_handle": "nope"}, headers=user_headers)

        assert response.status_code == 400


class TestJobRetrieval:
    """Tests for GET /jobs and GET /jobs/{id}"""

    def test_list_jobs(self, client, jobs):
        response = client.get("/jobs")

        assert response.status_code == 200
        assert response.json() == {"jobs": jobs}

    def test_list_min_salary(self, client, jobs):
        response = client.get("/jobs", params={"minSalary": 110000})

        assert [j["salary"] for j in response.json()["jobs"]] == [120000]

    def test_list_has_equity(self, client, jobs):
        response = client.get("/jobs", params={"hasEquity": "true"})

        assert [j["title"] for j in response.json()["jobs"]] == ["j2"]

    def test_list_has_equity_false(self, client, jobs):
        response = client.get("/jobs", params={"hasEquity": "false"})

        assert len(response.json()["jobs"]) == 2

    def test_list_title(self, client, jobs):
        response = client.get("/jobs", params={"title": "2"})

        assert [j["title"] for j in response.json()["jobs"]] == ["j2"]

    def test_list_invalid_min_salary(self, client, jobs):
        response = client.get("/jobs", params={"minSalary": "lots"})

        assert response.status_code == 400

    def test_get_job(self, client, jobs):
        response = client.get(f"/jobs/{jobs[0]['id']}")

        assert response.status_code == 200
        assert response.json() == {"job": jobs[0]}

    def test_get_nonexistent_job(self, client):
        response = client.get("/jobs/99999")

        assert response.status_code == 404
        assert "no job" in response.json()["error"]["message"].lower()


class TestJobUpdate:
    """Tests for PATCH /jobs/{id}"""

    def test_update_as_admin(self, client, jobs, admin_headers):
        response = client.patch(f"/jobs/{jobs[0]['id']}", json={"title": "j1-new"}, headers=admin_headers)

        assert response.status_code == 200
        assert response.json() == {"job": {**jobs[0], "title": "j1-new"}}

    def test_forbidden_for_non_admin(self, client, jobs, user_headers):
        response = client.patch(f"/jobs/{jobs[0]['id']}", json={"title": "j1-new"}, headers=user_headers)

        assert response.status_code == 403

    def test_unauth_for_anon(self, client, jobs):
        response = client.patch(f"/jobs/{jobs[0]['id']}", json={"title": "j1-new"})

        assert response.status_code == 401

    def test_not_found(self, client, jobs, admin_headers):
        response = client.patch("/jobs/200", json={"title": "x", "salary": 120000}, headers=admin_headers)

        assert response.status_code == 404

    @pytest.mark.parametrize("body", [
        {"title": ""},
        {"title": None},
        {"company_handle": "c2"},
        {"id": 7, "title": "x"},
        {},
    ])
    def test_bad_request(self, client, jobs, admin_headers, body):
        response = client.patch(f"/jobs/{jobs[0]['id']}", json=body, headers=admin_headers)

        assert response.status_code == 400
        assert client.get(f"/jobs/{jobs[0]['id']}").json() == {"job": jobs[0]}


class TestJobDeletion:
    """Tests for DELETE /jobs/{id}"""

    def test_delete(self, client, jobs, user_headers):
        response = client.delete(f"/jobs/{jobs[1]['id']}", headers=user_headers)

        assert response.json() == {"deleted": jobs[1]["id"]}
        assert client.get(f"/jobs/{jobs[1]['id']}").status_code == 404

    def test_unauth_for_anon(self, client, jobs):
        response = client.delete(f"/jobs/{jobs[1]['id']}")

        assert response.status_code == 401

    def test_not_found(self, client, user_headers):
        response = client.delete("/jobs/10000", headers=user_headers)

        assert response.status_code == 404
