"""
Test suite for the company repository.
"""

import pytest
from app.core.database import execute
from app.core.errors import Conflict, InvalidInput, NotFound
from app.crud import company as company_crud


NEW_COMPANY = {
    "handle": "new",
    "name": "New",
    "description": "New Description",
    "numEmployees": 1,
    "logoUrl": "http://new.img",
}


class TestCompanyCreate:

    def test_create(self, db_session):
        company = company_crud.create(db_session, NEW_COMPANY)

        assert company == NEW_COMPANY
        rows = execute(db_session, "SELECT handle, num_employees, logo_url FROM companies WHERE handle = $1", ["new"])
        assert [tuple(r) for r in rows] == [("new", 1, "http://new.img")]

    def test_duplicate(self, db_session):
        company_crud.create(db_session, NEW_COMPANY)

        with pytest.raises(Conflict):
            company_crud.create(db_session, NEW_COMPANY)

    def test_duplicate_name(self, db_session, companies):
        with pytest.raises(Conflict):
            company_crud.create(db_session, {**NEW_COMPANY, "name": "C1"})

        assert execute(db_session, "SELECT handle FROM companies WHERE handle = 'new'") == []


class TestCompanyFindAll:

    def test_no_filter(self, db_session, companies):
        assert company_crud.find_all(db_session, {}) == companies

    def test_name(self, db_session, companies):
        assert [c["handle"] for c in company_crud.find_all(db_session, {"name": "c2"})] == ["c2"]

    def test_employee_range(self, db_session, companies):
        found = company_crud.find_all(db_session, {"minEmployees": 2, "maxEmployees": 3})

        assert [c["handle"] for c in found] == ["c2", "c3"]

    def test_inverted_range(self, db_session, companies):
        with pytest.raises(InvalidInput):
            company_crud.find_all(db_session, {"minEmployees": 3, "maxEmployees": 2})


class TestCompanyGet:

    def test_without_jobs_omits_key(self, db_session, companies):
        company = company_crud.get(db_session, "c2")

        assert company == companies[1]
        assert "jobs" not in company

    def test_with_jobs(self, db_session, jobs):
        company = company_crud.get(db_session, "c1")

        assert company["jobs"] == [
            {"id": jobs[0]["id"], "title": "j1", "salary": 100000, "equity": "0"},
            {"id": jobs[1]["id"], "title": "j2", "salary": 120000, "equity": "0.1"},
        ]

    def test_not_found(self, db_session):
        with pytest.raises(NotFound):
            company_crud.get(db_session, "nope")


class TestCompanyUpdate:

    def test_update(self, db_session, companies):
        company = company_crud.update(db_session, "c1", {"name": "New", "numEmployees": 10})

        assert company == {**companies[0], "name": "New", "numEmployees": 10}

    def test_update_null_field(self, db_session, companies):
        company = company_crud.update(db_session, "c1", {"numEmployees": None, "logoUrl": None})

        assert company["numEmployees"] is None
        assert company["logoUrl"] is None

    def test_rename_to_taken_name(self, db_session, companies):
        with pytest.raises(Conflict):
            company_crud.update(db_session, "c2", {"name": "C1"})

        assert company_crud.get(db_session, "c2") == companies[1]

    def test_handle_not_updatable(self, db_session, companies):
        with pytest.raises(InvalidInput):
            company_crud.update(db_session, "c1", {"handle": "c1-new"})

    def test_empty(self, db_session, companies):
        with pytest.raises(InvalidInput):
            company_crud.update(db_session, "c1", {})

    def test_not_found(self, db_session):
        with pytest.raises(NotFound):
            company_crud.update(db_session, "nope", {"name": "x"})


class TestCompanyRemove:

    def test_remove_cascades_to_jobs(self, db_session, jobs):
        company_crud.remove(db_session, "c1")

        assert execute(db_session, "SELECT handle FROM companies WHERE handle = 'c1'") == []
        assert execute(db_session, "SELECT id FROM jobs WHERE company_handle = 'c1'") == []

    def test_not_found(self, db_session):
        with pytest.raises(NotFound):
            company_crud.remove(db_session, "nope")
