"""
HTTP tests for /api/applications.
"""
import pytest
from fastapi.testclient import TestClient

from placement_portal.main import app
from placement_portal.services import application_service


@pytest.fixture
def setup(factory):
    org = factory.organization("Acme")
    other_org = factory.organization("Globex")
    data = {
        "org_user": factory.org_user(org),
        "other_org_user": factory.org_user(other_org),
        "student": factory.student(name="Asha"),
        "other_student": factory.student(name="Ravi"),
        "admin": factory.admin(),
        "job": factory.job_offer(org),
        "other_job": factory.job_offer(other_org, title="Data Analyst"),
    }
    data["headers"] = {key: factory.headers(value) for key, value in data.items() if key.endswith(("user", "student", "admin"))}
    data["job_id"] = data["job"].id
    data["other_job_id"] = data["other_job"].id
    return data


def apply(client, setup, who="student", job_key="job_id", **extra):
    payload = {"jobOfferId": setup[job_key], **extra}
    return client.post("/api/applications", json=payload, headers=setup["headers"][who])


class TestCreate:

    def test_student_applies(self, client, setup):
        response = apply(client, setup, resumeUrl="https://cv.example/asha.pdf", coverLetter="Hire me")

        assert response.status_code == 201
        body = response.json()
        assert body["message"] == "Application submitted successfully"
        application = body["application"]
        assert application["status"] == "PENDING"
        assert application["jobOfferId"] == setup["job_id"]
        assert application["resumeUrl"] == "https://cv.example/asha.pdf"
        assert application["coverLetter"] == "Hire me"
        assert application["user"]["name"] == "Asha"
        assert application["jobOffer"]["organization"]["name"] == "Acme"

    def test_duplicate_application_conflicts(self, client, setup):
        assert apply(client, setup).status_code == 201

        response = apply(client, setup)

        assert response.status_code == 409
        assert response.json() == {"message": "You have already applied for this job"}

    def test_missing_job_offer_id(self, client, setup):
        response = client.post("/api/applications", json={}, headers=setup["headers"]["student"])

        assert response.status_code == 400
        assert response.json()["message"] == "Missing required fields"

    def test_unknown_job_offer(self, client, setup):
        response = client.post("/api/applications", json={"jobOfferId": 999}, headers=setup["headers"]["student"])

        assert response.status_code == 404
        assert response.json() == {"message": "Job offer not found"}

    def test_organization_cannot_apply(self, client, setup):
        response = apply(client, setup, who="org_user")

        assert response.status_code == 403

    def test_anonymous_rejected(self, client, setup):
        response = client.post("/api/applications", json={"jobOfferId": setup["job_id"]})

        assert response.status_code == 401
        assert response.json() == {"message": "Unauthorized"}

    def test_invalid_token_rejected(self, client, setup):
        response = client.get("/api/applications", headers={"Authorization": "Bearer not-a-token"})

        assert response.status_code == 401


class TestStatusFlow:

    def test_select_then_student_sees_it(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.patch(
            f"/api/applications/{application_id}",
            json={"status": "SELECTED"},
            headers=setup["headers"]["org_user"],
        )
        assert response.status_code == 200
        assert response.json()["application"]["status"] == "SELECTED"

        response = client.get(f"/api/applications/{application_id}", headers=setup["headers"]["student"])
        assert response.status_code == 200
        assert response.json()["application"]["status"] == "SELECTED"

        response = client.get(f"/api/applications/{application_id}", headers=setup["headers"]["other_org_user"])
        assert response.status_code == 403

    def test_created_application_reads_back(self, client, setup):
        created = apply(client, setup, resumeUrl="https://cv.example/r.pdf").json()["application"]

        response = client.get(f"/api/applications/{created['id']}", headers=setup["headers"]["student"])

        application = response.json()["application"]
        assert application["resumeUrl"] == "https://cv.example/r.pdf"
        assert application["status"] == "PENDING"

    def test_other_organization_cannot_update(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.patch(
            f"/api/applications/{application_id}",
            json={"status": "REJECTED"},
            headers=setup["headers"]["other_org_user"],
        )

        assert response.status_code == 403
        assert response.json() == {"message": "You don't have permission to update this application"}

    def test_student_cannot_update_own(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.patch(
            f"/api/applications/{application_id}",
            json={"status": "SELECTED"},
            headers=setup["headers"]["student"],
        )

        assert response.status_code == 403

    def test_admin_updates_any(self, client, setup):
        application_id = apply(client, setup, job_key="other_job_id").json()["application"]["id"]

        response = client.patch(
            f"/api/applications/{application_id}",
            json={"status": "REJECTED"},
            headers=setup["headers"]["admin"],
        )

        assert response.status_code == 200
        assert response.json()["application"]["status"] == "REJECTED"

    def test_unknown_status_value(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.patch(
            f"/api/applications/{application_id}",
            json={"status": "HIRED"},
            headers=setup["headers"]["admin"],
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request"

    def test_body_validated_before_permission_check(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.patch(
            f"/api/applications/{application_id}",
            json={"status": "HIRED"},
            headers=setup["headers"]["student"],
        )

        assert response.status_code == 400

    def test_missing_application(self, client, setup):
        response = client.patch("/api/applications/555", json={"status": "SELECTED"}, headers=setup["headers"]["admin"])

        assert response.status_code == 404
        assert response.json() == {"message": "Application not found"}


class TestReadScope:

    @pytest.fixture
    def applications(self, client, setup):
        first = apply(client, setup).json()["application"]["id"]
        second = apply(client, setup, who="other_student", job_key="other_job_id").json()["application"]["id"]
        return first, second

    def test_admin_lists_all(self, client, setup, applications):
        response = client.get("/api/applications", headers=setup["headers"]["admin"])

        body = response.json()
        assert body["total"] == 2
        assert {a["id"] for a in body["applications"]} == set(applications)

    def test_organization_lists_own_offers_only(self, client, setup, applications):
        response = client.get("/api/applications", headers=setup["headers"]["org_user"])

        assert [a["id"] for a in response.json()["applications"]] == [applications[0]]

    def test_student_lists_own_only(self, client, setup, applications):
        response = client.get("/api/applications", headers=setup["headers"]["other_student"])

        assert [a["id"] for a in response.json()["applications"]] == [applications[1]]

    def test_filter_by_job_offer(self, client, setup, applications):
        response = client.get(
            "/api/applications", params={"jobOfferId": setup["other_job_id"]}, headers=setup["headers"]["admin"]
        )

        assert [a["id"] for a in response.json()["applications"]] == [applications[1]]

    def test_other_student_cannot_read(self, client, setup, applications):
        response = client.get(f"/api/applications/{applications[0]}", headers=setup["headers"]["other_student"])

        assert response.status_code == 403


class TestDelete:

    def test_applicant_deletes(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.delete(f"/api/applications/{application_id}", headers=setup["headers"]["student"])

        assert response.status_code == 200
        assert response.json()["message"] == "Application deleted successfully"
        response = client.get(f"/api/applications/{application_id}", headers=setup["headers"]["admin"])
        assert response.status_code == 404

    def test_other_student_cannot_delete(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]

        response = client.delete(f"/api/applications/{application_id}", headers=setup["headers"]["other_student"])

        assert response.status_code == 403

    def test_can_reapply_after_delete(self, client, setup):
        application_id = apply(client, setup).json()["application"]["id"]
        client.delete(f"/api/applications/{application_id}", headers=setup["headers"]["student"])

        assert apply(client, setup).status_code == 201


def test_unexpected_error_returns_generic_500(setup, monkeypatch):
    def broken_list(*args, **kwargs):
        raise RuntimeError("database went away")

    monkeypatch.setattr(application_service, "list_applications", broken_list)
    client = TestClient(app, raise_server_exceptions=False)

    response = client.get("/api/applications", headers=setup["headers"]["admin"])

    assert response.status_code == 500
    assert response.json() == {"message": "Internal server error"}
