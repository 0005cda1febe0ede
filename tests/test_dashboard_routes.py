"""
Tests for notifications, events and the dashboard.
"""
from datetime import datetime, timedelta

import pytest

from placement_portal.models import Event


@pytest.fixture
def scene(factory):
    org = factory.organization("Acme")
    org_user = factory.org_user(org)
    student = factory.student(name="Asha")
    job = factory.job_offer(org)
    factory.job_offer(org, title="Closed role", status="closed")
    return {
        "org_user_id": org_user.id,
        "student_id": student.id,
        "job_id": job.id,
        "org": factory.headers(org_user),
        "student": factory.headers(student),
        "admin": factory.headers(factory.admin()),
    }


class TestNotifications:

    def test_organization_is_notified_of_application(self, client, scene):
        client.post("/api/applications", json={"jobOfferId": scene["job_id"]}, headers=scene["student"])

        response = client.get("/api/notifications", headers=scene["org"])

        notifications = response.json()["notifications"]
        assert [n["message"] for n in notifications] == ["Asha applied for Software Engineer Intern."]
        assert notifications[0]["read"] is False

    def test_notifications_are_private(self, client, scene):
        client.post("/api/applications", json={"jobOfferId": scene["job_id"]}, headers=scene["student"])

        response = client.get("/api/notifications", headers=scene["student"])

        assert response.json()["notifications"] == []

    def test_admin_sends_notification(self, client, scene):
        response = client.post(
            "/api/notifications",
            json={"userId": scene["student_id"], "message": "Placement talk at 10am"},
            headers=scene["admin"],
        )
        assert response.status_code == 201

        notifications = client.get("/api/notifications", headers=scene["student"]).json()["notifications"]
        assert [n["message"] for n in notifications] == ["Placement talk at 10am"]

    def test_student_cannot_send(self, client, scene):
        response = client.post(
            "/api/notifications",
            json={"userId": scene["org_user_id"], "message": "hi"},
            headers=scene["student"],
        )

        assert response.status_code == 403

    def test_unknown_recipient(self, client, scene):
        response = client.post(
            "/api/notifications", json={"userId": 9999, "message": "hello"}, headers=scene["admin"]
        )

        assert response.status_code == 404


class TestEvents:

    def test_admin_creates_event(self, client, scene):
        date = (datetime.utcnow() + timedelta(days=3)).isoformat()

        response = client.post(
            "/api/events",
            json={"title": "Pre-placement talk", "date": date, "time": "10:00", "location": "Auditorium"},
            headers=scene["admin"],
        )

        assert response.status_code == 201
        events = client.get("/api/events", headers=scene["student"]).json()["events"]
        assert [e["title"] for e in events] == ["Pre-placement talk"]

    def test_only_admin_creates_events(self, client, scene):
        response = client.post(
            "/api/events", json={"title": "Hack night", "date": "2030-01-01T18:00:00"}, headers=scene["org"]
        )

        assert response.status_code == 403

    def test_past_events_hidden(self, client, db, scene):
        db.add(Event(title="Old fair", date=datetime.utcnow() - timedelta(days=1)))
        db.add(Event(title="Later fair", date=datetime.utcnow() + timedelta(days=10)))
        db.add(Event(title="Sooner fair", date=datetime.utcnow() + timedelta(days=2)))
        db.commit()

        events = client.get("/api/events", headers=scene["student"]).json()["events"]

        assert [e["title"] for e in events] == ["Sooner fair", "Later fair"]


class TestDashboard:

    @pytest.fixture
    def applied(self, client, scene):
        application_id = client.post(
            "/api/applications", json={"jobOfferId": scene["job_id"]}, headers=scene["student"]
        ).json()["application"]["id"]
        client.patch(f"/api/applications/{application_id}", json={"status": "SELECTED"}, headers=scene["org"])
        return application_id

    def test_student_dashboard(self, client, scene, applied):
        body = client.get("/api/dashboard", headers=scene["student"]).json()

        assert body["totalApplications"] == 1
        assert body["selectedApplications"] == 1
        assert body["pendingApplications"] == 0
        assert body["recentApplications"][0]["jobTitle"] == "Software Engineer Intern"
        assert body["recentApplications"][0]["status"] == "selected"
        assert "notifications" in body
        assert "totalJobs" not in body

    def test_organization_dashboard(self, client, scene, applied):
        body = client.get("/api/dashboard", headers=scene["org"]).json()

        assert body["totalApplications"] == 1
        assert body["totalJobs"] == 2
        assert body["activeJobs"] == 1
        assert body["totalStudents"] == 1
        assert body["recentApplications"][0]["studentName"] == "Asha"
        assert "notifications" not in body

    def test_admin_dashboard_spans_organizations(self, client, factory, scene, applied):
        factory.job_offer(factory.organization("Globex"))

        body = client.get("/api/dashboard", headers=scene["admin"]).json()

        assert body["totalJobs"] == 3
        assert body["activeJobs"] == 2
