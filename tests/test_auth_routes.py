"""
Tests for registration, login and identity resolution.
"""
from sqlalchemy import select

from placement_portal.core.auth import create_access_token
from placement_portal.models import Organization, User


def register(client, **overrides):
    payload = {"name": "Meera Nair", "email": "meera@campus.edu", "password": "s3cure-pass"}
    payload.update(overrides)
    return client.post("/api/auth/register", json=payload)


def test_register_student(client):
    response = register(client)

    assert response.status_code == 201
    user = response.json()["user"]
    assert user["email"] == "meera@campus.edu"
    assert user["role"] == "STUDENT"
    assert "passwordHash" not in user


def test_register_organization_creates_organization(client, db):
    response = register(client, role="ORGANIZATION", organizationName="Initech")

    assert response.status_code == 201
    organization_id = response.json()["user"]["organizationId"]
    assert db.get(Organization, organization_id).name == "Initech"


def test_register_organization_requires_name(client):
    response = register(client, role="ORGANIZATION")

    assert response.status_code == 400


def test_admin_cannot_self_register(client, db):
    response = register(client, role="ADMIN")

    assert response.status_code == 403
    assert db.scalars(select(User)).all() == []


def test_duplicate_email_conflicts(client):
    register(client)
    response = register(client, email="MEERA@campus.edu")

    assert response.status_code == 409
    assert response.json() == {"message": "Email already registered"}


def test_register_missing_fields(client):
    response = client.post("/api/auth/register", json={"email": "x@campus.edu"})

    assert response.status_code == 400
    assert response.json()["message"] == "Missing required fields"


def test_login_and_me(client):
    register(client)
    login = client.post("/api/auth/login", json={"email": "meera@campus.edu", "password": "s3cure-pass"})

    assert login.status_code == 200
    token = login.json()["accessToken"]
    assert login.json()["tokenType"] == "bearer"

    me = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})
    assert me.status_code == 200
    assert me.json()["user"]["name"] == "Meera Nair"


def test_login_wrong_password(client):
    register(client)
    response = client.post("/api/auth/login", json={"email": "meera@campus.edu", "password": "wrong-pass"})

    assert response.status_code == 401
    assert response.json() == {"message": "Invalid email or password"}


def test_me_requires_token(client):
    response = client.get("/api/auth/me")

    assert response.status_code == 401


def test_token_for_deleted_user_is_not_found(client):
    token = create_access_token({"sub": "424242"})

    response = client.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 404
    assert response.json() == {"message": "User not found"}


def test_role_claim_in_token_is_ignored(client, factory):
    student = factory.student()
    token = create_access_token({"sub": str(student.id), "role": "ADMIN"})

    response = client.patch(
        "/api/applications/1", json={"status": "SELECTED"}, headers={"Authorization": f"Bearer {token}"}
    )

    assert response.status_code == 403


def test_role_change_takes_effect_on_next_request(client, db, factory):
    user = factory.student()
    headers = factory.headers(user)
    user.role = "ADMIN"
    db.commit()

    response = client.patch("/api/applications/1", json={"status": "SELECTED"}, headers=headers)

    # Now an admin: passes the role check and reaches the lookup
    assert response.status_code == 404


def test_change_password(client, factory):
    student = factory.student()
    headers = factory.headers(student)
    email = student.email

    response = client.put(
        "/api/user/password",
        json={"currentPassword": factory.password, "newPassword": "another-pass"},
        headers=headers,
    )
    assert response.status_code == 200

    login = client.post("/api/auth/login", json={"email": email, "password": "another-pass"})
    assert login.status_code == 200


def test_change_password_wrong_current(client, factory):
    student = factory.student()

    response = client.put(
        "/api/user/password",
        json={"currentPassword": "not-it", "newPassword": "another-pass"},
        headers=factory.headers(student),
    )

    assert response.status_code == 400
    assert response.json() == {"message": "Current password is incorrect"}
