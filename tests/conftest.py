import os

# Must be set before the app package is imported: the engine is built at import time
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET_KEY"] = "test-secret"

import pytest
from fastapi.testclient import TestClient

from placement_portal.core.auth import actor_from_user, create_access_token, hash_password
from placement_portal.db.database import Base, SessionLocal, engine
from placement_portal.main import app
from placement_portal.models import JobOffer, Organization, Role, User

PASSWORD = "password123"
_password_hash = None


def password_hash():
    global _password_hash
    if _password_hash is None:
        _password_hash = hash_password(PASSWORD)
    return _password_hash


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db(setup_db):
    session = SessionLocal()
    yield session
    session.rollback()
    session.close()


@pytest.fixture
def client(setup_db):
    return TestClient(app)


class Factory:
    """Creates committed rows and returns them."""

    password = PASSWORD

    def __init__(self, db):
        self.db = db
        self._seq = 0

    def _next(self):
        self._seq += 1
        return self._seq

    def organization(self, name=None):
        org = Organization(name=name or f"Org {self._next()}")
        self.db.add(org)
        self.db.commit()
        return org

    def user(self, role=Role.STUDENT, organization=None, name=None, email=None):
        n = self._next()
        user = User(
            name=name or f"{role.value.title()} {n}",
            email=email or f"{role.value.lower()}{n}@campus.edu",
            password_hash=password_hash(),
            role=role.value,
            organization_id=organization.id if organization is not None else None,
        )
        self.db.add(user)
        self.db.commit()
        return user

    def student(self, **kwargs):
        return self.user(Role.STUDENT, **kwargs)

    def admin(self, **kwargs):
        return self.user(Role.ADMIN, **kwargs)

    def org_user(self, organization=None, **kwargs):
        organization = organization or self.organization()
        return self.user(Role.ORGANIZATION, organization=organization, **kwargs)

    def job_offer(self, organization, title="Software Engineer Intern", **kwargs):
        fields = dict(description="Build things", location="Bengaluru", type="Internship", skills=["python"])
        fields.update(kwargs)
        job_offer = JobOffer(organization_id=organization.id, title=title, **fields)
        self.db.add(job_offer)
        self.db.commit()
        return job_offer

    @staticmethod
    def actor(user):
        return actor_from_user(user)

    @staticmethod
    def headers(user):
        token = create_access_token({"sub": str(user.id)})
        return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def factory(db):
    return Factory(db)
