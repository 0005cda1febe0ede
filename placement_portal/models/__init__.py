"""
Models module - SQLAlchemy ORM tables and the domain enums they store.
"""

from placement_portal.models.models import (
    Application,
    ApplicationStatus,
    Education,
    Event,
    Experience,
    JobOffer,
    JobOfferStatus,
    Notification,
    Organization,
    Profile,
    Role,
    User,
)

__all__ = [
    "Application",
    "ApplicationStatus",
    "Education",
    "Event",
    "Experience",
    "JobOffer",
    "JobOfferStatus",
    "Notification",
    "Organization",
    "Profile",
    "Role",
    "User",
]
