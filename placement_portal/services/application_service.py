"""
Application Lifecycle Service

Owns creation, status transitions, deletion and scoped reads of job
applications. Every operation takes the acting user explicitly and runs
the guard before touching the database.

Status flow:
    PENDING -> SELECTED | REJECTED

With `strict_status_transitions` off (default) any status may be set at
any time, including back to PENDING. With it on, SELECTED and REJECTED
are final.
"""

from datetime import datetime
from typing import List, Optional

from loguru import logger
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session, selectinload

from placement_portal.core.config import get_settings
from placement_portal.core.exceptions import ConflictError, NotFoundError
from placement_portal.core.guard import Action, Actor, Resource, require_ownership, require_role
from placement_portal.models import (
    Application,
    ApplicationStatus,
    JobOffer,
    JobOfferStatus,
    Profile,
    Role,
    User,
)
from placement_portal.services.notification_service import notify_safely

DUPLICATE_MESSAGE = "You have already applied for this job"
DUPLICATE_CONSTRAINT = "uq_application_user_job_offer"

ALLOWED_TRANSITIONS = {
    ApplicationStatus.PENDING: {ApplicationStatus.SELECTED, ApplicationStatus.REJECTED},
    ApplicationStatus.SELECTED: set(),
    ApplicationStatus.REJECTED: set(),
}


def _load_application(db: Session, application_id: int) -> Application:
    stmt = (
        select(Application)
        .where(Application.id == application_id)
        .options(
            selectinload(Application.job_offer).selectinload(JobOffer.organization),
            selectinload(Application.user),
        )
    )
    application = db.scalar(stmt)
    if application is None:
        raise NotFoundError("Application")
    return application


def _existing_application_id(db: Session, user_id: int, job_offer_id: int) -> Optional[int]:
    return db.scalar(
        select(Application.id).where(
            Application.user_id == user_id,
            Application.job_offer_id == job_offer_id,
        )
    )


def _is_duplicate_application(error: IntegrityError) -> bool:
    """True if the violated constraint is the one-application-per-offer rule."""
    diag = getattr(error.orig, "diag", None)
    constraint = getattr(diag, "constraint_name", None)
    if constraint is not None:
        return constraint == DUPLICATE_CONSTRAINT
    # SQLite names the columns instead of the constraint
    return "applications.user_id, applications.job_offer_id" in str(error.orig)


def _organization_member_ids(db: Session, organization_id: int) -> List[int]:
    stmt = select(User.id).where(
        User.organization_id == organization_id,
        User.role == Role.ORGANIZATION.value,
    )
    return list(db.scalars(stmt))


def _upsert_resume(db: Session, user_id: int, resume_url: str) -> Profile:
    profile = db.scalar(select(Profile).where(Profile.user_id == user_id))
    if profile is None:
        profile = Profile(user_id=user_id, resume_url=resume_url, skills=[])
        db.add(profile)
    else:
        profile.resume_url = resume_url
    return profile


def check_transition(current: ApplicationStatus, new: ApplicationStatus) -> None:
    """Raise ConflictError if strict mode forbids moving from current to new."""
    if not get_settings().strict_status_transitions or current == new:
        return
    if new not in ALLOWED_TRANSITIONS[current]:
        raise ConflictError(
            f"Cannot change application status from {current.value} to {new.value}"
        )


# ============================================================
# OPERATIONS
# ============================================================

def create_application(
    db: Session,
    actor: Actor,
    job_offer_id: int,
    resume_url: Optional[str] = None,
    cover_letter: Optional[str] = None,
) -> Application:
    """
    Submit an application for the acting student.

    Application insert, profile resume upsert and the notification to the
    organization commit together. The notification runs in a savepoint, so
    a failed notification write does not undo the application.
    """
    require_role(actor, Resource.APPLICATION, Action.CREATE)

    job_offer = db.get(JobOffer, job_offer_id)
    if job_offer is None:
        raise NotFoundError("Job offer")
    if get_settings().reject_closed_job_offers and job_offer.status == JobOfferStatus.closed.value:
        raise ConflictError("This job offer is no longer accepting applications")

    if _existing_application_id(db, actor.id, job_offer_id) is not None:
        raise ConflictError(DUPLICATE_MESSAGE)

    application = Application(
        user_id=actor.id,
        job_offer_id=job_offer_id,
        status=ApplicationStatus.PENDING.value,
        resume_url=resume_url or None,
        cover_letter=cover_letter or None,
        applied_date=datetime.utcnow(),
    )
    db.add(application)
    if resume_url:
        _upsert_resume(db, actor.id, resume_url)

    try:
        db.flush()
        applicant = actor.name or "A student"
        notify_safely(
            db,
            _organization_member_ids(db, job_offer.organization_id),
            f"{applicant} applied for {job_offer.title}.",
        )
        db.commit()
    except IntegrityError as e:
        db.rollback()
        if _is_duplicate_application(e):
            # Lost a race against a concurrent submission for the same pair
            raise ConflictError(DUPLICATE_MESSAGE)
        raise

    logger.info(f"Application {application.id} created: user={actor.id} job_offer={job_offer_id}")
    return _load_application(db, application.id)


def get_application(db: Session, actor: Actor, application_id: int) -> Application:
    require_role(actor, Resource.APPLICATION, Action.READ)
    application = _load_application(db, application_id)
    require_ownership(actor, Resource.APPLICATION, Action.READ, application)
    return application


def list_applications(
    db: Session,
    actor: Actor,
    job_offer_id: Optional[int] = None,
    status: Optional[ApplicationStatus] = None,
) -> List[Application]:
    """
    Applications visible to the actor, newest first.

    ADMIN sees everything, ORGANIZATION sees applications to its job offers,
    STUDENT sees its own.
    """
    require_role(actor, Resource.APPLICATION, Action.READ)

    stmt = select(Application).options(
        selectinload(Application.job_offer).selectinload(JobOffer.organization),
        selectinload(Application.user),
    )

    if actor.role is Role.ADMIN:
        pass
    elif actor.role is Role.ORGANIZATION:
        if actor.organization_id is None:
            return []
        stmt = stmt.join(Application.job_offer).where(JobOffer.organization_id == actor.organization_id)
    elif actor.role is Role.STUDENT:
        stmt = stmt.where(Application.user_id == actor.id)
    else:
        raise ValueError(f"Unknown role: {actor.role!r}")

    if job_offer_id is not None:
        stmt = stmt.where(Application.job_offer_id == job_offer_id)
    if status is not None:
        stmt = stmt.where(Application.status == ApplicationStatus(status).value)

    stmt = stmt.order_by(Application.applied_date.desc(), Application.id.desc())
    return list(db.scalars(stmt))


def update_application_status(
    db: Session,
    actor: Actor,
    application_id: int,
    new_status: ApplicationStatus,
) -> Application:
    """Set a new status. Last write wins; no version check."""
    require_role(actor, Resource.APPLICATION, Action.UPDATE)
    application = _load_application(db, application_id)
    require_ownership(actor, Resource.APPLICATION, Action.UPDATE, application)

    new_status = ApplicationStatus(new_status)
    previous = ApplicationStatus(application.status)
    check_transition(previous, new_status)

    application.status = new_status.value
    db.flush()

    if get_settings().notify_on_status_change and previous != new_status:
        notify_safely(
            db,
            [application.user_id],
            f"Your application for {application.job_offer.title} has been {new_status.value.lower()}.",
        )

    db.commit()
    logger.info(
        f"Application {application_id} status {previous.value} -> {new_status.value} by user {actor.id}"
    )
    return _load_application(db, application_id)


def delete_application(db: Session, actor: Actor, application_id: int) -> None:
    """Delete an application. Notifications about it are left in place."""
    require_role(actor, Resource.APPLICATION, Action.DELETE)
    application = _load_application(db, application_id)
    require_ownership(actor, Resource.APPLICATION, Action.DELETE, application)

    db.delete(application)
    db.commit()
    logger.info(f"Application {application_id} deleted by user {actor.id}")
