"""
Dashboard Service - role-aggregated counts for the landing page.

STUDENT: own applications by status, recent notifications, upcoming events.
ORGANIZATION: the same counts over applications to its job offers, plus
job and student totals. ADMIN: as ORGANIZATION but across all organizations.
"""

from collections import Counter
from datetime import datetime
from typing import List

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from placement_portal.core.guard import Actor
from placement_portal.models import Application, ApplicationStatus, Event, JobOffer, JobOfferStatus, Role, User
from placement_portal.schemas.schemas import (
    DashboardNotification, DashboardResponse, RecentApplication, UpcomingEvent
)
from placement_portal.services.application_service import list_applications
from placement_portal.services.notification_service import list_notifications
from placement_portal.utils.formatting import iso_date, time_ago

RECENT_LIMIT = 5
EVENTS_LIMIT = 3


def upcoming_events(db: Session, limit: int = None) -> List[Event]:
    stmt = select(Event).where(Event.date >= datetime.utcnow()).order_by(Event.date.asc())
    if limit:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))


def _recent(applications: List[Application], include_student: bool) -> List[RecentApplication]:
    return [
        RecentApplication(
            id=app.id,
            job_title=app.job_offer.title,
            company=app.job_offer.organization.name,
            student_name=app.user.name if include_student else None,
            date=iso_date(app.applied_date),
            status=app.status.lower(),
        )
        for app in applications[:RECENT_LIMIT]
    ]


def build_dashboard(db: Session, actor: Actor) -> DashboardResponse:
    applications = list_applications(db, actor)
    counts = Counter(app.status for app in applications)
    events = [
        UpcomingEvent(id=e.id, title=e.title, date=iso_date(e.date), time=e.time or "All day")
        for e in upcoming_events(db, EVENTS_LIMIT)
    ]

    dashboard = DashboardResponse(
        message="Dashboard data retrieved successfully",
        total_applications=len(applications),
        pending_applications=counts[ApplicationStatus.PENDING.value],
        selected_applications=counts[ApplicationStatus.SELECTED.value],
        rejected_applications=counts[ApplicationStatus.REJECTED.value],
        upcoming_events=events,
    )

    if actor.role is Role.STUDENT:
        dashboard.recent_applications = _recent(applications, include_student=False)
        dashboard.notifications = [
            DashboardNotification(id=n.id, message=n.message, time=time_ago(n.created_at))
            for n in list_notifications(db, actor, limit=RECENT_LIMIT)
        ]
        return dashboard

    if actor.role is Role.ORGANIZATION:
        job_filter = [JobOffer.organization_id == actor.organization_id]
    elif actor.role is Role.ADMIN:
        job_filter = []
    else:
        raise ValueError(f"Unknown role: {actor.role!r}")

    dashboard.recent_applications = _recent(applications, include_student=True)
    dashboard.total_jobs = db.scalar(select(func.count(JobOffer.id)).where(*job_filter))
    dashboard.active_jobs = db.scalar(
        select(func.count(JobOffer.id)).where(JobOffer.status == JobOfferStatus.active.value, *job_filter)
    )
    dashboard.total_students = db.scalar(
        select(func.count(User.id)).where(User.role == Role.STUDENT.value)
    )
    return dashboard
