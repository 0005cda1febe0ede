"""
Job Offer Service - public search plus organization-owned CRUD.
"""

from typing import List, Optional

from loguru import logger
from sqlalchemy import or_, select
from sqlalchemy.orm import Session, selectinload

from placement_portal.core.exceptions import ForbiddenError, NotFoundError
from placement_portal.core.guard import Action, Actor, Resource, require_ownership, require_role
from placement_portal.models import JobOffer, JobOfferStatus
from placement_portal.schemas.schemas import JobOfferWrite


def search_job_offers(
    db: Session,
    query: Optional[str] = None,
    location: Optional[str] = None,
    job_type: Optional[str] = None,
    organization_id: Optional[int] = None,
    status: Optional[str] = None,
) -> List[JobOffer]:
    """Public listing. Text filters are case-insensitive substring matches."""
    stmt = select(JobOffer).options(selectinload(JobOffer.organization))

    if query:
        pattern = f"%{query}%"
        stmt = stmt.where(or_(JobOffer.title.ilike(pattern), JobOffer.description.ilike(pattern)))
    if location:
        stmt = stmt.where(JobOffer.location.ilike(f"%{location}%"))
    if job_type:
        stmt = stmt.where(JobOffer.type == job_type)
    if organization_id is not None:
        stmt = stmt.where(JobOffer.organization_id == organization_id)
    if status:
        stmt = stmt.where(JobOffer.status == status)

    stmt = stmt.order_by(JobOffer.created_at.desc(), JobOffer.id.desc())
    return list(db.scalars(stmt))


def get_job_offer(db: Session, job_offer_id: int) -> JobOffer:
    stmt = (
        select(JobOffer)
        .where(JobOffer.id == job_offer_id)
        .options(selectinload(JobOffer.organization))
    )
    job_offer = db.scalar(stmt)
    if job_offer is None:
        raise NotFoundError("Job offer")
    return job_offer


def create_job_offer(db: Session, actor: Actor, data: JobOfferWrite) -> JobOffer:
    require_role(actor, Resource.JOB_OFFER, Action.CREATE)
    if actor.organization_id is None:
        raise ForbiddenError("Only organizations can create job offers")

    job_offer = JobOffer(
        organization_id=actor.organization_id,
        title=data.title,
        description=data.description,
        location=data.location,
        type=data.type or "Full-time",
        salary=data.salary,
        experience=data.experience,
        skills=list(data.skills),
        status=(data.status or JobOfferStatus.active).value,
    )
    db.add(job_offer)
    db.commit()
    logger.info(f"Job offer {job_offer.id} created by organization {actor.organization_id}")
    return get_job_offer(db, job_offer.id)


def update_job_offer(db: Session, actor: Actor, job_offer_id: int, data: JobOfferWrite) -> JobOffer:
    require_role(actor, Resource.JOB_OFFER, Action.UPDATE)
    job_offer = get_job_offer(db, job_offer_id)
    require_ownership(actor, Resource.JOB_OFFER, Action.UPDATE, job_offer)

    job_offer.title = data.title
    job_offer.description = data.description
    job_offer.location = data.location
    job_offer.salary = data.salary
    job_offer.experience = data.experience
    job_offer.skills = list(data.skills)
    if data.type:
        job_offer.type = data.type
    if data.status:
        job_offer.status = data.status.value

    db.commit()
    logger.info(f"Job offer {job_offer_id} updated by user {actor.id}")
    return get_job_offer(db, job_offer_id)


def delete_job_offer(db: Session, actor: Actor, job_offer_id: int) -> None:
    """Delete a job offer. Its applications go with it."""
    require_role(actor, Resource.JOB_OFFER, Action.DELETE)
    job_offer = get_job_offer(db, job_offer_id)
    require_ownership(actor, Resource.JOB_OFFER, Action.DELETE, job_offer)

    db.delete(job_offer)
    db.commit()
    logger.info(f"Job offer {job_offer_id} deleted by user {actor.id}")
