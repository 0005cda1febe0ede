"""
Organization Service - read/update by an admin or the organization itself.
"""

from loguru import logger
from sqlalchemy.orm import Session

from placement_portal.core.exceptions import NotFoundError
from placement_portal.core.guard import Action, Actor, Resource, require_ownership, require_role
from placement_portal.models import Organization
from placement_portal.schemas.schemas import OrganizationUpdate


def get_organization(db: Session, actor: Actor, organization_id: int) -> Organization:
    require_role(actor, Resource.ORGANIZATION, Action.READ)
    organization = db.get(Organization, organization_id)
    if organization is None:
        raise NotFoundError("Organization")
    require_ownership(actor, Resource.ORGANIZATION, Action.READ, organization)
    return organization


def get_own_organization(db: Session, actor: Actor) -> Organization:
    """The organization the actor belongs to; admins without one get NotFound."""
    require_role(actor, Resource.ORGANIZATION, Action.READ)
    if actor.organization_id is None:
        raise NotFoundError("Organization")
    return get_organization(db, actor, actor.organization_id)


def update_organization(db: Session, actor: Actor, organization_id: int, data: OrganizationUpdate) -> Organization:
    require_role(actor, Resource.ORGANIZATION, Action.UPDATE)
    organization = db.get(Organization, organization_id)
    if organization is None:
        raise NotFoundError("Organization")
    require_ownership(actor, Resource.ORGANIZATION, Action.UPDATE, organization)

    organization.name = data.name
    organization.industry = data.industry
    organization.location = data.location
    organization.description = data.description
    organization.website = data.website
    if data.logo is not None:
        organization.logo = data.logo

    db.commit()
    db.refresh(organization)
    logger.info(f"Organization {organization_id} updated by user {actor.id}")
    return organization
