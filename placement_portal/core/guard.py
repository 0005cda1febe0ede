"""
Authorization Guard - who may do what to which record.

Checks run in a fixed order:
1. role allowed for (resource, action)   -> ForbiddenError
2. target loaded by the caller             -> NotFoundError (caller's job)
3. ownership predicate on the target       -> ForbiddenError

Identity presence and the fresh user lookup happen earlier, in
core.auth.get_current_actor.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from placement_portal.core.exceptions import ForbiddenError
from placement_portal.models import Application, Education, Experience, JobOffer, Organization, Profile, Role


@dataclass(frozen=True)
class Actor:
    """Authenticated identity, re-read from storage for the current request."""

    id: int
    role: Role
    organization_id: Optional[int] = None
    email: Optional[str] = None
    name: Optional[str] = None


class Resource(str, Enum):
    APPLICATION = "application"
    JOB_OFFER = "job_offer"
    PROFILE = "profile"
    ORGANIZATION = "organization"
    NOTIFICATION = "notification"
    EVENT = "event"


class Action(str, Enum):
    READ = "read"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


ALL_ROLES = frozenset(Role)

PERMISSIONS = {
    (Resource.APPLICATION, Action.CREATE): frozenset({Role.STUDENT}),
    (Resource.APPLICATION, Action.READ): ALL_ROLES,
    (Resource.APPLICATION, Action.UPDATE): frozenset({Role.ADMIN, Role.ORGANIZATION}),
    (Resource.APPLICATION, Action.DELETE): ALL_ROLES,
    (Resource.JOB_OFFER, Action.CREATE): frozenset({Role.ORGANIZATION}),
    (Resource.JOB_OFFER, Action.UPDATE): frozenset({Role.ORGANIZATION}),
    (Resource.JOB_OFFER, Action.DELETE): frozenset({Role.ORGANIZATION}),
    (Resource.PROFILE, Action.READ): ALL_ROLES,
    (Resource.PROFILE, Action.CREATE): frozenset({Role.STUDENT}),
    (Resource.PROFILE, Action.UPDATE): frozenset({Role.STUDENT}),
    (Resource.PROFILE, Action.DELETE): frozenset({Role.STUDENT}),
    (Resource.ORGANIZATION, Action.READ): frozenset({Role.ADMIN, Role.ORGANIZATION}),
    (Resource.ORGANIZATION, Action.UPDATE): frozenset({Role.ADMIN, Role.ORGANIZATION}),
    (Resource.NOTIFICATION, Action.READ): ALL_ROLES,
    (Resource.NOTIFICATION, Action.CREATE): frozenset({Role.ADMIN, Role.ORGANIZATION}),
    (Resource.EVENT, Action.READ): ALL_ROLES,
    (Resource.EVENT, Action.CREATE): frozenset({Role.ADMIN}),
}

DENIAL_MESSAGES = {
    (Resource.APPLICATION, Action.CREATE): "Only students can apply for jobs",
    (Resource.APPLICATION, Action.UPDATE): "You don't have permission to update this application",
    (Resource.APPLICATION, Action.DELETE): "You don't have permission to delete this application",
    (Resource.APPLICATION, Action.READ): "You don't have permission to view this application",
    (Resource.JOB_OFFER, Action.CREATE): "Only organizations can create job offers",
    (Resource.JOB_OFFER, Action.UPDATE): "You don't have permission to update this job offer",
    (Resource.JOB_OFFER, Action.DELETE): "You don't have permission to delete this job offer",
    (Resource.PROFILE, Action.CREATE): "Only students can edit profiles",
    (Resource.PROFILE, Action.UPDATE): "Only students can edit profiles",
    (Resource.PROFILE, Action.DELETE): "Only students can edit profiles",
    (Resource.ORGANIZATION, Action.READ): "Only organizations or admins can access this endpoint",
    (Resource.ORGANIZATION, Action.UPDATE): "Only organizations or admins can update organization data",
    (Resource.NOTIFICATION, Action.CREATE): "Only admins or organizations can create notifications",
    (Resource.EVENT, Action.CREATE): "Only admins can create events",
}


def _deny(resource: Resource, action: Action) -> ForbiddenError:
    return ForbiddenError(DENIAL_MESSAGES.get((resource, action), "Forbidden"))


def require_role(actor: Actor, resource: Resource, action: Action) -> None:
    """Raise ForbiddenError unless the actor's role may perform the action at all."""
    allowed = PERMISSIONS.get((resource, action), frozenset())
    if actor.role not in allowed:
        raise _deny(resource, action)


# ============================================================
# OWNERSHIP PREDICATES
# ============================================================

def _same_org(actor: Actor, organization_id: Optional[int]) -> bool:
    return actor.organization_id is not None and actor.organization_id == organization_id


def owns_application(actor: Actor, application: Application) -> bool:
    if actor.role is Role.ADMIN:
        return True
    if actor.role is Role.ORGANIZATION:
        return _same_org(actor, application.job_offer.organization_id)
    if actor.role is Role.STUDENT:
        return application.user_id == actor.id
    raise ValueError(f"Unknown role: {actor.role!r}")


def owns_job_offer(actor: Actor, job_offer: JobOffer) -> bool:
    if actor.role is Role.ORGANIZATION:
        return _same_org(actor, job_offer.organization_id)
    if actor.role in (Role.ADMIN, Role.STUDENT):
        return False
    raise ValueError(f"Unknown role: {actor.role!r}")


def owns_organization(actor: Actor, organization: Organization) -> bool:
    if actor.role is Role.ADMIN:
        return True
    if actor.role is Role.ORGANIZATION:
        return _same_org(actor, organization.id)
    if actor.role is Role.STUDENT:
        return False
    raise ValueError(f"Unknown role: {actor.role!r}")


def owns_profile(actor: Actor, profile: Profile) -> bool:
    if actor.role in (Role.STUDENT, Role.ORGANIZATION, Role.ADMIN):
        return profile.user_id == actor.id
    raise ValueError(f"Unknown role: {actor.role!r}")


def owns_profile_entry(actor: Actor, entry) -> bool:
    """Education and Experience rows belong to whoever owns their profile."""
    return owns_profile(actor, entry.profile)


OWNERSHIP = {
    Resource.APPLICATION: owns_application,
    Resource.JOB_OFFER: owns_job_offer,
    Resource.ORGANIZATION: owns_organization,
    Resource.PROFILE: owns_profile,
}


def require_ownership(actor: Actor, resource: Resource, action: Action, target) -> None:
    """Raise ForbiddenError unless the actor owns the loaded target."""
    if isinstance(target, (Education, Experience)):
        predicate = owns_profile_entry
    else:
        predicate = OWNERSHIP[resource]
    if not predicate(actor, target):
        raise _deny(resource, action)


def authorize(actor: Actor, resource: Resource, action: Action, target=None) -> None:
    """Role check, then ownership check when a target is given."""
    require_role(actor, resource, action)
    if target is not None:
        require_ownership(actor, resource, action, target)
