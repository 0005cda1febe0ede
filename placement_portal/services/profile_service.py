"""
Profile Service - the student's profile with education and experience entries.
"""

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session, selectinload

from placement_portal.core.exceptions import NotFoundError
from placement_portal.core.guard import Action, Actor, Resource, require_ownership, require_role
from placement_portal.models import Education, Experience, Profile
from placement_portal.schemas.schemas import EducationWrite, ExperienceWrite, ProfileUpdate


def _find_profile(db: Session, user_id: int):
    stmt = (
        select(Profile)
        .where(Profile.user_id == user_id)
        .options(selectinload(Profile.education), selectinload(Profile.experience))
    )
    return db.scalar(stmt)


def get_or_create_profile(db: Session, actor: Actor) -> Profile:
    """Return the actor's profile, creating an empty one on first access."""
    require_role(actor, Resource.PROFILE, Action.READ)
    profile = _find_profile(db, actor.id)
    if profile is None:
        db.add(Profile(user_id=actor.id, skills=[]))
        db.commit()
        profile = _find_profile(db, actor.id)
    require_ownership(actor, Resource.PROFILE, Action.READ, profile)
    return profile


def update_profile(db: Session, actor: Actor, data: ProfileUpdate) -> Profile:
    """Upsert; only fields present in the request are written."""
    require_role(actor, Resource.PROFILE, Action.UPDATE)
    profile = _find_profile(db, actor.id)
    if profile is None:
        profile = Profile(user_id=actor.id, skills=[])
        db.add(profile)

    for field, value in data.model_dump(exclude_unset=True).items():
        if field == "skills" and value is None:
            value = []
        setattr(profile, field, value)

    db.commit()
    logger.info(f"Profile updated for user {actor.id}")
    return _find_profile(db, actor.id)


def _require_profile(db: Session, actor: Actor) -> Profile:
    profile = _find_profile(db, actor.id)
    if profile is None:
        raise NotFoundError("Profile")
    return profile


def _load_entry(db: Session, model, entry_id: int, label: str):
    entry = db.scalar(
        select(model).where(model.id == entry_id).options(selectinload(model.profile))
    )
    if entry is None:
        raise NotFoundError(label)
    return entry


# ============================================================
# EDUCATION
# ============================================================

def add_education(db: Session, actor: Actor, data: EducationWrite) -> Education:
    require_role(actor, Resource.PROFILE, Action.CREATE)
    profile = _require_profile(db, actor)
    education = Education(profile_id=profile.id, **data.model_dump())
    db.add(education)
    db.commit()
    db.refresh(education)
    return education


def update_education(db: Session, actor: Actor, education_id: int, data: EducationWrite) -> Education:
    require_role(actor, Resource.PROFILE, Action.UPDATE)
    education = _load_entry(db, Education, education_id, "Education")
    require_ownership(actor, Resource.PROFILE, Action.UPDATE, education)
    for field, value in data.model_dump().items():
        setattr(education, field, value)
    db.commit()
    db.refresh(education)
    return education


def delete_education(db: Session, actor: Actor, education_id: int) -> None:
    require_role(actor, Resource.PROFILE, Action.DELETE)
    education = _load_entry(db, Education, education_id, "Education")
    require_ownership(actor, Resource.PROFILE, Action.DELETE, education)
    db.delete(education)
    db.commit()


# ============================================================
# EXPERIENCE
# ============================================================

def add_experience(db: Session, actor: Actor, data: ExperienceWrite) -> Experience:
    require_role(actor, Resource.PROFILE, Action.CREATE)
    profile = _require_profile(db, actor)
    experience = Experience(profile_id=profile.id, **data.model_dump())
    db.add(experience)
    db.commit()
    db.refresh(experience)
    return experience


def update_experience(db: Session, actor: Actor, experience_id: int, data: ExperienceWrite) -> Experience:
    require_role(actor, Resource.PROFILE, Action.UPDATE)
    experience = _load_entry(db, Experience, experience_id, "Experience")
    require_ownership(actor, Resource.PROFILE, Action.UPDATE, experience)
    for field, value in data.model_dump().items():
        setattr(experience, field, value)
    db.commit()
    db.refresh(experience)
    return experience


def delete_experience(db: Session, actor: Actor, experience_id: int) -> None:
    require_role(actor, Resource.PROFILE, Action.DELETE)
    experience = _load_entry(db, Experience, experience_id, "Experience")
    require_ownership(actor, Resource.PROFILE, Action.DELETE, experience)
    db.delete(experience)
    db.commit()
