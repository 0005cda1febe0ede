"""
Profile Routes

GET /profile - Get own profile (created empty on first access)
PUT /profile - Update own profile
POST /profile/education - Add education entry
PUT /profile/education/{id} - Update education entry
DELETE /profile/education/{id} - Remove education entry
POST /profile/experience - Add experience entry
PUT /profile/experience/{id} - Update experience entry
DELETE /profile/experience/{id} - Remove experience entry
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Actor
from placement_portal.services import profile_service
from placement_portal.schemas.schemas import (
    ProfileUpdate, ProfileResponse, ProfileEnvelope,
    EducationWrite, EducationResponse, EducationEnvelope,
    ExperienceWrite, ExperienceResponse, ExperienceEnvelope,
    MessageResponse
)

router = APIRouter(prefix="/profile", tags=["Profile"])


@router.get("", response_model=ProfileEnvelope)
async def get_profile(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    profile = profile_service.get_or_create_profile(db, actor)
    return ProfileEnvelope(message="Profile retrieved successfully", profile=ProfileResponse.model_validate(profile))


@router.put("", response_model=ProfileEnvelope)
async def update_profile(
    data: ProfileUpdate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Update profile. Only provided fields are updated."""
    profile = profile_service.update_profile(db, actor, data)
    return ProfileEnvelope(message="Profile updated successfully", profile=ProfileResponse.model_validate(profile))


@router.post("/education", response_model=EducationEnvelope, status_code=201)
async def add_education(
    data: EducationWrite,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    education = profile_service.add_education(db, actor, data)
    return EducationEnvelope(message="Education added successfully", education=EducationResponse.model_validate(education))


@router.put("/education/{education_id}", response_model=EducationEnvelope)
async def update_education(
    education_id: int,
    data: EducationWrite,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    education = profile_service.update_education(db, actor, education_id, data)
    return EducationEnvelope(message="Education updated successfully", education=EducationResponse.model_validate(education))


@router.delete("/education/{education_id}", response_model=MessageResponse)
async def delete_education(
    education_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    profile_service.delete_education(db, actor, education_id)
    return MessageResponse(message="Education deleted successfully")


@router.post("/experience", response_model=ExperienceEnvelope, status_code=201)
async def add_experience(
    data: ExperienceWrite,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    experience = profile_service.add_experience(db, actor, data)
    return ExperienceEnvelope(message="Experience added successfully", experience=ExperienceResponse.model_validate(experience))


@router.put("/experience/{experience_id}", response_model=ExperienceEnvelope)
async def update_experience(
    experience_id: int,
    data: ExperienceWrite,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    experience = profile_service.update_experience(db, actor, experience_id, data)
    return ExperienceEnvelope(message="Experience updated successfully", experience=ExperienceResponse.model_validate(experience))


@router.delete("/experience/{experience_id}", response_model=MessageResponse)
async def delete_experience(
    experience_id: int,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    profile_service.delete_experience(db, actor, experience_id)
    return MessageResponse(message="Experience deleted successfully")
