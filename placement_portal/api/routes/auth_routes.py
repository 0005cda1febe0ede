"""
Authentication Routes

POST /auth/register - Register new user
POST /auth/login - Login and get JWT token
GET /auth/me - Get current user info
PUT /user/password - Change password
"""

from fastapi import APIRouter, Depends
from sqlalchemy import select
from sqlalchemy.orm import Session
from loguru import logger

from placement_portal.db.database import get_db
from placement_portal.core.auth import (
    hash_password, verify_password, create_access_token, get_current_actor
)
from placement_portal.core.exceptions import (
    ConflictError, ForbiddenError, NotFoundError, UnauthorizedError, ValidationError
)
from placement_portal.core.guard import Actor
from placement_portal.models import Organization, Role, User
from placement_portal.schemas.schemas import (
    RegisterRequest, LoginRequest, PasswordChangeRequest, TokenResponse, UserResponse,
    UserEnvelope, MessageResponse
)

router = APIRouter(prefix="/auth", tags=["Authentication"])
user_router = APIRouter(prefix="/user", tags=["Users"])


@router.post("/register", response_model=UserEnvelope, status_code=201)
async def register(request: RegisterRequest, db: Session = Depends(get_db)):
    """
    Register a new user account.

    Organization accounts must send `organizationName`; the organization is
    created with the account. Admin accounts cannot self-register.
    """
    if request.role is Role.ADMIN:
        raise ForbiddenError("Admin accounts cannot be self-registered")
    if request.role is Role.ORGANIZATION and not request.organization_name:
        raise ValidationError("organizationName is required for organization accounts")

    email = request.email.lower()
    if db.scalar(select(User.id).where(User.email == email)) is not None:
        raise ConflictError("Email already registered")

    user = User(
        name=request.name,
        email=email,
        password_hash=hash_password(request.password),
        role=request.role.value,
    )
    if request.role is Role.ORGANIZATION:
        user.organization = Organization(name=request.organization_name)

    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info(f"Registered user {user.id} as {user.role}")

    return UserEnvelope(
        message=f"Registered successfully as {request.role.value}. Please login.",
        user=UserResponse.model_validate(user),
    )


@router.post("/login", response_model=TokenResponse)
async def login(request: LoginRequest, db: Session = Depends(get_db)):
    """
    Login and receive JWT access token.

    Include token in requests: Authorization: Bearer <token>
    """
    user = db.scalar(select(User).where(User.email == request.email.lower()))

    if not user or not verify_password(request.password, user.password_hash):
        raise UnauthorizedError("Invalid email or password")

    # Only the subject is trusted later; role is re-read on every request
    token = create_access_token(data={"sub": str(user.id)})

    return TokenResponse(
        message="Login successful",
        access_token=token,
        user=UserResponse.model_validate(user),
    )


@router.get("/me", response_model=UserEnvelope)
async def get_me(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    """Get current authenticated user's info."""
    user = db.get(User, actor.id)
    return UserEnvelope(message="User retrieved successfully", user=UserResponse.model_validate(user))


@user_router.put("/password", response_model=MessageResponse)
async def change_password(
    request: PasswordChangeRequest,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    """Change the current user's password."""
    user = db.get(User, actor.id)
    if user is None or not user.password_hash:
        raise NotFoundError("User", "User not found or no password set")

    if not verify_password(request.current_password, user.password_hash):
        raise ValidationError("Current password is incorrect")

    user.password_hash = hash_password(request.new_password)
    db.commit()
    logger.info(f"Password changed for user {actor.id}")

    return MessageResponse(message="Password updated successfully")
