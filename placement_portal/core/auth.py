"""
Authentication Utility - JWT and Password handling.

Provides:
- Password hashing with bcrypt
- JWT token creation/verification
- FastAPI dependencies resolving the request's identity to an Actor
"""

from datetime import datetime, timedelta
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from placement_portal.core.config import get_settings
from placement_portal.core.exceptions import NotFoundError, UnauthorizedError
from placement_portal.core.guard import Actor
from placement_portal.db.database import get_db
from placement_portal.models import Role, User

settings = get_settings()

# Password hashing
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")

# Bearer token extractor; a missing header means anonymous, not an error
bearer_scheme = HTTPBearer(auto_error=False)


def hash_password(password: str) -> str:
    """Hash password with bcrypt."""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against hash."""
    return pwd_context.verify(plain_password, hashed_password)


def create_access_token(data: dict, expires_delta: Optional[timedelta] = None) -> str:
    """Create JWT access token."""
    to_encode = data.copy()
    expire = datetime.utcnow() + (expires_delta or timedelta(minutes=settings.jwt_expire_minutes))
    to_encode.update({"exp": expire})
    return jwt.encode(to_encode, settings.jwt_secret_key, algorithm=settings.jwt_algorithm)


def decode_token(token: str) -> Optional[dict]:
    """Decode and verify JWT token."""
    try:
        return jwt.decode(token, settings.jwt_secret_key, algorithms=[settings.jwt_algorithm])
    except JWTError:
        return None


def actor_from_user(user: User) -> Actor:
    return Actor(
        id=user.id,
        role=Role(user.role),
        organization_id=user.organization_id,
        email=user.email,
        name=user.name,
    )


async def get_current_identity(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[int]:
    """
    FastAPI dependency - user id from the bearer token, or None when anonymous.

    Token claims other than `sub` are ignored.
    """
    if credentials is None:
        return None

    payload = decode_token(credentials.credentials)
    if not payload:
        return None

    subject = payload.get("sub")
    if subject is None:
        return None
    try:
        return int(subject)
    except (TypeError, ValueError):
        return None


def load_actor(db: Session, user_id: Optional[int]) -> Actor:
    """Resolve an identity to an Actor using the current database state."""
    if user_id is None:
        raise UnauthorizedError()

    user = db.get(User, user_id)
    if user is None:
        raise NotFoundError("User")
    return actor_from_user(user)


async def get_current_actor(
    user_id: Optional[int] = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> Actor:
    """
    FastAPI dependency - Get the authenticated actor.

    Usage:
        @router.get("/protected")
        async def route(actor: Actor = Depends(get_current_actor)):
            return actor
    """
    return load_actor(db, user_id)
