"""
Notification Service - append-only notification records.

No delivery channel exists: a notification is a row the recipient
reads from /api/notifications or the dashboard.
"""

from typing import List

from loguru import logger
from sqlalchemy import select
from sqlalchemy.orm import Session

from placement_portal.core.exceptions import NotFoundError, ValidationError
from placement_portal.core.guard import Action, Actor, Resource, require_role
from placement_portal.models import Notification, User


def notify(db: Session, recipient_user_id: int, message: str) -> Notification:
    """
    Append a notification for a user.

    Only flushes; the caller owns the transaction.
    """
    notification = Notification(user_id=recipient_user_id, message=message)
    db.add(notification)
    db.flush()
    logger.debug(f"Notification {notification.id} queued for user {recipient_user_id}")
    return notification


def notify_safely(db: Session, recipient_user_ids: List[int], message: str) -> List[Notification]:
    """
    Notify several users inside a savepoint.

    A failed write is logged and rolled back to the savepoint without
    touching the rest of the caller's transaction.
    """
    if not recipient_user_ids:
        return []

    try:
        with db.begin_nested():
            return [notify(db, user_id, message) for user_id in recipient_user_ids]
    except Exception as e:
        logger.warning(f"Notification write failed for users {recipient_user_ids}: {e}")
        return []


def create_notification(db: Session, actor: Actor, recipient_user_id: int, message: str) -> Notification:
    """Manual notification by an admin or organization."""
    require_role(actor, Resource.NOTIFICATION, Action.CREATE)
    if not message or not message.strip():
        raise ValidationError("Missing required fields")
    if db.get(User, recipient_user_id) is None:
        raise NotFoundError("User")

    notification = notify(db, recipient_user_id, message)
    db.commit()
    db.refresh(notification)
    logger.info(f"User {actor.id} sent notification {notification.id} to user {recipient_user_id}")
    return notification


def list_notifications(db: Session, actor: Actor, limit: int = None) -> List[Notification]:
    """Notifications addressed to the actor, newest first."""
    require_role(actor, Resource.NOTIFICATION, Action.READ)
    stmt = (
        select(Notification)
        .where(Notification.user_id == actor.id)
        .order_by(Notification.created_at.desc(), Notification.id.desc())
    )
    if limit:
        stmt = stmt.limit(limit)
    return list(db.scalars(stmt))
