"""
Notification Routes

GET /notifications - Get own notifications, newest first
POST /notifications - Send a notification (admin or organization)
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Actor
from placement_portal.services import notification_service
from placement_portal.schemas.schemas import (
    NotificationCreate, NotificationResponse, NotificationEnvelope, NotificationListResponse
)

router = APIRouter(prefix="/notifications", tags=["Notifications"])


@router.get("", response_model=NotificationListResponse)
async def list_notifications(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    notifications = notification_service.list_notifications(db, actor)
    return NotificationListResponse(
        message="Notifications retrieved successfully",
        notifications=[NotificationResponse.model_validate(n) for n in notifications],
    )


@router.post("", response_model=NotificationEnvelope, status_code=201)
async def create_notification(
    data: NotificationCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    notification = notification_service.create_notification(db, actor, data.user_id, data.message)
    return NotificationEnvelope(
        message="Notification created successfully",
        notification=NotificationResponse.model_validate(notification),
    )
