"""
Event Routes

GET /events - Upcoming placement events
POST /events - Create event (admin only)
"""

from datetime import timezone

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from loguru import logger

from placement_portal.db.database import get_db
from placement_portal.core.auth import get_current_actor
from placement_portal.core.guard import Action, Actor, Resource, require_role
from placement_portal.models import Event
from placement_portal.services.dashboard_service import upcoming_events
from placement_portal.schemas.schemas import EventCreate, EventResponse, EventEnvelope, EventListResponse

router = APIRouter(prefix="/events", tags=["Events"])


@router.get("", response_model=EventListResponse)
async def list_events(actor: Actor = Depends(get_current_actor), db: Session = Depends(get_db)):
    """Events dated from now on, soonest first."""
    require_role(actor, Resource.EVENT, Action.READ)
    events = upcoming_events(db)
    return EventListResponse(
        message="Events retrieved successfully",
        events=[EventResponse.model_validate(e) for e in events],
    )


@router.post("", response_model=EventEnvelope, status_code=201)
async def create_event(
    data: EventCreate,
    actor: Actor = Depends(get_current_actor),
    db: Session = Depends(get_db),
):
    require_role(actor, Resource.EVENT, Action.CREATE)

    # Stored as naive UTC like every other timestamp
    date = data.date
    if date.tzinfo is not None:
        date = date.astimezone(timezone.utc).replace(tzinfo=None)

    event = Event(
        title=data.title,
        description=data.description,
        date=date,
        time=data.time,
        location=data.location,
    )
    db.add(event)
    db.commit()
    db.refresh(event)
    logger.info(f"Event {event.id} created by admin {actor.id}")

    return EventEnvelope(message="Event created successfully", event=EventResponse.model_validate(event))
