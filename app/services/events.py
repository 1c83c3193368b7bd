import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.timeutils import to_storage
from app.models.clubs import Club
from app.models.events import Event
from app.schemas.events import EventCreate
from app.services.clubs import ClubNotFoundError, get_club

logger = logging.getLogger(__name__)


def _require_club(db: Session, club_id: int) -> Club:
    club = get_club(db, club_id)
    if club is None:
        raise ClubNotFoundError("Club not found")
    return club


def list_club_events(db: Session, club_id: int) -> tuple[Club, list[Event]]:
    """Return the club with its events, soonest first."""
    club = _require_club(db, club_id)
    events = db.scalars(
        select(Event)
        .where(Event.club_id == club_id)
        .order_by(Event.scheduled_date.asc(), Event.id.asc())
    )
    return club, list(events)


def create_event(db: Session, *, club_id: int, payload: EventCreate) -> Event:
    _require_club(db, club_id)

    event = Event(
        club_id=club_id,
        title=payload.title,
        description=payload.description,
        scheduled_date=to_storage(payload.scheduled_date),
    )
    db.add(event)
    try:
        db.commit()
    except IntegrityError:
        # club removed between the lookup and the insert
        db.rollback()
        raise ClubNotFoundError("Club not found")
    db.refresh(event)
    logger.info("Event created: id=%s club_id=%s scheduled=%s", event.id, club_id, event.scheduled_date)
    return event
