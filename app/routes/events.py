from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.clubs import ClubOut
from app.schemas.envelope import Envelope
from app.schemas.events import ClubEventsOut, EventCreate, EventOut
from app.services.clubs import ClubNotFoundError
from app.services.events import create_event, list_club_events
from app.services.validation import CLUB_ID_PARAM, CREATE_EVENT_BODY, require_valid

router = APIRouter(prefix="/clubs/{club_id}/events", tags=["events"])


@router.get("", response_model=Envelope[ClubEventsOut])
def read_club_events(club_id: str, db: Session = Depends(get_db)):
    require_valid(CLUB_ID_PARAM, {"params": {"id": club_id}})
    try:
        club, events = list_club_events(db, int(club_id))
    except ClubNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    return Envelope(
        success=True,
        data=ClubEventsOut(
            club=ClubOut.model_validate(club),
            events=[EventOut.model_validate(event) for event in events],
        ),
    )


@router.post("", status_code=201, response_model=Envelope[EventOut])
def add_event(
    club_id: str,
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    body = payload or {}
    require_valid(CLUB_ID_PARAM + CREATE_EVENT_BODY, {"params": {"id": club_id}, "body": body})
    try:
        event = create_event(db, club_id=int(club_id), payload=EventCreate.model_validate(body))
    except ClubNotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))

    response.headers["Location"] = f"/clubs/{event.club_id}/events/{event.id}"
    return Envelope(success=True, message="Event created successfully", data=EventOut.model_validate(event))
