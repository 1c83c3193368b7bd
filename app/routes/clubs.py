from typing import Any, Optional

from fastapi import APIRouter, Body, Depends, HTTPException, Response
from sqlalchemy.orm import Session

from app.database.db import get_db
from app.schemas.clubs import ClubCreate, ClubOut
from app.schemas.envelope import Envelope
from app.services.clubs import DuplicateClubError, create_club, list_clubs
from app.services.validation import CREATE_CLUB_BODY, SEARCH_CLUBS_QUERY, require_valid

router = APIRouter(prefix="/clubs", tags=["clubs"])


@router.get("", response_model=Envelope[list[ClubOut]])
def read_clubs(search: Optional[str] = None, db: Session = Depends(get_db)):
    require_valid(SEARCH_CLUBS_QUERY, {"query": {"search": search}})
    clubs = list_clubs(db, search.strip() if search is not None else None)
    return Envelope(success=True, data=[ClubOut.model_validate(club) for club in clubs])


@router.post("", status_code=201, response_model=Envelope[ClubOut])
def add_club(
    response: Response,
    payload: Optional[dict[str, Any]] = Body(default=None),
    db: Session = Depends(get_db),
):
    body = payload or {}
    require_valid(CREATE_CLUB_BODY, {"body": body})
    try:
        club = create_club(db, ClubCreate.model_validate(body))
    except DuplicateClubError as e:
        raise HTTPException(status_code=409, detail=str(e))

    response.headers["Location"] = f"/clubs/{club.id}"
    return Envelope(success=True, message="Club created successfully", data=ClubOut.model_validate(club))
