import logging
from typing import Optional

from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.clubs import Club
from app.schemas.clubs import ClubCreate

logger = logging.getLogger(__name__)


class ClubNotFoundError(Exception):
    pass


class DuplicateClubError(Exception):
    pass


def get_club(db: Session, club_id: int) -> Optional[Club]:
    return db.get(Club, club_id)


def get_club_by_name(db: Session, name: str) -> Optional[Club]:
    return db.scalar(select(Club).where(Club.name == name))


def list_clubs(db: Session, search: Optional[str] = None) -> list[Club]:
    """Return clubs newest first, optionally those whose name or description contains ``search``."""
    stmt = select(Club).order_by(Club.created_at.desc(), Club.id.desc())
    if search:
        stmt = stmt.where(
            or_(
                Club.name.contains(search, autoescape=True),
                Club.description.contains(search, autoescape=True),
            )
        )
    return list(db.scalars(stmt))


def create_club(db: Session, payload: ClubCreate) -> Club:
    """
    Insert a club with a unique name.
    The lookup only spares a failed insert; the unique constraint on clubs.name
    decides between concurrent requests, and its violation is reported the same way.
    """
    if get_club_by_name(db, payload.name) is not None:
        logger.info("Club name already taken: %r", payload.name)
        raise DuplicateClubError("A club with this name already exists")

    club = Club(name=payload.name, description=payload.description)
    db.add(club)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("Club name taken concurrently: %r", payload.name)
        raise DuplicateClubError("A club with this name already exists")
    db.refresh(club)
    logger.info("Club created: id=%s name=%r", club.id, club.name)
    return club


def delete_club(db: Session, club_id: int) -> bool:
    """Administrative removal of a club; its events go with it."""
    club = get_club(db, club_id)
    if not club:
        return False

    db.delete(club)
    db.commit()
    logger.info("Club deleted: id=%s", club_id)
    return True
