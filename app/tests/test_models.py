"""
Test database models (Club and Event).
"""
from datetime import datetime, timedelta

import pytest
from sqlalchemy import inspect, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.clubs import Club
from app.models.events import Event


class TestClubModel:
    """Test the Club model."""

    def test_create_club(self, db_session: Session):
        """Test creating a club."""
        club = Club(name="Book Club", description="Monthly reads")
        db_session.add(club)
        db_session.commit()
        db_session.refresh(club)

        assert club.id is not None
        assert club.name == "Book Club"
        assert club.description == "Monthly reads"
        assert isinstance(club.created_at, datetime)

    def test_club_name_is_unique(self, db_session: Session):
        """Test the unique constraint on clubs.name."""
        db_session.add(Club(name="Hiking Club"))
        db_session.commit()

        db_session.add(Club(name="Hiking Club"))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_club_name_uniqueness_is_case_sensitive(self, db_session: Session):
        db_session.add_all([Club(name="Chess Club"), Club(name="chess club")])
        db_session.commit()

        assert len(db_session.scalars(select(Club)).all()) == 2


class TestEventModel:
    """Test the Event model."""

    def test_event_relationship_with_club(self, db_session: Session, club: Club):
        """Test the relationship between Club and Event."""
        soon = Event(club_id=club.id, title="Blitz night", scheduled_date=datetime(2030, 1, 1, 18, 0))
        later = Event(club_id=club.id, title="Simul", scheduled_date=datetime(2030, 2, 1, 18, 0))
        db_session.add_all([later, soon])
        db_session.commit()
        db_session.refresh(club)

        assert [e.title for e in club.events] == ["Blitz night", "Simul"]
        assert soon.club.name == "Chess Club"

    def test_event_requires_existing_club(self, db_session: Session):
        """Test the foreign key from events.club_id to clubs.id."""
        db_session.add(Event(club_id=424242, title="Orphan", scheduled_date=datetime(2030, 1, 1)))
        with pytest.raises(IntegrityError):
            db_session.commit()
        db_session.rollback()

    def test_deleting_club_cascades_to_events(self, db_session: Session, club: Club):
        """Test that the store removes a club's events along with it."""
        db_session.add(Event(club_id=club.id, title="Openings", scheduled_date=datetime.now() + timedelta(days=3)))
        db_session.commit()

        db_session.delete(club)
        db_session.commit()

        assert db_session.scalars(select(Event)).all() == []

    def test_event_indexes(self, db_session: Session):
        indexes = {index["name"] for index in inspect(db_session.get_bind()).get_indexes("events")}
        assert {"idx_events_club_id", "idx_events_date"} <= indexes
