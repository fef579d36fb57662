"""Tests for SessionRepository - ordering and ownership queries."""

from datetime import datetime, timedelta, timezone

import pytest

from kalistheniks.db.repositories.base import from_db_timestamp, to_db_timestamp
from kalistheniks.exceptions import StoreUnavailableError
from kalistheniks.models.training import TrainingSession, TrainingSet


def _session(user_id, performed_at, session_type=None):
    return TrainingSession(id=None, user_id=user_id, performed_at=performed_at, session_type=session_type)


def _set(session_id, set_index=0, reps=8, weight_kg=20.0, exercise_id="squat"):
    return TrainingSet(
        id=None,
        session_id=session_id,
        exercise_id=exercise_id,
        set_index=set_index,
        reps=reps,
        weight_kg=weight_kg,
    )


@pytest.fixture
def user_id(make_user):
    return make_user().id


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


class TestTimestamps:
    """Tests for timestamp serialization helpers."""

    def test_round_trip_is_utc(self):
        value = datetime(2024, 5, 1, 12, 0, tzinfo=timezone(timedelta(hours=-5)))
        restored = from_db_timestamp(to_db_timestamp(value))
        assert restored == value
        assert restored.utcoffset() == timedelta(0)

    def test_lexical_order_matches_time_order(self):
        earlier = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)
        later = earlier + timedelta(microseconds=1)
        assert to_db_timestamp(earlier) < to_db_timestamp(later)

    def test_empty(self):
        assert from_db_timestamp(None) is None


class TestCreateAndSets:
    """Tests for inserts."""

    def test_create_assigns_id(self, session_repo, user_id, now):
        session = session_repo.create(_session(user_id, now, "upper"))
        assert session.id
        assert session.performed_at == now
        assert session.session_type == "upper"

    def test_session_requires_existing_user(self, session_repo, now):
        with pytest.raises(StoreUnavailableError):
            session_repo.create(_session("ghost", now))

    def test_set_requires_existing_session(self, session_repo):
        with pytest.raises(StoreUnavailableError):
            session_repo.add_set(_set("no-such-session"))

    def test_reps_must_be_positive(self, session_repo, user_id, now):
        session = session_repo.create(_session(user_id, now))
        with pytest.raises(StoreUnavailableError):
            session_repo.add_set(_set(session.id, reps=0))


class TestLastSetAndSession:
    """Tests for the progression lookups."""

    def test_no_history(self, session_repo, user_id):
        assert session_repo.get_last_set(user_id) is None
        assert session_repo.get_last_session(user_id) is None

    def test_last_set_by_creation_time(self, session_repo, user_id, now):
        # Logged into an older session, but recorded last
        newer = session_repo.create(_session(user_id, now))
        older = session_repo.create(_session(user_id, now - timedelta(days=5)))
        session_repo.add_set(_set(newer.id, exercise_id="bench"))
        last = session_repo.add_set(_set(older.id, set_index=1, exercise_id="deadlift"))

        assert session_repo.get_last_set(user_id).id == last.id

    def test_tie_broken_by_set_index(self, session_repo, user_id, now):
        session = session_repo.create(_session(user_id, now))
        stamp = to_db_timestamp(now)
        with session_repo._get_connection() as conn:
            for index in (0, 2, 1):
                conn.execute(
                    "INSERT INTO sets (id, session_id, exercise_id, set_index, reps, weight_kg, created_at) "
                    "VALUES (?, ?, 'row', ?, 8, 30.0, ?)",
                    (f"set-{index}", session.id, index, stamp),
                )

        assert session_repo.get_last_set(user_id).set_index == 2

    def test_last_session_by_performed_at(self, session_repo, user_id, now):
        session_repo.create(_session(user_id, now - timedelta(days=1), "lower"))
        session_repo.create(_session(user_id, now - timedelta(days=3), "upper"))

        assert session_repo.get_last_session(user_id).session_type == "lower"

    def test_scoped_to_user(self, session_repo, user_id, make_user, now):
        other = make_user().id
        session = session_repo.create(_session(other, now))
        session_repo.add_set(_set(session.id))

        assert session_repo.get_last_set(user_id) is None
        assert session_repo.get_last_session(user_id) is None


class TestOwnershipAndListing:
    """Tests for ownership checks and history listing."""

    def test_belongs_to_user(self, session_repo, user_id, make_user, now):
        session = session_repo.create(_session(user_id, now))
        other = make_user().id

        assert session_repo.session_belongs_to_user(session.id, user_id) is True
        assert session_repo.session_belongs_to_user(session.id, other) is False
        assert session_repo.session_belongs_to_user("missing", user_id) is False

    def test_list_with_sets(self, session_repo, user_id, now):
        first = session_repo.create(_session(user_id, now - timedelta(hours=2)))
        second = session_repo.create(_session(user_id, now))
        session_repo.add_set(_set(first.id, set_index=1))
        session_repo.add_set(_set(first.id, set_index=0))

        sessions = session_repo.list_with_sets(user_id)

        assert [s.id for s in sessions] == [second.id, first.id]
        assert sessions[0].sets == []
        assert [s.set_index for s in sessions[1].sets] == [0, 1]

    def test_list_requires_user_id(self, session_repo):
        with pytest.raises(ValueError):
            session_repo.list_with_sets("")
