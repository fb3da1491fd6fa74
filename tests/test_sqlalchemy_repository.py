import itertools

import pytest
from sqlalchemy.exc import OperationalError

from profiles.domain.entities import UserProfile
from profiles.domain.errors import PersistenceFailure
from profiles.models import UserProfileRow
from profiles.repositories import SQLAlchemyUserRepository
from profiles.repositories import sqlalchemy_repository


def test_rows_are_stored_in_user_profiles(sql_repository, session_factory):
    profile_id = sql_repository.save(UserProfile(name="Ada", email="ada@example.com", age=36))

    with session_factory() as session:
        row = session.get(UserProfileRow, profile_id)
        assert row.email == "ada@example.com"
        assert row.created_at is not None


def test_timeout_rolls_back_and_signals_failure(sql_repository, monkeypatch):
    # every clock read advances ten seconds
    clock = itertools.count(step=10.0)
    monkeypatch.setattr(sqlalchemy_repository.time, "monotonic", lambda: next(clock))

    profile = UserProfile(name="Ada", email="ada@example.com", age=36)
    with pytest.raises(PersistenceFailure, match="Timed out"):
        sql_repository.save(profile, timeout=1.0)

    monkeypatch.undo()
    assert profile.id is None
    assert sql_repository.find_all() == []


def test_default_timeout_applies_when_call_passes_none(session_factory, monkeypatch):
    repository = SQLAlchemyUserRepository(session_factory, default_timeout=1.0)
    clock = itertools.count(step=10.0)
    monkeypatch.setattr(sqlalchemy_repository.time, "monotonic", lambda: next(clock))

    with pytest.raises(PersistenceFailure):
        repository.find_all()


def test_store_error_is_wrapped_with_cause(engine, session_factory):
    repository = SQLAlchemyUserRepository(session_factory)
    with engine.begin() as conn:
        conn.exec_driver_sql("DROP TABLE user_profiles")

    with pytest.raises(PersistenceFailure) as exc_info:
        repository.find_all()

    assert isinstance(exc_info.value.cause, OperationalError)
    assert exc_info.value.__cause__ is exc_info.value.cause


def test_failed_write_leaves_no_partial_row(sql_repository, session_factory):
    sql_repository.save(UserProfile(name="Ada", email="ada@example.com", age=36))

    # NULL age violates NOT NULL at flush time
    with pytest.raises(PersistenceFailure):
        sql_repository.save(UserProfile(name="Bob", email="bob@example.com", age=None))

    assert [p.email for p in sql_repository.find_all()] == ["ada@example.com"]
