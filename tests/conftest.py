import os
import sys

import pytest

# Ensure repo root is on sys.path so tests can import the profiles package
REPO_ROOT = os.path.dirname(os.path.dirname(__file__))
if REPO_ROOT not in sys.path:
    sys.path.insert(0, REPO_ROOT)

from profiles.database import create_db_engine, create_session_factory, init_db  # noqa: E402
from profiles.notifications import EventNotifier  # noqa: E402
from profiles.repositories import InMemoryUserRepository, SQLAlchemyUserRepository  # noqa: E402
from profiles.services import UserService  # noqa: E402


class RecordingEventNotifier(EventNotifier):
    """Keeps every delivered event; raises instead when ``fail`` is set."""

    def __init__(self):
        self.events = []
        self.fail = False

    def send(self, event):
        if self.fail:
            raise ConnectionError("event channel unavailable")
        self.events.append(event)


@pytest.fixture
def engine():
    engine = create_db_engine("sqlite:///:memory:")
    init_db(engine)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def session_factory(engine):
    return create_session_factory(engine)


@pytest.fixture
def sql_repository(session_factory):
    return SQLAlchemyUserRepository(session_factory)


@pytest.fixture
def memory_repository():
    return InMemoryUserRepository()


@pytest.fixture(params=["memory", "sqlalchemy"])
def repository(request):
    # both implementations must honour the same contract
    if request.param == "memory":
        return request.getfixturevalue("memory_repository")
    return request.getfixturevalue("sql_repository")


@pytest.fixture
def notifier():
    return RecordingEventNotifier()


@pytest.fixture
def service(repository, notifier):
    return UserService(repository, notifier)
