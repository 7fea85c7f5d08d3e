import pytest

from concept_social.concepts.sessioning import SessioningConcept
from concept_social.errors import NotAllowedError, UnauthenticatedError


@pytest.fixture
def sessioning():
    return SessioningConcept()


def test_start_then_get_user(sessioning):
    session = {}
    sessioning.start(session, "user-1")
    assert sessioning.get_user(session) == "user-1"
    assert sessioning.current_user(session) == "user-1"


def test_start_twice_is_not_allowed(sessioning):
    session = {}
    sessioning.start(session, "user-1")
    with pytest.raises(NotAllowedError, match="Must be logged out!"):
        sessioning.start(session, "user-2")


def test_end_clears_user(sessioning):
    session = {}
    sessioning.start(session, "user-1")
    sessioning.end(session)
    assert sessioning.current_user(session) is None
    with pytest.raises(UnauthenticatedError, match="Must be logged in!"):
        sessioning.get_user(session)


def test_end_when_logged_out(sessioning):
    with pytest.raises(UnauthenticatedError):
        sessioning.end({})
