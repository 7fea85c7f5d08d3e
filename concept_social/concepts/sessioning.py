"""
concept: Sessioning

Tracks the logged-in user on a session mapping. The mapping itself comes
from the session middleware (a signed cookie); this concept only reads and
writes the ``user`` key.
"""
from typing import MutableMapping, Optional

from concept_social.errors import NotAllowedError, UnauthenticatedError

SESSION_USER_KEY = "user"


class SessioningConcept:
    def start(self, session: MutableMapping, user: str) -> None:
        self.is_logged_out(session)
        session[SESSION_USER_KEY] = user

    def end(self, session: MutableMapping) -> None:
        self.is_logged_in(session)
        session.pop(SESSION_USER_KEY, None)

    def get_user(self, session: MutableMapping) -> str:
        self.is_logged_in(session)
        return session[SESSION_USER_KEY]

    def current_user(self, session: MutableMapping) -> Optional[str]:
        return session.get(SESSION_USER_KEY)

    def is_logged_in(self, session: MutableMapping) -> None:
        if not session.get(SESSION_USER_KEY):
            raise UnauthenticatedError("Must be logged in!")

    def is_logged_out(self, session: MutableMapping) -> None:
        if session.get(SESSION_USER_KEY):
            raise NotAllowedError("Must be logged out!")
