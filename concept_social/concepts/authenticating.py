"""
concept: Authenticating

User identities and credential checks. Passwords are opaque strings here
and are never returned from a read.
"""
import logging
from typing import Any, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.errors import BadValuesError, NotAllowedError, NotFoundError
from concept_social.models import User
from concept_social.store import DocCollection, In

logger = logging.getLogger(__name__)

DELETED_USER = "DELETED_USER"


class UserNotFoundError(NotFoundError):
    tag = "user_not_found"

    def __init__(self, filter: dict):
        super().__init__("User with filter {0} not found!", filter, payload={"filter": filter})


class UserNotAllowedError(NotAllowedError):
    tag = "user_not_allowed"

    def __init__(self, filter: dict):
        super().__init__("User with filter {0} not allowed!", filter, payload={"filter": filter})


def redact_password(user: User) -> dict[str, Any]:
    doc = user.to_dict()
    doc.pop("password", None)
    return doc


class AuthenticatingConcept:
    def __init__(self, session: AsyncSession):
        self.users = DocCollection(User, session)

    async def register(self, username: str, password: str) -> str:
        """
        Register a new user and return its id.

        Raises BadValuesError if either field is empty and UserNotAllowedError
        if the username is taken.
        """
        await self._assert_good_credentials(username, password)
        user_id = await self.users.create_one({"username": username, "password": password})
        logger.info("Registered user %s (id=%s)", username, user_id)
        return user_id

    async def get_user_by_id(self, _id: str) -> dict[str, Any]:
        user = self.users.assert_exists(
            await self.users.read_one(_id), UserNotFoundError({"id": _id})
        )
        return redact_password(user)

    async def get_user_by_username(self, username: str) -> dict[str, Any]:
        user = self.users.assert_exists(
            await self.users.read_one({"username": username}),
            UserNotFoundError({"username": username}),
        )
        return redact_password(user)

    async def ids_to_usernames(self, ids: list[str]) -> list[str]:
        """
        Map ids to usernames in order. Unknown ids map to ``DELETED_USER``
        so one stale reference never fails a whole listing.
        """
        users = await self.users.read_many({"id": In(set(ids))}) if ids else []
        id_to_user = {user.id: user for user in users}
        return [id_to_user[i].username if i in id_to_user else DELETED_USER for i in ids]

    async def get_users(self, username: Optional[str] = None) -> list[dict[str, Any]]:
        filter = {"username": username} if username else None
        users = await self.users.read_many(filter, order_by=["username"])
        return [redact_password(user) for user in users]

    async def authenticate(self, username: str, password: str) -> str:
        user = self.users.assert_exists(
            await self.users.read_one({"username": username, "password": password}),
            # The password stays out of the error message
            UserNotFoundError({"username": username}),
        )
        return user.id

    async def update_username(self, _id: str, username: str) -> int:
        if not username:
            raise BadValuesError("Username must be non-empty!")
        existing = await self.users.read_one({"username": username})
        if existing is not None and existing.id != _id:
            raise UserNotAllowedError({"username": username})
        return await self.users.partial_update_one(_id, {"username": username})

    async def update_password(self, _id: str, current_password: str, new_password: str) -> int:
        """The current password is part of the match: a wrong one is a not-found."""
        if not new_password:
            raise BadValuesError("Password must be non-empty!")
        self.users.assert_exists(
            await self.users.read_one({"id": _id, "password": current_password}),
            UserNotFoundError({"id": _id}),
        )
        return await self.users.partial_update_one(_id, {"password": new_password})

    async def delete(self, _id: str) -> int:
        deleted = await self.users.delete_one(_id)
        if deleted:
            logger.info("Deleted user %s", _id)
        return deleted

    async def _assert_good_credentials(self, username: str, password: str) -> None:
        if not username or not password:
            raise BadValuesError("Username and password must be non-empty!")
        await self._assert_username_unique(username)

    async def _assert_username_unique(self, username: str) -> None:
        self.users.assert_not_exists(
            await self.users.read_one({"username": username}),
            UserNotAllowedError({"username": username}),
        )
