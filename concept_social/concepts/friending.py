"""
concept: Friending [User]

Per unordered user pair:  none → pending → {accepted, rejected}.
Accepted/rejected rows stay in ``requests`` as a log; a new pending request
may be created again afterwards. Resolving a pending request replaces it:
the pending row is popped and a terminal-status row is inserted.
"""
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from concept_social.errors import NotAllowedError, NotFoundError
from concept_social.models import Friendship, FriendRequest, RequestStatus
from concept_social.store import DocCollection, In, Or

logger = logging.getLogger(__name__)


class FriendRequestNotFoundError(NotFoundError):
    tag = "friend_request_not_found"

    def __init__(self, from_id: str, to_id: str):
        super().__init__(
            "Friend request from {0} to {1} does not exist!",
            from_id,
            to_id,
            payload={"users": [from_id, to_id]},
        )


class FriendRequestAlreadyExistsError(NotAllowedError):
    tag = "friend_request_already_exists"

    def __init__(self, from_id: str, to_id: str):
        super().__init__(
            "Friend request between {0} and {1} already exists!",
            from_id,
            to_id,
            payload={"users": [from_id, to_id]},
        )


class FriendNotFoundError(NotFoundError):
    tag = "friend_not_found"

    def __init__(self, user1: str, user2: str):
        super().__init__(
            "Friendship between {0} and {1} does not exist!",
            user1,
            user2,
            payload={"users": [user1, user2]},
        )


class SelfFriendRequestError(NotAllowedError):
    tag = "self_friend_request"

    def __init__(self, user: str):
        super().__init__("Cannot send a friend request to yourself!", payload={"user": user})


class AlreadyFriendsError(NotAllowedError):
    tag = "already_friends"

    def __init__(self, user1: str, user2: str):
        super().__init__(
            "{0} and {1} are already friends!", user1, user2, payload={"users": [user1, user2]}
        )


def _pair(u1: str, u2: str) -> Or:
    return Or({"user1": u1, "user2": u2}, {"user1": u2, "user2": u1})


class FriendingConcept:
    def __init__(self, session: AsyncSession):
        self.friends = DocCollection(Friendship, session)
        self.requests = DocCollection(FriendRequest, session)

    async def get_requests(self, user: str) -> list[FriendRequest]:
        """Every request row (pending and history) sent or received by ``user``."""
        return await self.requests.read_many(
            Or({"from_id": user}, {"to_id": user}), order_by=["created_at"]
        )

    async def create_request(self, from_id: str, to_id: str) -> str:
        await self._can_send_request(from_id, to_id)
        request_id = await self.requests.create_one(
            {"from_id": from_id, "to_id": to_id, "status": RequestStatus.PENDING.value}
        )
        logger.info("Friend request %s → %s (id=%s)", from_id, to_id, request_id)
        return request_id

    async def accept_request(self, from_id: str, to_id: str) -> tuple[str, str]:
        """
        Consume the pending request, log it as accepted and create the
        friendship edge. Returns (request_id, friendship_id).

        All three writes share the caller's unit of work, so a failure on the
        edge insert rolls back the consumed request as well.
        """
        await self._remove_pending_request(from_id, to_id)
        request_id = await self.requests.create_one(
            {"from_id": from_id, "to_id": to_id, "status": RequestStatus.ACCEPTED.value}
        )
        friendship_id = await self._add_friend(from_id, to_id)
        logger.info("Friend request %s → %s accepted", from_id, to_id)
        return request_id, friendship_id

    async def reject_request(self, from_id: str, to_id: str) -> str:
        await self._remove_pending_request(from_id, to_id)
        request_id = await self.requests.create_one(
            {"from_id": from_id, "to_id": to_id, "status": RequestStatus.REJECTED.value}
        )
        logger.info("Friend request %s → %s rejected", from_id, to_id)
        return request_id

    async def remove_request(self, from_id: str, to_id: str) -> None:
        await self._remove_pending_request(from_id, to_id)

    async def remove_friend(self, user: str, friend: str) -> None:
        try:
            await self.friends.pop_one(_pair(user, friend))
        except NotFoundError:
            raise FriendNotFoundError(user, friend) from None
        logger.info("Friendship %s ↔ %s removed", user, friend)

    async def get_friends(self, user: str) -> list[str]:
        friendships = await self.friends.read_many(
            Or({"user1": user}, {"user2": user}), order_by=["created_at"]
        )
        return [f.user2 if f.user1 == user else f.user1 for f in friendships]

    async def _add_friend(self, user1: str, user2: str) -> str:
        return await self.friends.create_one({"user1": user1, "user2": user2})

    async def _remove_pending_request(self, from_id: str, to_id: str) -> FriendRequest:
        try:
            return await self.requests.pop_one(
                {"from_id": from_id, "to_id": to_id, "status": RequestStatus.PENDING.value}
            )
        except NotFoundError:
            raise FriendRequestNotFoundError(from_id, to_id) from None

    async def _assert_not_friends(self, u1: str, u2: str) -> None:
        friendship = await self.friends.read_one(_pair(u1, u2))
        if friendship is not None:
            raise AlreadyFriendsError(u1, u2)

    async def _can_send_request(self, u1: str, u2: str) -> None:
        if u1 == u2:
            raise SelfFriendRequestError(u1)
        await self._assert_not_friends(u1, u2)
        # pending request in either direction
        request = await self.requests.read_one(
            {
                "from_id": In([u1, u2]),
                "to_id": In([u1, u2]),
                "status": RequestStatus.PENDING.value,
            }
        )
        if request is not None:
            raise FriendRequestAlreadyExistsError(u1, u2)
