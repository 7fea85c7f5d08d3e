"""
Authenticating concept tests.
"""
import pytest

from concept_social.concepts.authenticating import (
    DELETED_USER,
    UserNotAllowedError,
    UserNotFoundError,
)
from concept_social.errors import BadValuesError, NotAllowedError


class TestRegister:
    def test_register_and_lookup(self, run):
        async def scenario(app):
            _id = await app.authing.register("alice", "secret")
            by_id = await app.authing.get_user_by_id(_id)
            by_name = await app.authing.get_user_by_username("alice")
            return _id, by_id, by_name

        _id, by_id, by_name = run(scenario)
        assert by_id["id"] == _id
        assert by_name["username"] == "alice"
        assert "password" not in by_id
        assert "password" not in by_name

    @pytest.mark.parametrize("username,password", [("", "pw"), ("alice", ""), ("", "")])
    def test_empty_credentials_are_bad_values(self, run, username, password):
        async def scenario(app):
            with pytest.raises(BadValuesError):
                await app.authing.register(username, password)

        run(scenario)

    def test_duplicate_username_not_allowed_regardless_of_password(self, run):
        async def scenario(app):
            await app.authing.register("alice", "one")
            with pytest.raises(UserNotAllowedError) as excinfo:
                await app.authing.register("alice", "two")
            assert isinstance(excinfo.value, NotAllowedError)

        run(scenario)

    def test_missing_user_lookups(self, run):
        async def scenario(app):
            with pytest.raises(UserNotFoundError):
                await app.authing.get_user_by_id("missing")
            with pytest.raises(UserNotFoundError):
                await app.authing.get_user_by_username("missing")

        run(scenario)


class TestAuthenticate:
    def test_authenticate_matches_both_fields(self, run):
        async def scenario(app):
            _id = await app.authing.register("alice", "secret")
            assert await app.authing.authenticate("alice", "secret") == _id
            with pytest.raises(UserNotFoundError) as excinfo:
                await app.authing.authenticate("alice", "wrong")
            assert "wrong" not in str(excinfo.value)

        run(scenario)


class TestUpdates:
    def test_update_username(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            await app.authing.register("bob", "pw")
            with pytest.raises(UserNotAllowedError):
                await app.authing.update_username(alice, "bob")
            await app.authing.update_username(alice, "alicia")
            return (await app.authing.get_user_by_id(alice))["username"]

        assert run(scenario) == "alicia"

    def test_update_password_requires_current_password(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "old")
            with pytest.raises(UserNotFoundError):
                await app.authing.update_password(alice, "not-old", "new")
            await app.authing.update_password(alice, "old", "new")
            return await app.authing.authenticate("alice", "new") == alice

        assert run(scenario)

    def test_delete(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            assert await app.authing.delete(alice) == 1
            with pytest.raises(UserNotFoundError):
                await app.authing.get_user_by_id(alice)

        run(scenario)


class TestIdsToUsernames:
    def test_stale_ids_map_to_sentinel(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            bob = await app.authing.register("bob", "pw")
            await app.authing.delete(bob)
            return await app.authing.ids_to_usernames([alice, bob, alice])

        assert run(scenario) == ["alice", DELETED_USER, "alice"]

    def test_empty_batch(self, run):
        async def scenario(app):
            return await app.authing.ids_to_usernames([])

        assert run(scenario) == []

    def test_get_users_lists_without_passwords(self, run):
        async def scenario(app):
            await app.authing.register("bob", "pw")
            await app.authing.register("alice", "pw")
            return await app.authing.get_users(), await app.authing.get_users("bob")

        everyone, only_bob = run(scenario)
        assert [u["username"] for u in everyone] == ["alice", "bob"]
        assert [u["username"] for u in only_bob] == ["bob"]
        assert all("password" not in u for u in everyone)
