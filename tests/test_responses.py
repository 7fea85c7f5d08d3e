"""
Response shaping and error enrichment.
"""
from concept_social.concepts.authenticating import DELETED_USER
from concept_social.concepts.friending import FriendRequestNotFoundError
from concept_social.errors import NotFoundError
from concept_social.responses import ERROR_REGISTRY, Responses, handle_error


class TestDocuments:
    def test_posts_replace_author_with_username(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            bob = await app.authing.register("bob", "pw")
            feed_id = await app.posting.register("general")
            await app.posting.post(feed_id, alice, "hello")
            await app.posting.post(feed_id, bob, "bye")
            await app.authing.delete(bob)
            return await Responses.posts(app, await app.posting.get(feed_id))

        posts = run(scenario)
        assert [p["author"] for p in posts] == ["alice", DELETED_USER]
        assert [p["content"] for p in posts] == ["hello", "bye"]
        assert all(isinstance(p["created_at"], str) for p in posts)

    def test_single_post_and_none(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            feed_id = await app.posting.register("general")
            post_id = await app.posting.post(feed_id, alice, "hello")
            post = await app.posting.posts.read_one(post_id)
            return await Responses.post(app, post), await Responses.post(app, None)

        shaped, missing = run(scenario)
        assert shaped["author"] == "alice"
        assert missing is None

    def test_friend_requests_use_usernames(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            bob = await app.authing.register("bob", "pw")
            await app.friending.create_request(alice, bob)
            return await Responses.friend_requests(app, await app.friending.get_requests(alice))

        [request] = run(scenario)
        assert request["from"] == "alice"
        assert request["to"] == "bob"
        assert request["status"] == "pending"
        assert "from_id" not in request


class TestErrorRegistry:
    def test_friend_errors_are_rewritten_with_usernames(self, run):
        async def scenario(app):
            alice = await app.authing.register("alice", "pw")
            bob = await app.authing.register("bob", "pw")
            return await handle_error(FriendRequestNotFoundError(alice, bob), app)

        error = run(scenario)
        assert error.message == "Friend request from alice to bob does not exist!"
        assert error.status_code == 404

    def test_unregistered_tags_pass_through(self, run):
        original = NotFoundError("nothing {0}", "here")
        assert original.tag not in ERROR_REGISTRY

        async def scenario(app):
            return await handle_error(original, app)

        assert run(scenario) is original
