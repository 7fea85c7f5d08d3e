"""
Posting concept tests.
"""
import pytest

from concept_social.concepts.posting import (
    FeedNotAllowedError,
    FeedNotFoundError,
    PostNotAllowedError,
    PostNotFoundError,
)


class TestFeeds:
    def test_feed_names_are_unique(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            with pytest.raises(FeedNotAllowedError):
                await app.posting.register("general")
            return feed_id, (await app.posting.lookup("general")).id

        feed_id, looked_up = run(scenario)
        assert feed_id == looked_up

    def test_unregister_removes_posts(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            await app.posting.post(feed_id, "u", "hello")
            await app.posting.unregister(feed_id)
            with pytest.raises(FeedNotFoundError):
                await app.posting.get(feed_id)
            return await app.posting.posts.read_many()

        assert run(scenario) == []


class TestPosts:
    def test_posts_in_creation_order(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            for text in ("one", "two", "three"):
                await app.posting.post(feed_id, "u", text)
            return [p.content for p in await app.posting.get(feed_id)]

        assert run(scenario) == ["one", "two", "three"]

    def test_post_keeps_known_options_only(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            post_id = await app.posting.post(
                feed_id, "u", "hi", {"background_color": "#fff", "font": "comic"}
            )
            return (await app.posting.posts.read_one(post_id)).options

        assert run(scenario) == {"background_color": "#fff"}

    def test_post_to_missing_feed(self, run):
        async def scenario(app):
            with pytest.raises(FeedNotFoundError):
                await app.posting.post("missing", "u", "hi")

        run(scenario)

    def test_update_own_post(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            post_id = await app.posting.post(feed_id, "u", "hi", {"background_color": "#fff"})
            await app.posting.update(feed_id, post_id, "u", content="edited")
            edited = await app.posting.posts.read_one(post_id)
            content, options = edited.content, edited.options
            await app.posting.update(feed_id, post_id, "u", options={"background_color": "#000"})
            return content, options, (await app.posting.posts.read_one(post_id)).options

        content, options, recoloured = run(scenario)
        assert content == "edited"
        assert options == {"background_color": "#fff"}
        assert recoloured == {"background_color": "#000"}

    def test_update_checks_author_and_post(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            post_id = await app.posting.post(feed_id, "u", "hi")
            with pytest.raises(PostNotAllowedError):
                await app.posting.update(feed_id, post_id, "v", content="mine now")
            with pytest.raises(PostNotFoundError):
                await app.posting.update(feed_id, "missing", "u", content="x")
            return (await app.posting.posts.read_one(post_id)).content

        assert run(scenario) == "hi"

    def test_unpost_checks_author(self, run):
        async def scenario(app):
            feed_id = await app.posting.register("general")
            post_id = await app.posting.post(feed_id, "u", "hi")
            with pytest.raises(PostNotAllowedError):
                await app.posting.unpost(feed_id, post_id, "v")
            await app.posting.unpost(feed_id, post_id, "u")
            with pytest.raises(PostNotFoundError):
                await app.posting.unpost(feed_id, post_id)

        run(scenario)
