"""
Sourcing concept tests.
"""
import pytest

from concept_social.concepts.sourcing import (
    ContentNotAllowedError,
    ContentNotFoundError,
    SourceNotAllowedError,
    SourceNotFoundError,
)
from concept_social.errors import UnimplementedError
from concept_social.models import SourceTarget


class FakeFetcher:
    def __init__(self, blobs):
        self.blobs = blobs
        self.calls = []

    async def fetch(self, target, uri):
        self.calls.append((target, uri))
        return list(self.blobs)


class TestRegistration:
    def test_register_is_unique_per_target_uri_and_user(self, run):
        async def scenario(app):
            await app.sourcing.register(SourceTarget.URL, "https://example.com", "u")
            await app.sourcing.register("file", "https://example.com", "u")
            await app.sourcing.register(SourceTarget.URL, "https://example.com", "v")
            with pytest.raises(SourceNotAllowedError):
                await app.sourcing.register("url", "https://example.com", "u")
            return len(await app.sourcing.lookup_sources("u"))

        assert run(scenario) == 2

    def test_unknown_target_rejected(self, run):
        async def scenario(app):
            with pytest.raises(ValueError):
                await app.sourcing.register("ftp", "x", "u")

        run(scenario)

    def test_lookup_checks_owner(self, run):
        async def scenario(app):
            source_id = await app.sourcing.register("url", "https://example.com", "u")
            with pytest.raises(SourceNotAllowedError):
                await app.sourcing.lookup_source(source_id, "v")
            with pytest.raises(SourceNotFoundError):
                await app.sourcing.lookup_source("missing", "u")

        run(scenario)


class TestUpdate:
    def test_default_fetcher_fails_without_writing(self, run):
        async def scenario(app):
            source_id = await app.sourcing.register("folder", "/tmp/notes", "u")
            with pytest.raises(UnimplementedError):
                await app.sourcing.update(source_id, "u")
            source = await app.sourcing.lookup_source(source_id, "u")
            return source.content_ids, await app.sourcing.content.read_many()

        content_ids, content = run(scenario)
        assert content_ids == []
        assert content == []

    def test_update_caches_fetched_content(self, run):
        fetcher = FakeFetcher([b"first", b"second"])

        async def scenario(app):
            source_id = await app.sourcing.register("url", "https://example.com", "u")
            new_ids = await app.sourcing.update(source_id, "u")
            source = await app.sourcing.lookup_source(source_id, "u")
            content = await app.sourcing.get_source_content(source_id, "u")
            first = await app.sourcing.get(new_ids[0], "u")
            return new_ids, source.content_ids, sorted(c.data for c in content), first

        new_ids, content_ids, data, first = run(scenario, fetcher=fetcher)
        assert fetcher.calls == [(SourceTarget.URL, "https://example.com")]
        assert content_ids == new_ids
        assert data == ["first", "second"]
        assert first.user == "u"

    def test_content_belongs_to_owner(self, run):
        async def scenario(app):
            source_id = await app.sourcing.register("url", "https://example.com", "u")
            [content_id] = await app.sourcing.update(source_id, "u")
            with pytest.raises(ContentNotAllowedError):
                await app.sourcing.get(content_id, "v")
            with pytest.raises(ContentNotFoundError):
                await app.sourcing.get("missing", "u")

        run(scenario, fetcher=FakeFetcher([b"blob"]))

    def test_unregister_removes_content(self, run):
        async def scenario(app):
            source_id = await app.sourcing.register("url", "https://example.com", "u")
            await app.sourcing.update(source_id, "u")
            await app.sourcing.unregister(source_id, "u")
            return await app.sourcing.lookup_sources("u"), await app.sourcing.content.read_many()

        assert run(scenario, fetcher=FakeFetcher([b"a", b"b"])) == ([], [])
