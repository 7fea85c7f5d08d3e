"""
Sorting concept tests: weight profile bookkeeping and the unimplemented ranker.
"""
import pytest

from concept_social.concepts.labelling import LabelNotAllowedError, LabelNotFoundError
from concept_social.concepts.sorting import SortNotAllowedError, SortNotFoundError
from concept_social.errors import UnimplementedError


class TestProfiles:
    def test_one_profile_per_user(self, run):
        async def scenario(app):
            sort_id = await app.sorting.register("u")
            with pytest.raises(SortNotAllowedError):
                await app.sorting.register("u")
            return sort_id, (await app.sorting.lookup("u")).id

        sort_id, looked_up = run(scenario)
        assert sort_id == looked_up

    def test_unregister(self, run):
        async def scenario(app):
            sort_id = await app.sorting.register("u")
            await app.sorting.unregister(sort_id)
            with pytest.raises(SortNotFoundError):
                await app.sorting.lookup("u")
            with pytest.raises(SortNotFoundError):
                await app.sorting.unregister(sort_id)

        run(scenario)


class TestWeights:
    def test_add_set_get_remove(self, run):
        async def scenario(app):
            sort_id = await app.sorting.register("u")
            await app.sorting.add(sort_id, "work", 2.0)
            with pytest.raises(LabelNotAllowedError):
                await app.sorting.add(sort_id, "work", 3.0)
            first = await app.sorting.get(sort_id, "work")
            await app.sorting.set(sort_id, "work", 0.5)
            second = await app.sorting.get(sort_id, "work")
            await app.sorting.remove(sort_id, "work")
            with pytest.raises(LabelNotFoundError):
                await app.sorting.remove(sort_id, "work")
            return first, second

        assert run(scenario) == (2.0, 0.5)

    def test_set_and_get_require_existing_label(self, run):
        async def scenario(app):
            sort_id = await app.sorting.register("u")
            with pytest.raises(LabelNotAllowedError):
                await app.sorting.set(sort_id, "work", 1.0)
            with pytest.raises(LabelNotAllowedError):
                await app.sorting.get(sort_id, "work")

        run(scenario)

    def test_operations_on_missing_profile(self, run):
        async def scenario(app):
            with pytest.raises(SortNotFoundError):
                await app.sorting.add("missing", "work", 1.0)

        run(scenario)


class TestRanking:
    def test_sort_is_not_implemented(self, run):
        async def scenario(app):
            sort_id = await app.sorting.register("u")
            with pytest.raises(UnimplementedError) as excinfo:
                await app.sorting.sort(sort_id, ["r1", "r2"])
            return excinfo.value.status_code

        assert run(scenario) == 501

    def test_sort_checks_profile_first(self, run):
        async def scenario(app):
            with pytest.raises(SortNotFoundError):
                await app.sorting.sort("missing", ["r1"])

        run(scenario)
