import json

import pytest

from places_finder.repos.local_repo import RecentSearchRepository


@pytest.fixture
def repo(tmp_path):
    return RecentSearchRepository(path=str(tmp_path / "data" / "recent_searches.json"), limit=5)


@pytest.mark.asyncio
async def test_empty_when_missing(repo):
    assert await repo.list() == []


@pytest.mark.asyncio
async def test_most_recent_first_without_duplicates(repo):
    await repo.add("Connaught Place")
    await repo.add("India Gate")
    await repo.add("Connaught Place")

    assert await repo.list() == ["Connaught Place", "India Gate"]


@pytest.mark.asyncio
async def test_capped_at_limit(repo):
    for label in ["a", "b", "c", "d", "e", "f", "g"]:
        await repo.add(label)

    assert await repo.list() == ["g", "f", "e", "d", "c"]
    assert json.loads(repo.path.read_text()) == ["g", "f", "e", "d", "c"]


@pytest.mark.asyncio
async def test_blank_labels_are_ignored(repo):
    await repo.add("   ")
    assert await repo.list() == []


@pytest.mark.asyncio
async def test_unreadable_file_is_empty(repo):
    repo.path.write_text("{not json")

    assert await repo.list() == []
    assert await repo.add("Karol Bagh") == ["Karol Bagh"]


@pytest.mark.asyncio
async def test_clear(repo):
    await repo.add("Saket")
    await repo.clear()
    assert await repo.list() == []
