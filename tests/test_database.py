import asyncio

import pytest

from database import Database


def run(url, scenario):
    async def main():
        database = Database(url)
        await database.init()
        try:
            return await scenario(database)
        finally:
            await database.close()
    return asyncio.run(main())


@pytest.fixture
def url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'parallel.db'}"


def test_parallel_collects_results_by_name(url):
    async def one(db):
        await asyncio.sleep(0.01)
        return 1

    async def two(db):
        return 2

    result = run(url, lambda database: database.parallel(first=one, second=two))
    assert result == {"first": 1, "second": 2}


def test_parallel_gives_each_task_its_own_session(url):
    async def session_of(db):
        return db

    result = run(url, lambda database: database.parallel(a=session_of, b=session_of))
    assert result["a"] is not result["b"]


def test_parallel_propagates_first_failure(url):
    async def ok(db):
        return "fine"

    async def broken(db):
        raise ValueError("lookup failed")

    with pytest.raises(ValueError, match="lookup failed"):
        run(url, lambda database: database.parallel(good=ok, bad=broken))
