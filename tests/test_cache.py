import asyncio

import pytest

from components.core.cache import ChangeEvent, ChangeFeed, QueryCache


async def test_get_or_load_caches_per_entity_key():
    cache = QueryCache()
    calls = []

    async def loader():
        calls.append(1)
        return {"amount": 1}

    assert await cache.get_or_load(("mahr", 1), loader) == {"amount": 1}
    assert await cache.get_or_load(("mahr", 1), loader) == {"amount": 1}
    assert len(calls) == 1
    assert ("mahr", 2) not in cache


async def test_optimistic_update_applies_result_on_success():
    cache = QueryCache()
    cache.set(("budgets", 1), {"income_his": 100})

    async def mutation():
        assert cache.get(("budgets", 1)) == {"income_his": 200}
        return {"income_his": 200, "id": 7}

    result = await cache.optimistic_update(("budgets", 1), {"income_his": 200}, mutation)
    assert result["id"] == 7
    assert cache.get(("budgets", 1)) == {"income_his": 200, "id": 7}


async def test_optimistic_update_reverts_on_failure():
    cache = QueryCache()
    cache.set(("budgets", 1), {"income_his": 100})

    async def mutation():
        raise RuntimeError("database unavailable")

    with pytest.raises(RuntimeError):
        await cache.optimistic_update(("budgets", 1), {"income_his": 999}, mutation)
    assert cache.get(("budgets", 1)) == {"income_his": 100}


async def test_optimistic_update_reverts_to_missing():
    cache = QueryCache()

    async def mutation():
        raise RuntimeError("boom")

    with pytest.raises(RuntimeError):
        await cache.optimistic_update(("mahr", 3), {"amount": 1}, mutation)
    assert ("mahr", 3) not in cache


async def test_change_feed_invalidates_only_the_named_entity():
    feed = ChangeFeed()
    cache = QueryCache()
    cache.attach(feed)
    cache.set(("budgets", 1), {"a": 1})
    cache.set(("budgets", 2), {"a": 2})
    cache.set(("mahr", 1), {"a": 3})

    await feed.publish(ChangeEvent("budgets", 1, "UPSERT"))

    assert ("budgets", 1) not in cache
    assert ("budgets", 2) in cache
    assert ("mahr", 1) in cache


async def test_user_deletion_drops_every_entry_for_the_user():
    feed = ChangeFeed()
    cache = QueryCache()
    cache.attach(feed)
    cache.set(("budgets", 1), {})
    cache.set(("mahr", 1), {})
    cache.set(("mahr", 2), {})

    await feed.publish(ChangeEvent("users", 1, "DELETE", 1))

    assert ("budgets", 1) not in cache
    assert ("mahr", 1) not in cache
    assert ("mahr", 2) in cache


async def test_detach_stops_invalidation():
    feed = ChangeFeed()
    cache = QueryCache()
    cache.attach(feed)
    cache.detach()
    cache.set(("budgets", 1), {})
    await feed.publish(ChangeEvent("budgets", 1, "UPSERT"))
    assert ("budgets", 1) in cache


async def test_expired_entries_are_dropped():
    cache = QueryCache(ttl_seconds=0)
    cache.set(("budgets", 1), {})
    await asyncio.sleep(0.01)
    assert cache.get(("budgets", 1)) is None


async def test_failing_listener_does_not_block_others():
    feed = ChangeFeed()
    seen = []

    async def broken(event):
        raise ValueError("listener bug")

    async def recorder(event):
        seen.append(event.table)

    feed.subscribe(broken)
    feed.subscribe(recorder)
    await feed.publish(ChangeEvent("mahr", 1, "UPSERT"))
    assert seen == ["mahr"]


async def test_listen_yields_events_in_order():
    feed = ChangeFeed()
    received = []

    async def consume():
        async for event in feed.listen():
            received.append(event.action)
            if len(received) == 2:
                break

    task = asyncio.create_task(consume())
    await asyncio.sleep(0)
    await feed.publish(ChangeEvent("mahr", 1, "INSERT"))
    await feed.publish(ChangeEvent("mahr", 1, "DELETE"))
    await asyncio.wait_for(task, timeout=1)
    assert received == ["INSERT", "DELETE"]


async def test_slow_listener_keeps_only_newest_events():
    feed = ChangeFeed(queue_size=2)
    events = feed.listen()
    first = asyncio.ensure_future(events.__anext__())
    await asyncio.sleep(0.01)
    # the pending read takes the first event straight away
    await feed.publish(ChangeEvent("mahr", 1, "INSERT", 1))
    assert (await first).row_id == 1

    for row_id in (2, 3, 4):
        await feed.publish(ChangeEvent("mahr", 1, "UPDATE", row_id))
    assert (await events.__anext__()).row_id == 3
    assert (await events.__anext__()).row_id == 4
    await events.aclose()
