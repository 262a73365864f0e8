from __future__ import annotations

import time
from collections import OrderedDict

import pytest

from kvadapter.adapters import Adapter, MemoryAdapter
from kvadapter.core.errors import IncompleteAPI, LockTimeout
from kvadapter.core.settings import Settings
from kvadapter.core.store import parse_expiration


@pytest.mark.asyncio
async def test_memory_adapter_basic_operations():
    adapter = MemoryAdapter()
    await adapter.write("foo", "bar")
    assert await adapter.read("foo") == "bar"

    await adapter.delete("foo")
    assert await adapter.read("foo") is None

    await adapter.write("foo", "bar")
    await adapter.clear()
    assert await adapter.read("foo") is None


@pytest.mark.asyncio
async def test_fetch_returns_value_default_or_factory_result():
    adapter = MemoryAdapter()
    assert await adapter.fetch("foo", "baz") == "baz"
    assert await adapter.fetch("foo", factory=lambda key: key) == "foo"

    await adapter.write("foo", "bar")
    assert await adapter.fetch("foo", "baz") == "bar"
    assert await adapter.fetch("foo", factory=lambda key: "unused") == "bar"


@pytest.mark.asyncio
async def test_fetch_awaits_async_factory():
    adapter = MemoryAdapter()

    async def fill(key):
        await adapter.write(key, "written in factory")
        return await adapter.read(key)

    assert await adapter.fetch("foo", "default", factory=fill) == "written in factory"
    assert await adapter.read("foo") == "written in factory"


@pytest.mark.asyncio
async def test_key_exists_and_read_multiple():
    adapter = MemoryAdapter()
    assert await adapter.key_exists("foo") is False
    await adapter.write("foo", 1)
    assert await adapter.key_exists("foo") is True
    assert await adapter.read_multiple("foo", "bar") == {"foo": 1, "bar": None}


def test_options_are_kept():
    adapter = MemoryAdapter({}, options={"namespace": "foo"})
    assert adapter.options["namespace"] == "foo"
    assert adapter.name == "memory"


def test_equality_uses_name_and_client():
    class DictAdapter(MemoryAdapter):
        name = "dict"

    assert MemoryAdapter({}) == MemoryAdapter({})
    assert hash(MemoryAdapter({})) == hash(MemoryAdapter({}))
    assert MemoryAdapter({}) != MemoryAdapter({"a": 1})
    assert MemoryAdapter({}) != DictAdapter({})

    plain, ordered = MemoryAdapter({}), MemoryAdapter(OrderedDict())
    assert plain == ordered
    assert hash(plain) == hash(ordered)
    assert len({plain, ordered}) == 1


@pytest.mark.parametrize("missing", ["read", "write", "delete", "clear"])
def test_incomplete_adapter_is_rejected(missing):
    async def noop(self, *args):
        return None

    namespace = {name: noop for name in ("read", "write", "delete", "clear") if name != missing}
    namespace["store"] = property(lambda self: None)

    with pytest.raises(IncompleteAPI, match=rf"Missing methods needed to complete API \({missing}\)"):
        type("Partial", (Adapter,), namespace)


@pytest.mark.asyncio
async def test_adapter_lock_uses_shared_client():
    client: dict = {}
    adapter = MemoryAdapter(client)

    async with adapter.lock("job") as expires_at:
        assert parse_expiration(client["job"]) == pytest.approx(expires_at)
        with pytest.raises(LockTimeout):
            await MemoryAdapter(client).run_locked("job", lambda: None, timeout=0.2)
    assert "job" not in client


@pytest.mark.asyncio
async def test_adapter_lock_defaults_follow_settings():
    settings = Settings.model_validate({"store": {"key_prefix": "lock:"}, "lock": {"timeout_seconds": 2}})
    adapter = MemoryAdapter(settings=settings)

    assert adapter.locks.timeout == 2
    assert await adapter.run_locked("job", lambda: "ok") == "ok"
    assert await adapter.key_exists("lock:job") is False


@pytest.mark.asyncio
async def test_redis_adapter_round_trip_and_lock():
    fakeredis = pytest.importorskip("fakeredis", reason="fakeredis is required for Redis adapter tests")
    from kvadapter.adapters import RedisAdapter

    client = fakeredis.aioredis.FakeRedis()
    await client.flushdb()
    adapter = RedisAdapter(client)

    await adapter.write("foo", {"bar": [1, 2]})
    assert await adapter.read("foo") == {"bar": [1, 2]}
    assert await adapter.key_exists("missing") is False
    assert adapter == RedisAdapter(client)
    assert adapter != MemoryAdapter({})

    async with adapter.lock("job", expiration=5) as expires_at:
        assert parse_expiration(await client.get("job")) == pytest.approx(expires_at)
    assert await client.get("job") is None

    await adapter.clear()
    assert await adapter.read("foo") is None
    await adapter.close()


@pytest.mark.asyncio
async def test_redis_store_reclaims_stale_lock():
    fakeredis = pytest.importorskip("fakeredis", reason="fakeredis is required for Redis store tests")
    from kvadapter.core.locks import LockManager
    from kvadapter.core.store_redis import RedisStore

    client = fakeredis.aioredis.FakeRedis()
    await client.flushdb()
    await client.set("job", str(time.time() - 10))
    store = RedisStore(client)

    assert await store.set_if_absent("job", "1") is False
    result = await LockManager(store).run("job", lambda: "reclaimed", timeout=1)

    assert result == "reclaimed"
    assert await store.get("job") is None
    await store.close()


@pytest.mark.asyncio
async def test_redis_adapter_returns_raw_bytes_for_non_json_values():
    fakeredis = pytest.importorskip("fakeredis", reason="fakeredis is required for Redis adapter tests")
    from kvadapter.adapters import RedisAdapter

    client = fakeredis.aioredis.FakeRedis()
    await client.flushdb()
    await client.set("plain", "not json {")
    adapter = RedisAdapter(client)

    assert await adapter.read("plain") == b"not json {"
    assert await adapter.key_exists("plain") is True
    await adapter.close()


@pytest.mark.asyncio
async def test_redis_adapter_from_settings_prefixes_lock_keys(monkeypatch):
    fakeredis = pytest.importorskip("fakeredis", reason="fakeredis is required for Redis adapter tests")
    from kvadapter.adapters import adapter_redis

    client = fakeredis.aioredis.FakeRedis()
    await client.flushdb()
    urls = []

    def from_url(url, **kwargs):
        urls.append(url)
        return client

    monkeypatch.setattr(adapter_redis.Redis, "from_url", from_url)
    settings = Settings.model_validate(
        {"store": {"redis_url": "redis://cache:6379/3", "key_prefix": "lock:"}, "lock": {"timeout_seconds": 2}}
    )

    adapter = adapter_redis.RedisAdapter.from_settings(settings)

    assert urls == ["redis://cache:6379/3"]
    assert adapter.client is client
    assert adapter.locks.timeout == 2
    async with adapter.lock("job", expiration=5) as expires_at:
        assert parse_expiration(await client.get("lock:job")) == pytest.approx(expires_at)
        assert await client.get("job") is None
    assert await client.get("lock:job") is None
    await adapter.close()
