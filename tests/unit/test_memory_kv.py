"""
Unit tests for the in-memory key-value backend.
"""
import pytest

from aclstore.core.exceptions import BackendError, KeyNotFoundError
from aclstore.kv.base import KeyLister, supports_listing
from aclstore.kv.memory import MemoryKVStore


class TestMemoryKVStore:
    """Test MemoryKVStore get/update semantics."""

    @pytest.mark.asyncio
    async def test_get_missing_key(self):
        kv = MemoryKVStore()

        with pytest.raises(KeyNotFoundError) as exc_info:
            await kv.get("missing")

        assert exc_info.value.key == "missing"

    @pytest.mark.asyncio
    async def test_update_creates_and_replaces(self):
        kv = MemoryKVStore()

        result = await kv.update("k", lambda old: b"one")
        assert result.written is True
        assert result.value == b"one"

        seen = []

        def append(old):
            seen.append(old)
            return old + b"+two"

        await kv.update("k", append)
        assert seen == [b"one"]
        assert await kv.get("k") == b"one+two"

    @pytest.mark.asyncio
    async def test_update_returning_none_does_not_write(self):
        kv = MemoryKVStore()

        result = await kv.update("k", lambda old: None)

        assert result.written is False
        assert result.value is None
        with pytest.raises(KeyNotFoundError):
            await kv.get("k")

    @pytest.mark.asyncio
    async def test_empty_value_is_stored(self):
        kv = MemoryKVStore()

        await kv.update("k", lambda old: b"")

        assert await kv.get("k") == b""

    @pytest.mark.asyncio
    async def test_exception_in_fn_aborts_update(self):
        kv = MemoryKVStore()
        await kv.update("k", lambda old: b"orig")

        def fail(old):
            raise ValueError("boom")

        with pytest.raises(ValueError, match="boom"):
            await kv.update("k", fail)

        assert await kv.get("k") == b"orig"

    @pytest.mark.asyncio
    async def test_conflicting_write_is_retried(self):
        kv = MemoryKVStore()
        await kv.update("k", lambda old: b"a")
        calls = []

        def racing(old):
            calls.append(old)
            if len(calls) == 1:
                # Another writer commits between our read and our write.
                version, value = kv._data["k"]
                kv._data["k"] = (version + 1, b"b")
            return old + b"!"

        result = await kv.update("k", racing)

        assert calls == [b"a", b"b"]
        assert result.value == b"b!"
        assert await kv.get("k") == b"b!"

    @pytest.mark.asyncio
    async def test_too_many_conflicts(self):
        kv = MemoryKVStore(max_attempts=3)
        await kv.update("k", lambda old: b"a")

        def always_racing(old):
            version, value = kv._data["k"]
            kv._data["k"] = (version + 1, value)
            return b"x"

        with pytest.raises(BackendError, match="too many concurrent modifications"):
            await kv.update("k", always_racing)

    @pytest.mark.asyncio
    async def test_keys(self):
        kv = MemoryKVStore()
        await kv.update("a", lambda old: b"")
        await kv.update("b", lambda old: b"x")
        await kv.update("c", lambda old: None)

        assert sorted(await kv.keys()) == ["a", "b"]
        assert isinstance(kv, KeyLister)
        assert supports_listing(kv)
