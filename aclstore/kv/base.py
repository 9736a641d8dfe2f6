"""
Key-value backend interface.

A backend stores opaque byte values under string keys and offers a single
atomic primitive, ``update``, which runs a read-modify-write cycle and
retries it whenever another writer commits to the same key in between.
Enumeration of keys is an optional capability exposed through
:class:`KeyLister`.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Callable, List, Optional

# fn(current value or None when absent) -> new value, or None to leave the entry as is
UpdateFunc = Callable[[Optional[bytes]], Optional[bytes]]


@dataclass(frozen=True)
class UpdateResult:
    """Outcome of a committed update cycle."""
    value: Optional[bytes]
    written: bool


class KeyValueStore(ABC):
    """Single-key get/update storage used by the ACL store."""

    @abstractmethod
    async def get(self, key: str) -> bytes:
        """
        Return the value stored under key.

        Raises:
            KeyNotFoundError: if there is no entry for key
        """

    @abstractmethod
    async def update(self, key: str, fn: UpdateFunc) -> UpdateResult:
        """
        Atomically replace the value under key with fn(old).

        fn may be called several times if other writers commit concurrently;
        it must not have side effects. An exception raised by fn aborts the
        update without writing and propagates to the caller.
        """

    async def close(self) -> None:
        """Release backend resources."""


class KeyLister(ABC):
    """Optional capability: enumerate stored keys."""

    @abstractmethod
    async def keys(self) -> List[str]:
        """Return every key currently stored."""


def supports_listing(store: object) -> bool:
    """Report whether store can enumerate its keys."""
    return isinstance(store, KeyLister)
