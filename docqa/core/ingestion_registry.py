"""
Ingestion registry (dedup cache).

Tracks which content-hashes have been indexed in this process so a document
is embedded and upserted at most once per process lifetime. A per-hash lock
serializes concurrent ingestion of the same document: the second caller waits
for the first and then sees the processed marker.

In-memory only: not durable across restarts, not shared across instances.

Dependencies: asyncio
System role: Idempotent ingestion per content-hash
"""

import asyncio
import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

logger = logging.getLogger(__name__)


class IngestionRegistry:
    """Process-lifetime set of indexed content-hashes with per-hash locking."""

    def __init__(self) -> None:
        self._processed: set[str] = set()
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    def is_processed(self, content_hash: str) -> bool:
        """Return True when the hash has completed indexing."""
        return content_hash in self._processed

    def mark_processed(self, content_hash: str) -> None:
        """Record that indexing of the hash completed."""
        self._processed.add(content_hash)
        logger.debug(f"{__name__}:mark_processed - hash={content_hash[:12]}")

    @asynccontextmanager
    async def claim(self, content_hash: str) -> AsyncIterator[bool]:
        """
        Hold the ingestion lock for a content-hash.

        Yields:
            bool: True when the hash was already processed on entry
        """
        lock = self._locks.setdefault(content_hash, asyncio.Lock())
        self._lock_users[content_hash] = self._lock_users.get(content_hash, 0) + 1
        try:
            async with lock:
                yield self.is_processed(content_hash)
        finally:
            # Drop the lock once no caller holds or waits on it
            self._lock_users[content_hash] -= 1
            if self._lock_users[content_hash] == 0:
                del self._lock_users[content_hash]
                self._locks.pop(content_hash, None)

    def __len__(self) -> int:
        return len(self._processed)

    def clear(self) -> None:
        """Forget all processed hashes (tests and admin use)."""
        self._processed.clear()
        self._locks.clear()
        self._lock_users.clear()
