# services/tables.py
"""
Indexed tables over Redis.

A RecordTable is a primary store of flat hash records (`{prefix}:{id}`) plus a
global ID list (`index_key`). An OwnerIndex is a secondary index: one ID list
per owning driver (`driver:{driverId}:{name}`).

New IDs are pushed at the head of every list, so iteration order is newest
first. Nothing here enforces referential integrity; cascades are spelled out
by the callers in services/booking_service.py.
"""
import logging
from typing import Optional

from infra.redis_client import RedisClient

logger = logging.getLogger(__name__)


def compact(record: dict) -> dict[str, str]:
    """Drop absent fields; Redis hashes cannot hold None."""
    return {k: str(v) for k, v in record.items() if v is not None}


class RecordTable:
    def __init__(self, store: RedisClient, prefix: str, index_key: Optional[str] = None):
        self.store = store
        self.prefix = prefix
        self.index_key = index_key

    def key(self, record_id: str) -> str:
        return f"{self.prefix}:{record_id}"

    async def put(self, record_id: str, record: dict) -> dict[str, str]:
        """Write (overwrite fields of) a record without touching the index."""
        data = compact(record)
        await self.store.hset(self.key(record_id), data)
        return data

    async def insert(self, record_id: str, record: dict) -> dict[str, str]:
        data = await self.put(record_id, record)
        if self.index_key:
            await self.store.lpush(self.index_key, record_id)
        return data

    async def get(self, record_id: str) -> Optional[dict[str, str]]:
        data = await self.store.hgetall(self.key(record_id))
        return data or None

    async def ids(self) -> list[str]:
        if not self.index_key:
            return []
        return await self.store.lrange(self.index_key)

    async def all(self) -> list[dict[str, str]]:
        """Every indexed record in index order; IDs whose record is gone are skipped."""
        records = []
        for record_id in await self.ids():
            data = await self.get(record_id)
            if data:
                records.append(data)
            else:
                logger.debug("Skipping %s: no record", self.key(record_id))
        return records

    async def remove(self, record_id: str) -> dict[str, str]:
        """Delete the record and its global index entry. Returns what was stored ({} if nothing)."""
        data = await self.store.hgetall(self.key(record_id))
        await self.store.delete(self.key(record_id))
        if self.index_key:
            await self.store.lrem(self.index_key, record_id)
        return data


class OwnerIndex:
    def __init__(self, store: RedisClient, name: str, owner_prefix: str = "driver"):
        self.store = store
        self.name = name
        self.owner_prefix = owner_prefix

    def key(self, owner_id: str) -> str:
        return f"{self.owner_prefix}:{owner_id}:{self.name}"

    async def add(self, owner_id: str, record_id: str):
        await self.store.lpush(self.key(owner_id), record_id)

    async def discard(self, owner_id: str, record_id: str):
        await self.store.lrem(self.key(owner_id), record_id)

    async def members(self, owner_id: str) -> list[str]:
        return await self.store.lrange(self.key(owner_id))

    async def drop(self, owner_id: str):
        await self.store.delete(self.key(owner_id))
