import asyncio
import json

import redis

from sortir.config import setup_logger
from sortir.core.exceptions import StorageError
from sortir.core.protocols import Document, DocumentStore
from sortir.stores.disk import decode_record


logger = setup_logger("redis-store")


class RedisDocumentStore(DocumentStore):
    """One redis hash per owner, keyed by filename.

    The client is the blocking ``redis.Redis``; every call runs in a worker
    thread.
    """

    def __init__(self, client: redis.Redis, prefix: str = "sortir:documents") -> None:
        self._client = client
        self._prefix = prefix

    def _key(self, owner: str) -> str:
        return f"{self._prefix}:{owner}"

    def _decode(self, owner: str, raw: str) -> Document:
        try:
            return decode_record(json.loads(raw))
        except (ValueError, TypeError) as e:
            raise StorageError("read", f"bad record under {self._key(owner)}: {e}") from e

    def _pop_all(self, key: str) -> int:
        pipe = self._client.pipeline(transaction=True)
        pipe.hlen(key)
        pipe.delete(key)
        count, _ = pipe.execute()
        return count

    async def put(
        self, owner: str, filename: str, text: str, size: int = 0
    ) -> Document:
        document = Document(owner=owner, filename=filename, text=text, size=size)
        payload = json.dumps(document.to_record())
        try:
            await asyncio.to_thread(self._client.hset, self._key(owner), filename, payload)
        except redis.RedisError as e:
            raise StorageError("write", str(e)) from e
        return document

    async def get(self, owner: str, filename: str) -> Document | None:
        try:
            raw = await asyncio.to_thread(self._client.hget, self._key(owner), filename)
        except redis.RedisError as e:
            raise StorageError("read", str(e)) from e
        if raw is None:
            return None
        return self._decode(owner, raw)

    async def delete(self, owner: str, filename: str) -> bool:
        try:
            removed = await asyncio.to_thread(self._client.hdel, self._key(owner), filename)
        except redis.RedisError as e:
            raise StorageError("delete", str(e)) from e
        return removed > 0

    async def delete_owner(self, owner: str) -> int:
        try:
            count = await asyncio.to_thread(self._pop_all, self._key(owner))
        except redis.RedisError as e:
            raise StorageError("delete", str(e)) from e
        if count:
            logger.info(f"Removed {count} documents for {owner}")
        return count

    async def list(self, owner: str) -> list[Document]:
        try:
            raw_records = await asyncio.to_thread(self._client.hvals, self._key(owner))
        except redis.RedisError as e:
            raise StorageError("read", str(e)) from e
        return [self._decode(owner, raw) for raw in raw_records]
