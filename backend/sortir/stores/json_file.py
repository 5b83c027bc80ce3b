import asyncio
import json
from pathlib import Path
from typing import Any

from sortir.config import setup_logger
from sortir.core.exceptions import StorageError
from sortir.core.protocols import Document, DocumentStore
from sortir.stores.disk import decode_record, write_json_atomic


logger = setup_logger("json-store")


class JsonFileDocumentStore(DocumentStore):
    """All owners' documents in one JSON file: ``{owner: {filename: record}}``.

    Every read-modify-write cycle holds ``self._lock`` so concurrent requests
    cannot interleave writes to the shared file.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._lock = asyncio.Lock()

    def _load(self) -> dict[str, dict[str, Any]]:
        try:
            with self._path.open(encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except ValueError as e:
            # JSONDecodeError and UnicodeDecodeError
            raise StorageError("read", f"corrupt database file {self._path}: {e}") from e
        except OSError as e:
            raise StorageError("read", str(e)) from e

        if not isinstance(data, dict) or not all(isinstance(v, dict) for v in data.values()):
            raise StorageError("read", f"unexpected database layout in {self._path}")
        return data

    def _save(self, data: dict[str, dict[str, Any]]) -> None:
        try:
            write_json_atomic(self._path, data)
        except OSError as e:
            raise StorageError("write", str(e)) from e

    def _decode(self, record: Any) -> Document:
        try:
            return decode_record(record)
        except ValueError as e:
            raise StorageError("read", f"{self._path}: {e}") from e

    async def put(
        self, owner: str, filename: str, text: str, size: int = 0
    ) -> Document:
        document = Document(owner=owner, filename=filename, text=text, size=size)
        async with self._lock:
            data = await asyncio.to_thread(self._load)
            data.setdefault(owner, {})[filename] = document.to_record()
            await asyncio.to_thread(self._save, data)
        return document

    async def get(self, owner: str, filename: str) -> Document | None:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
        record = data.get(owner, {}).get(filename)
        return self._decode(record) if record is not None else None

    async def delete(self, owner: str, filename: str) -> bool:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
            documents = data.get(owner, {})
            if filename not in documents:
                return False
            del documents[filename]
            if not documents:
                data.pop(owner, None)
            await asyncio.to_thread(self._save, data)
        return True

    async def delete_owner(self, owner: str) -> int:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
            documents = data.pop(owner, None)
            if not documents:
                return 0
            await asyncio.to_thread(self._save, data)
        logger.info(f"Removed {len(documents)} documents for {owner}")
        return len(documents)

    async def list(self, owner: str) -> list[Document]:
        async with self._lock:
            data = await asyncio.to_thread(self._load)
        return [self._decode(record) for record in data.get(owner, {}).values()]
