import asyncio
import hashlib
import json
import os
import shutil
import tempfile
from pathlib import Path
from typing import Any

from sortir.config import setup_logger
from sortir.core.exceptions import StorageError
from sortir.core.protocols import Document, DocumentStore


logger = setup_logger("disk-store")

RECORD_SUFFIX = ".json"


def hash_name(name: str) -> str:
    """Fixed-length path component for ``name``; the real name lives inside the record."""
    return hashlib.sha256(name.encode("utf-8")).hexdigest()


def decode_record(record: Any) -> Document:
    """Build a Document from a stored record, raising ValueError for any malformed shape."""
    if not isinstance(record, dict):
        raise ValueError(f"expected a document record, got {type(record).__name__}")
    try:
        return Document.from_record(record)
    except (KeyError, TypeError) as e:
        raise ValueError(f"malformed document record: {e!r}") from e


def write_json_atomic(path: Path, payload: object) -> None:
    """Write ``payload`` to a sibling temp file, then move it over ``path``."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=".tmp-", suffix=RECORD_SUFFIX)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as tmp:
            json.dump(payload, tmp, ensure_ascii=False)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_name, path)
    except BaseException:
        Path(tmp_name).unlink(missing_ok=True)
        raise


class DiskDocumentStore(DocumentStore):
    """One directory per owner, one JSON record per document."""

    def __init__(self, root: str | Path) -> None:
        self._root = Path(root)

    def _owner_dir(self, owner: str) -> Path:
        return self._root / hash_name(owner)

    def _record_path(self, owner: str, filename: str) -> Path:
        return self._owner_dir(owner) / f"{hash_name(filename)}{RECORD_SUFFIX}"

    def _read(self, path: Path) -> Document | None:
        try:
            with path.open(encoding="utf-8") as f:
                return decode_record(json.load(f))
        except FileNotFoundError:
            return None

    def _write(self, document: Document) -> None:
        write_json_atomic(
            self._record_path(document.owner, document.filename),
            document.to_record(),
        )

    def _remove(self, owner: str, filename: str) -> bool:
        try:
            self._record_path(owner, filename).unlink()
        except FileNotFoundError:
            return False
        return True

    def _remove_owner(self, owner: str) -> int:
        owner_dir = self._owner_dir(owner)
        if not owner_dir.is_dir():
            return 0
        count = len(list(owner_dir.glob(f"*{RECORD_SUFFIX}")))
        shutil.rmtree(owner_dir)
        return count

    def _read_all(self, owner: str) -> list[Document]:
        owner_dir = self._owner_dir(owner)
        if not owner_dir.is_dir():
            return []
        documents = []
        for path in owner_dir.iterdir():
            if path.name.startswith(".tmp-") or path.suffix != RECORD_SUFFIX:
                continue
            document = self._read(path)
            if document is not None:
                documents.append(document)
        return documents

    async def put(
        self, owner: str, filename: str, text: str, size: int = 0
    ) -> Document:
        document = Document(owner=owner, filename=filename, text=text, size=size)
        try:
            await asyncio.to_thread(self._write, document)
        except OSError as e:
            raise StorageError("write", str(e)) from e
        logger.debug(f"Stored {filename} for {owner} under {self._owner_dir(owner)}")
        return document

    async def get(self, owner: str, filename: str) -> Document | None:
        try:
            return await asyncio.to_thread(self._read, self._record_path(owner, filename))
        except (OSError, ValueError) as e:
            raise StorageError("read", str(e)) from e

    async def delete(self, owner: str, filename: str) -> bool:
        try:
            return await asyncio.to_thread(self._remove, owner, filename)
        except OSError as e:
            raise StorageError("delete", str(e)) from e

    async def delete_owner(self, owner: str) -> int:
        try:
            return await asyncio.to_thread(self._remove_owner, owner)
        except OSError as e:
            raise StorageError("delete", str(e)) from e

    async def list(self, owner: str) -> list[Document]:
        try:
            return await asyncio.to_thread(self._read_all, owner)
        except (OSError, ValueError) as e:
            raise StorageError("read", str(e)) from e
