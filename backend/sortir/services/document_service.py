from pathlib import PurePosixPath, PureWindowsPath
from typing import Any

from sortir.config import (
    PREVIEW_LENGTH,
    SUPPORTED_EXTENSIONS,
    SUPPORTED_FILE_TYPES,
    setup_logger,
)
from sortir.core.exceptions import DocumentNotFoundError, ValidationError
from sortir.core.protocols import Document, DocumentStore
from sortir.services.extractor import extract_text


logger = setup_logger("document-service")


def clean_filename(filename: str | None) -> str:
    """Strip any directory parts a client sent along with the filename."""
    name = PureWindowsPath(PurePosixPath(filename or "").name).name.strip()
    if not name or name in (".", ".."):
        raise ValidationError("A file name is required")
    return name


class DocumentService:
    def __init__(self, store: DocumentStore, max_file_size_bytes: int) -> None:
        self._store = store
        self._max_file_size_bytes = max_file_size_bytes

    def validate_file(self, filename: str, content_type: str | None, size: int) -> str:
        name = clean_filename(filename)

        if not name.lower().endswith(tuple(SUPPORTED_EXTENSIONS)):
            raise ValidationError("Only PDF files are supported")
        if content_type and content_type.split(";")[0].strip() not in SUPPORTED_FILE_TYPES:
            raise ValidationError("Only PDF files are supported")
        if size == 0:
            raise ValidationError("Uploaded file is empty")
        if size > self._max_file_size_bytes:
            raise ValidationError(
                f"File size exceeds maximum limit of {self._max_file_size_bytes // (1024*1024)} MB"
            )
        return name

    async def process_file(
        self,
        user_id: str,
        filename: str,
        content: bytes,
        content_type: str | None = None,
    ) -> Document:
        name = self.validate_file(filename, content_type, len(content))
        text = extract_text(content)
        document = await self._store.put(user_id, name, text, size=len(content))
        logger.info(f"Stored {name} for user {user_id} ({len(text)} characters)")
        return document

    async def list_filenames(self, user_id: str) -> list[str]:
        documents = await self._store.list(user_id)
        return sorted(document.filename for document in documents)

    async def get_document(self, user_id: str, filename: str) -> dict[str, Any]:
        document = await self._store.get(user_id, filename)
        if document is None:
            raise DocumentNotFoundError(filename)

        preview = document.text[:PREVIEW_LENGTH]
        if len(document.text) > PREVIEW_LENGTH:
            preview += "..."

        return {
            "fileName": document.filename,
            "size": document.size,
            "uploadedAt": document.uploaded_at,
            "length": len(document.text),
            "preview": preview,
        }

    async def delete_document(self, user_id: str, filename: str) -> None:
        if not await self._store.delete(user_id, filename):
            raise DocumentNotFoundError(filename)
        logger.info(f"Document {filename} deleted by user {user_id}")
