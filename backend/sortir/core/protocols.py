from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class Document:
    owner: str
    filename: str
    text: str
    size: int = 0
    uploaded_at: datetime = field(default_factory=utcnow)

    def to_record(self) -> dict[str, Any]:
        record = asdict(self)
        record["uploaded_at"] = self.uploaded_at.isoformat()
        return record

    @classmethod
    def from_record(cls, record: dict[str, Any]) -> "Document":
        return cls(
            owner=record["owner"],
            filename=record["filename"],
            text=record["text"],
            size=record.get("size", 0),
            uploaded_at=datetime.fromisoformat(record["uploaded_at"]),
        )


class DocumentStore(ABC):
    """Per-owner persistence of extracted document text.

    Implementations raise ``StorageError`` when the backing fails and never
    leave a partially written document behind.
    """

    @abstractmethod
    async def put(
        self, owner: str, filename: str, text: str, size: int = 0
    ) -> Document:
        """Insert the document, replacing any existing one with the same filename."""

    @abstractmethod
    async def get(self, owner: str, filename: str) -> Document | None:
        pass

    @abstractmethod
    async def list(self, owner: str) -> list[Document]:
        pass

    @abstractmethod
    async def delete(self, owner: str, filename: str) -> bool:
        """Remove the document, returning whether anything was removed."""

    @abstractmethod
    async def delete_owner(self, owner: str) -> int:
        """Remove every document of ``owner`` and return how many were removed."""


class AnswerGateway(ABC):
    @abstractmethod
    async def ask(self, system_instruction: str, context: str, question: str) -> str:
        pass
