from sortir.core.protocols import Document, DocumentStore


class InMemoryDocumentStore(DocumentStore):
    def __init__(self) -> None:
        self._documents: dict[str, dict[str, Document]] = {}

    async def put(
        self, owner: str, filename: str, text: str, size: int = 0
    ) -> Document:
        document = Document(owner=owner, filename=filename, text=text, size=size)
        self._documents.setdefault(owner, {})[filename] = document
        return document

    async def get(self, owner: str, filename: str) -> Document | None:
        return self._documents.get(owner, {}).get(filename)

    async def delete(self, owner: str, filename: str) -> bool:
        documents = self._documents.get(owner)
        if not documents or filename not in documents:
            return False
        del documents[filename]
        if not documents:
            del self._documents[owner]
        return True

    async def delete_owner(self, owner: str) -> int:
        return len(self._documents.pop(owner, {}))

    async def list(self, owner: str) -> list[Document]:
        return list(self._documents.get(owner, {}).values())
