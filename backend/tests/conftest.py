import pytest
from fastapi.testclient import TestClient

from sortir.core.config import Settings
from sortir.core.exceptions import GatewayError
from sortir.core.protocols import AnswerGateway
from sortir.main import create_app
from sortir.stores.disk import DiskDocumentStore
from sortir.stores.json_file import JsonFileDocumentStore
from sortir.stores.memory import InMemoryDocumentStore
from sortir.stores.redis_store import RedisDocumentStore


def _escape(text: str) -> str:
    return text.replace("\\", "\\\\").replace("(", "\\(").replace(")", "\\)")


def build_pdf(pages: list[str | None]) -> bytes:
    """Build a minimal PDF; a ``None`` page has no text layer at all."""
    objects = {
        1: b"<< /Type /Catalog /Pages 2 0 R >>",
        3: b"<< /Type /Font /Subtype /Type1 /BaseFont /Helvetica >>",
    }
    kids = []
    next_id = 4
    for text in pages:
        page_id = next_id
        next_id += 1
        kids.append(page_id)
        if text is None:
            objects[page_id] = (
                b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] /Resources << >> >>"
            )
            continue

        content_id = next_id
        next_id += 1
        stream = f"BT /F1 12 Tf 72 720 Td ({_escape(text)}) Tj ET".encode("latin-1")
        objects[page_id] = (
            b"<< /Type /Page /Parent 2 0 R /MediaBox [0 0 612 792] "
            b"/Resources << /Font << /F1 3 0 R >> >> /Contents %d 0 R >>" % content_id
        )
        objects[content_id] = (
            b"<< /Length %d >>\nstream\n" % len(stream) + stream + b"\nendstream"
        )

    kid_refs = " ".join(f"{kid} 0 R" for kid in kids).encode()
    objects[2] = b"<< /Type /Pages /Kids [" + kid_refs + b"] /Count %d >>" % len(kids)

    output = bytearray(b"%PDF-1.4\n")
    offsets = {}
    for object_id in sorted(objects):
        offsets[object_id] = len(output)
        output += b"%d 0 obj\n" % object_id + objects[object_id] + b"\nendobj\n"

    xref_offset = len(output)
    size = max(objects) + 1
    output += b"xref\n0 %d\n0000000000 65535 f \n" % size
    for object_id in range(1, size):
        output += b"%010d 00000 n \n" % offsets[object_id]
    output += b"trailer\n<< /Size %d /Root 1 0 R >>\nstartxref\n%d\n%%%%EOF\n" % (
        size,
        xref_offset,
    )
    return bytes(output)


class StubGateway(AnswerGateway):
    """Records every call and returns a canned answer."""

    def __init__(self, answer: str = "June 1") -> None:
        self.answer = answer
        self.calls: list[dict[str, str]] = []

    async def ask(self, system_instruction: str, context: str, question: str) -> str:
        self.calls.append(
            {
                "system_instruction": system_instruction,
                "context": context,
                "question": question,
            }
        )
        return self.answer


class ForbiddenGateway(AnswerGateway):
    async def ask(self, system_instruction: str, context: str, question: str) -> str:
        pytest.fail("The model must not be called")


class BrokenGateway(AnswerGateway):
    async def ask(self, system_instruction: str, context: str, question: str) -> str:
        raise GatewayError("test-model", "connection reset by peer")


class FakePipeline:
    """Queues commands and runs them together on ``execute``."""

    def __init__(self, client: "FakeRedis", transaction: bool) -> None:
        self.client = client
        self.transaction = transaction
        self.commands = []

    def __getattr__(self, name):
        def queue(*args):
            self.commands.append((name, args))
            return self

        return queue

    def execute(self):
        self.client.executed.append([name for name, _ in self.commands])
        results = [getattr(self.client, name)(*args) for name, args in self.commands]
        self.commands = []
        return results


class FakeRedis:
    """The subset of the redis client API the document store uses."""

    def __init__(self) -> None:
        self.hashes: dict[str, dict[str, str]] = {}
        self.pipelines: list[FakePipeline] = []
        self.executed: list[list[str]] = []

    def pipeline(self, transaction=True):
        pipe = FakePipeline(self, transaction)
        self.pipelines.append(pipe)
        return pipe

    def hset(self, key, field, value):
        created = field not in self.hashes.setdefault(key, {})
        self.hashes[key][field] = value
        return int(created)

    def hget(self, key, field):
        return self.hashes.get(key, {}).get(field)

    def hdel(self, key, field):
        return 1 if self.hashes.get(key, {}).pop(field, None) is not None else 0

    def hlen(self, key):
        return len(self.hashes.get(key, {}))

    def hvals(self, key):
        return list(self.hashes.get(key, {}).values())

    def delete(self, key):
        return 1 if self.hashes.pop(key, None) is not None else 0


@pytest.fixture
def invoice_pdf():
    return build_pdf(["Invoice #42 due June 1"])


@pytest.fixture
def image_only_pdf():
    return build_pdf([None])


@pytest.fixture(params=["memory", "disk", "json", "redis"])
def store(request, tmp_path):
    """Each document store backing in turn."""
    if request.param == "memory":
        return InMemoryDocumentStore()
    if request.param == "disk":
        return DiskDocumentStore(tmp_path / "uploads")
    if request.param == "json":
        return JsonFileDocumentStore(tmp_path / "documents.json")
    return RedisDocumentStore(FakeRedis(), prefix="test")


@pytest.fixture
def settings():
    return Settings(store_backend="memory", max_file_size_mb=1, _env_file=None)


@pytest.fixture
def gateway():
    return StubGateway()


@pytest.fixture
def memory_store():
    return InMemoryDocumentStore()


@pytest.fixture
def app(settings, memory_store, gateway):
    """Create FastAPI test application."""
    return create_app(settings=settings, store=memory_store, gateway=gateway)


@pytest.fixture
def client(app):
    """Create test client."""
    return TestClient(app)


@pytest.fixture
def auth_headers():
    return {"X-User-Id": "alice"}
