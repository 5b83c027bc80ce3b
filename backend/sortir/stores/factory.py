from sortir.config import get_redis_client, setup_logger
from sortir.core.config import Settings
from sortir.core.protocols import DocumentStore
from sortir.stores.disk import DiskDocumentStore
from sortir.stores.json_file import JsonFileDocumentStore
from sortir.stores.memory import InMemoryDocumentStore
from sortir.stores.redis_store import RedisDocumentStore


logger = setup_logger("store-factory")


def create_document_store(settings: Settings) -> DocumentStore:
    backend = settings.store_backend
    logger.info(f"Using {backend} document store", "BLUE")

    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "disk":
        return DiskDocumentStore(settings.store_path)
    if backend == "json":
        return JsonFileDocumentStore(settings.store_file)
    if backend == "redis":
        client = get_redis_client(settings.redis_host, settings.redis_port, settings.redis_db)
        return RedisDocumentStore(client, prefix=settings.redis_prefix)

    raise ValueError(f"Unknown document store backend: {backend}")
