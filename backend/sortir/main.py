from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from sortir.config import setup_logger
from sortir.core.config import Settings
from sortir.core.config import settings as default_settings
from sortir.core.protocols import AnswerGateway, DocumentStore
from sortir.models.qa import HealthCheck
from sortir.routers import documents, qa
from sortir.services.model_client import create_gateway
from sortir.stores.factory import create_document_store


logger = setup_logger("main")


def create_app(
    settings: Settings | None = None,
    store: DocumentStore | None = None,
    gateway: AnswerGateway | None = None,
) -> FastAPI:
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info(f"Starting {settings.name} v{settings.version}", "BLUE")
        yield
        logger.info(f"Stopping {settings.name}", "BLUE")

    app = FastAPI(
        title=settings.name,
        version=settings.version,
        debug=settings.debug,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.store = store if store is not None else create_document_store(settings)
    app.state.gateway = gateway if gateway is not None else create_gateway(settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(documents.router, prefix=settings.prefix, tags=["documents"])
    app.include_router(qa.router, prefix=settings.prefix, tags=["qa"])

    @app.get("/")
    async def root():
        return {
            "message": f"Welcome to {settings.name}",
            "version": settings.version,
        }

    @app.get("/health", response_model=HealthCheck)
    async def health_check() -> HealthCheck:
        return HealthCheck(version=settings.version)

    return app
