from fastapi import Request

from sortir.core.config import Settings
from sortir.services.document_service import DocumentService
from sortir.services.qa_service import QAService


def get_document_service(request: Request) -> DocumentService:
    settings: Settings = request.app.state.settings
    return DocumentService(
        request.app.state.store,
        max_file_size_bytes=settings.max_file_size_bytes,
    )


def get_qa_service(request: Request) -> QAService:
    settings: Settings = request.app.state.settings
    return QAService(
        request.app.state.store,
        request.app.state.gateway,
        max_context_length=settings.max_context_length,
        max_question_length=settings.max_question_length,
    )
