from fastapi import APIRouter, Depends, File, UploadFile

from sortir.core.exceptions import ValidationError, handle_exceptions
from sortir.routers.deps import get_document_service
from sortir.schemas.documents import (
    DeleteRequest,
    DeleteResponse,
    DocumentDetail,
    UploadResponse,
)
from sortir.services.document_service import DocumentService
from sortir.utils.auth import get_current_user


router = APIRouter()
_file = File(None)


@router.post("/upload", response_model=UploadResponse)
@handle_exceptions
async def upload_document(
    file: UploadFile | None = _file,
    current_user: str = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    if file is None:
        raise ValidationError("No file uploaded")

    content = await file.read()
    document = await service.process_file(
        current_user, file.filename, content, file.content_type
    )
    return UploadResponse(fileName=document.filename)


@router.get("/files", response_model=list[str])
@handle_exceptions
async def list_files(
    current_user: str = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    return await service.list_filenames(current_user)


@router.get("/files/{filename}", response_model=DocumentDetail)
@handle_exceptions
async def fetch_file(
    filename: str,
    current_user: str = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    return await service.get_document(current_user, filename)


@router.delete("/delete/{filename}", response_model=DeleteResponse)
@handle_exceptions
async def delete_file(
    filename: str,
    current_user: str = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    await service.delete_document(current_user, filename)
    return DeleteResponse()


@router.post("/delete-file", response_model=DeleteResponse)
@handle_exceptions
async def delete_file_by_body(
    request: DeleteRequest,
    current_user: str = Depends(get_current_user),
    service: DocumentService = Depends(get_document_service),
):
    filename = request.filename.strip()
    if not filename:
        raise ValidationError("A file name is required")

    await service.delete_document(current_user, filename)
    return DeleteResponse()
