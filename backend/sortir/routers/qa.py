from fastapi import APIRouter, Depends

from sortir.core.exceptions import handle_exceptions
from sortir.models.qa import AskRequest, AskResponse
from sortir.routers.deps import get_qa_service
from sortir.services.qa_service import QAService
from sortir.utils.auth import get_current_user


router = APIRouter()


@router.post("/ask", response_model=AskResponse)
@handle_exceptions
async def ask(
    request: AskRequest,
    current_user: str = Depends(get_current_user),
    service: QAService = Depends(get_qa_service),
):
    answer = await service.ask(current_user, request.question)
    return AskResponse(answer=answer)
