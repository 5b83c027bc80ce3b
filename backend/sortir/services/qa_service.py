from sortir.config import setup_logger
from sortir.core.exceptions import GatewayError, UpstreamError, ValidationError
from sortir.core.protocols import AnswerGateway, DocumentStore
from sortir.services.context import assemble_context


logger = setup_logger("qa-service")

SYSTEM_INSTRUCTION = (
    "Answer only from the supplied context. "
    "If the answer is not present in the context, say so explicitly."
)

NO_DOCUMENTS_ANSWER = (
    "No documents available. Upload a PDF document before asking a question."
)


class QAService:
    def __init__(
        self,
        store: DocumentStore,
        gateway: AnswerGateway,
        max_context_length: int,
        max_question_length: int = 2000,
    ) -> None:
        self._store = store
        self._gateway = gateway
        self._max_context_length = max_context_length
        self._max_question_length = max_question_length

    async def ask(self, user_id: str, question: str) -> str:
        if not user_id:
            raise ValidationError("Missing user identity")

        question = (question or "").strip()
        if not question:
            raise ValidationError("Question cannot be empty")
        if len(question) > self._max_question_length:
            raise ValidationError(
                f"Question exceeds maximum length of {self._max_question_length} characters"
            )

        documents = await self._store.list(user_id)
        if not documents:
            logger.info(f"No documents for user {user_id}, skipping model call")
            return NO_DOCUMENTS_ANSWER

        documents = sorted(documents, key=lambda document: document.filename)
        context = assemble_context(documents, self._max_context_length)
        logger.info(
            f"Answering for user {user_id} from {len(documents)} documents "
            f"({len(context)} context characters)"
        )

        try:
            return await self._gateway.ask(SYSTEM_INSTRUCTION, context, question)
        except GatewayError as e:
            raise UpstreamError(e.reason or e.detail) from e
