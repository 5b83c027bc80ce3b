from openai import APIError, AsyncOpenAI

from sortir.config import (
    get_hosted_llm_client,
    get_ollama_client,
    get_openrouter_client,
    setup_logger,
)
from sortir.core.config import Settings
from sortir.core.exceptions import GatewayError
from sortir.core.protocols import AnswerGateway


logger = setup_logger("model-client")


def build_user_message(context: str, question: str) -> str:
    return f"Context:\n{context}\n\nQuestion: {question}"


class OpenAICompatibleClient(AnswerGateway):
    def __init__(
        self,
        client: AsyncOpenAI,
        model: str,
        temperature: float = 0.2,
        max_tokens: int = 1000,
    ) -> None:
        self._client = client
        self._model = model
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def ask(self, system_instruction: str, context: str, question: str) -> str:
        try:
            response = await self._client.chat.completions.create(
                model=self._model,
                messages=[
                    {"role": "system", "content": system_instruction},
                    {"role": "user", "content": build_user_message(context, question)},
                ],
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except APIError as e:
            raise GatewayError(self._model, f"{type(e).__name__}: {e}") from e

        try:
            content = response.choices[0].message.content
        except (AttributeError, IndexError, TypeError) as e:
            raise GatewayError(self._model, "malformed completion response") from e

        if not content or not content.strip():
            raise GatewayError(self._model, "empty completion response")

        return content.strip()


class OpenRouterClient(OpenAICompatibleClient):
    def __init__(self, api_key: str | None, model: str, timeout: float = 60.0, **kwargs) -> None:
        super().__init__(
            client=get_openrouter_client(api_key, timeout=timeout),
            model=model,
            **kwargs,
        )


class OllamaClient(OpenAICompatibleClient):
    def __init__(
        self, model: str, host: str | None = None, timeout: float = 60.0, **kwargs
    ) -> None:
        super().__init__(
            client=get_ollama_client(base_url=host, timeout=timeout),
            model=model,
            **kwargs,
        )


def create_gateway(settings: Settings) -> AnswerGateway:
    options = {
        "temperature": settings.llm_temperature,
        "max_tokens": settings.llm_max_tokens,
    }
    provider = settings.llm_provider
    logger.info(f"Using {provider} model {settings.llm_model}", "BLUE")

    if provider == "openrouter":
        return OpenRouterClient(
            settings.llm_api_key, settings.llm_model, timeout=settings.llm_timeout, **options
        )
    if provider == "ollama":
        return OllamaClient(
            settings.llm_model, host=settings.llm_base_url, timeout=settings.llm_timeout, **options
        )
    return OpenAICompatibleClient(
        client=get_hosted_llm_client(
            settings.llm_api_key, settings.llm_base_url, timeout=settings.llm_timeout
        ),
        model=settings.llm_model,
        **options,
    )
