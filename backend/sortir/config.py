import logging
import os
from typing import Literal

from dotenv import load_dotenv
from openai import AsyncOpenAI

import redis


load_dotenv()

OPENAI_BASE_URL = os.getenv("OPENAI_BASE_URL", "https://api.openai.com/v1")
OPENAI_API_KEY = os.getenv("OPENAI_API_KEY")
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_API_KEY = os.getenv("OPENROUTER_API_KEY")
OLLAMA_BASE_URL = os.getenv("OLLAMA_BASE_URL", "http://localhost:11434/v1")
OLLAMA_API_KEY = os.getenv("OLLAMA_API_KEY", "ollama")

SUPPORTED_FILE_TYPES = ["application/pdf", "application/octet-stream"]
SUPPORTED_EXTENSIONS = [".pdf"]
PREVIEW_LENGTH = 1000

LOG_COLORS = {
    "RED": "\033[31m",
    "GREEN": "\033[32m",
    "YELLOW": "\033[33m",
    "BLUE": "\033[34m",
    "MAGENTA": "\033[35m",
    "CYAN": "\033[36m",
    "WHITE": "\033[37m",
    "BRIGHT_RED": "\033[91m",
    "BRIGHT_GREEN": "\033[92m",
    "BRIGHT_YELLOW": "\033[93m",
    "RESET": "\033[0m",
}

ColorType = Literal[
    "RED", "GREEN", "YELLOW", "BLUE", "MAGENTA",
    "CYAN", "WHITE", "BRIGHT_RED", "BRIGHT_GREEN", "BRIGHT_YELLOW",
]


class ColoredFormatter(logging.Formatter):
    def __init__(self, fmt: str) -> None:
        super().__init__(fmt)
        self.colors = {
            logging.DEBUG: "BRIGHT_YELLOW",
            logging.INFO: "GREEN",
            logging.WARNING: "YELLOW",
            logging.ERROR: "RED",
            logging.CRITICAL: "BRIGHT_RED",
        }

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = getattr(record, "custom_color", None) or self.colors.get(record.levelno, "WHITE")
        return f"{LOG_COLORS[color]}{message}{LOG_COLORS['RESET']}"


class CustomLogger:
    def __init__(self, logger: logging.Logger) -> None:
        self._logger = logger

    def _log(self, level: int, message: str, color: ColorType = None) -> None:
        if not self._logger.isEnabledFor(level):
            return
        record = self._logger.makeRecord(
            self._logger.name, level, "", 0, message, (), None
        )
        if color:
            record.custom_color = color
        self._logger.handle(record)

    def info(self, message: str, color: ColorType = None) -> None:
        self._log(logging.INFO, message, color)

    def debug(self, message: str, color: ColorType = None) -> None:
        self._log(logging.DEBUG, message, color)

    def warning(self, message: str, color: ColorType = None) -> None:
        self._log(logging.WARNING, message, color)

    def error(self, message: str, color: ColorType = None) -> None:
        self._log(logging.ERROR, message, color)

    def __getattr__(self, name: str):
        return getattr(self._logger, name)


def setup_logger(name: str = __name__) -> CustomLogger:
    logger = logging.getLogger(name)

    if logger.handlers:
        return CustomLogger(logger)

    level = logging.getLevelName(os.getenv("LOG_LEVEL", "INFO").upper())
    if not isinstance(level, int):
        level = logging.INFO

    logger.setLevel(level)
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(ColoredFormatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s"))
    logger.addHandler(handler)
    logger.propagate = False

    return CustomLogger(logger)


logger = setup_logger("config")


def get_hosted_llm_client(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float = 60.0,
) -> AsyncOpenAI:
    resolved_api_key = api_key or OPENAI_API_KEY
    if not resolved_api_key:
        raise ValueError("Hosted LLM API key not configured")

    resolved_base_url = base_url or OPENAI_BASE_URL
    return AsyncOpenAI(
        base_url=resolved_base_url,
        api_key=resolved_api_key,
        timeout=timeout,
        max_retries=0,
    )


def get_openrouter_client(
    api_key: str | None = None,
    timeout: float = 60.0,
) -> AsyncOpenAI:
    resolved_api_key = api_key or OPENROUTER_API_KEY
    if not resolved_api_key:
        raise ValueError("OpenRouter API key not configured")

    return AsyncOpenAI(
        base_url=OPENROUTER_BASE_URL,
        api_key=resolved_api_key,
        timeout=timeout,
        max_retries=0,
    )


def get_ollama_client(
    api_key: str | None = None,
    base_url: str | None = None,
    timeout: float = 60.0,
) -> AsyncOpenAI:
    resolved_base_url = base_url or OLLAMA_BASE_URL
    resolved_api_key = api_key or OLLAMA_API_KEY
    return AsyncOpenAI(
        base_url=resolved_base_url,
        api_key=resolved_api_key,
        timeout=timeout,
        max_retries=0,
    )


def get_redis_client(host: str, port: int, db: int) -> redis.Redis:
    try:
        client = redis.Redis(host=host, port=port, db=db, decode_responses=True)
        client.ping()
        logger.info(f"Connected to Redis @ {host}:{port}", "BLUE")
    except redis.RedisError as e:
        logger.error(f"Failed to connect to Redis: {e}")
        raise

    return client
