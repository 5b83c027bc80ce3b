from functools import wraps
from typing import Any, Callable, TypeVar

from fastapi import HTTPException

from sortir.config import setup_logger


logger = setup_logger("exceptions")

F = TypeVar("F", bound=Callable[..., Any])


class AppException(Exception):
    def __init__(
        self,
        status_code: int,
        detail: str,
        reason: str | None = None,
        log_error: bool = True
    ) -> None:
        self.status_code = status_code
        self.detail = detail
        self.reason = reason
        self.log_error = log_error
        super().__init__(reason or detail)


class ValidationError(AppException):
    def __init__(self, detail: str) -> None:
        super().__init__(status_code=400, detail=detail, log_error=False)


class ExtractionError(AppException):
    def __init__(self, detail: str, reason: str | None = None) -> None:
        super().__init__(
            status_code=422,
            detail=detail,
            reason=reason,
            log_error=reason is not None,
        )


class DocumentNotFoundError(AppException):
    def __init__(self, filename: str) -> None:
        self.filename = filename
        super().__init__(
            status_code=404,
            detail="Document not found",
            log_error=False,
        )


class StorageError(AppException):
    def __init__(self, operation: str, reason: str) -> None:
        self.operation = operation
        super().__init__(
            status_code=500,
            detail="Document storage is unavailable",
            reason=f"Storage {operation} failed: {reason}",
        )


class GatewayError(AppException):
    def __init__(self, model: str, reason: str) -> None:
        self.model = model
        super().__init__(
            status_code=502,
            detail="Language model request failed",
            reason=f"Model {model} failed: {reason}",
        )


class UpstreamError(AppException):
    def __init__(self, reason: str) -> None:
        super().__init__(
            status_code=502,
            detail="Failed to get an answer",
            reason=reason,
        )


def handle_exceptions(func: F) -> F:
    @wraps(func)
    async def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            return await func(*args, **kwargs)
        except HTTPException:
            raise
        except AppException as e:
            if e.log_error:
                logger.error(f"{func.__name__}: {e.reason or e.detail}")
            raise HTTPException(status_code=e.status_code, detail=e.detail) from e
        except ValueError as e:
            raise HTTPException(status_code=400, detail=str(e)) from e
        except Exception as e:
            logger.error(f"{func.__name__}: Unexpected error - {str(e)}")
            raise HTTPException(status_code=500, detail="Internal server error") from e
    return wrapper
