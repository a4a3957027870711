import logging
from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.requests import Request

logger = logging.getLogger(__name__)

# ---------------------------
# Service (Business logic)
# ---------------------------

class BusinessError(Exception):
    """Base class for all business logic errors."""
    notice = "Something went wrong. Please try again."

    def __init__(self, message: str = "", notice: str = None):
        super().__init__(message or self.notice)
        if notice:
            self.notice = notice

class NotFoundError(BusinessError):
    """Raised when a requested resource does not exist."""
    notice = "We couldn't find what you were looking for."

class ConflictError(BusinessError):
    """Raised when a resource already exists or conflicts with another resource."""
    notice = "That already exists."

class ValidationError(BusinessError):
    """Raised when business rule validation fails (e.g., invalid input)."""
    notice = "Please check your input and try again."

class UnauthorizedError(BusinessError):
    """Raised when authentication fails."""
    notice = "Please sign in again."

# ---------------------------
# External collaborators
# ---------------------------

class TransientStoreError(BusinessError):
    """A record fetch or write against the record store failed."""
    notice = "We couldn't reach your data right now. Please try again."

class CompletionServiceError(BusinessError):
    """The completion service answered with a non-2xx status or was unreachable."""
    notice = "The companion is unavailable right now. Please try again."

class MalformedCompletionResponse(BusinessError):
    """
    The completion service returned text that is not the expected JSON.

    Always recovered locally with a fixed default payload, never sent to the user.
    """
    pass

# ---------------------------
# Derived statistics
# ---------------------------

class UnsortedInputError(ValueError):
    """Raised when streak input is not sorted by created_at, newest first."""
    pass


# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

def _notice_response(status_code: int, exc: BusinessError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"detail": str(exc), "notice": exc.notice},
    )


def register_exception_handlers(app):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return _notice_response(status.HTTP_404_NOT_FOUND, exc)

    @app.exception_handler(ConflictError)
    async def conflict_handler(request: Request, exc: ConflictError):
        return _notice_response(status.HTTP_409_CONFLICT, exc)

    @app.exception_handler(UnauthorizedError)
    async def unauthorized_handler(request: Request, exc: UnauthorizedError):
        return _notice_response(status.HTTP_401_UNAUTHORIZED, exc)

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return _notice_response(status.HTTP_422_UNPROCESSABLE_ENTITY, exc)

    @app.exception_handler(TransientStoreError)
    async def store_error_handler(request: Request, exc: TransientStoreError):
        logger.error(f"Record store error on {request.url.path}: {exc}")
        return _notice_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)

    @app.exception_handler(CompletionServiceError)
    async def completion_error_handler(request: Request, exc: CompletionServiceError):
        logger.error(f"Completion service error on {request.url.path}: {exc}")
        return _notice_response(status.HTTP_502_BAD_GATEWAY, exc)

    @app.exception_handler(UnsortedInputError)
    async def unsorted_input_handler(request: Request, exc: UnsortedInputError):
        logger.error(f"Statistics input out of order on {request.url.path}: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"detail": "Internal server error", "notice": BusinessError.notice},
        )
