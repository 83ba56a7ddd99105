import structlog
from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response

from rollbook.errors import AuthenticationError, NotFoundError

logger = structlog.get_logger(__name__)


def create_json_error_response(status_code: int, message: str, error_type: str | None = None) -> JSONResponse:
    """Create JSON error response with optional type for machine parsing."""
    content = {"message": message}
    if error_type:
        content["type"] = error_type
    return JSONResponse(status_code=status_code, content=content)


async def user_error_handler(_: Request, exc: Exception) -> Response:
    """Handle all UserError subclasses with appropriate status codes."""
    if isinstance(exc, AuthenticationError):
        status_code = 401
        error_type = "authentication_error"
    elif isinstance(exc, NotFoundError):
        status_code = 404
        error_type = "not_found"
    else:
        # ValidationError, including DuplicateKeyError
        status_code = 400
        error_type = "validation_error"

    return create_json_error_response(status_code=status_code, message=str(exc), error_type=error_type)


async def request_validation_error_handler(_: Request, exc: Exception) -> Response:
    """Handle malformed request bodies (wrong JSON types, unparsable JSON) as 400."""
    message = "Invalid request body"
    if isinstance(exc, RequestValidationError) and exc.errors():
        error = exc.errors()[0]
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        message = f"{message}: {location} {error.get('msg', '')}".strip() if location else message
    return create_json_error_response(status_code=400, message=message, error_type="validation_error")


async def general_exception_handler(request: Request, exc: Exception) -> Response:
    """Handle unexpected errors (500)."""
    logger.exception("unexpected_error", path=request.url.path, error=str(exc))
    return create_json_error_response(status_code=500, message="Internal server error", error_type="internal_server_error")
