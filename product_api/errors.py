"""Error values and the uniform JSON error envelope."""
import logging
import traceback
from enum import Enum
from typing import Optional, Dict, Any, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)


class ErrorKind(str, Enum):
    VALIDATION = "ValidationError"
    MALFORMED_PAYLOAD = "MalformedPayload"
    AUTHENTICATION = "AuthenticationError"
    AUTHORIZATION = "AuthorizationError"
    NOT_FOUND = "NotFoundError"
    INTERNAL = "InternalError"

    @property
    def status_code(self) -> int:
        return _STATUS_CODES[self]


_STATUS_CODES = {
    ErrorKind.VALIDATION: 400,
    ErrorKind.MALFORMED_PAYLOAD: 400,
    ErrorKind.AUTHENTICATION: 401,
    ErrorKind.AUTHORIZATION: 403,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.INTERNAL: 500,
}


class ApiError(Exception):
    """A failure tagged with its ``ErrorKind``.

    Pure stages (auth, validation) return these as values; the FastAPI layer
    raises them and ``api_error_handler`` renders the envelope.
    """

    def __init__(self, kind: ErrorKind, message: str, errors: Optional[List[str]] = None):
        super().__init__(message)
        self.kind = kind
        self.message = message
        self.errors = list(errors or [])

    @property
    def status_code(self) -> int:
        return self.kind.status_code


def _format_stack(exc: BaseException) -> str:
    return "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))


def error_body(message: str, errors: Optional[List[str]] = None,
               exc: Optional[BaseException] = None, debug: bool = False) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message}
    if errors:
        body["errors"] = errors
    if debug and exc is not None:
        body["stack"] = _format_stack(exc)
    return body


def _debug(request: Request) -> bool:
    return request.app.state.settings.debug


def internal_error_response(request: Request, exc: Exception) -> JSONResponse:
    logger.error("Error occurred: %s", exc, exc_info=exc)
    return JSONResponse(
        status_code=ErrorKind.INTERNAL.status_code,
        content=error_body("Internal Server Error", exc=exc, debug=_debug(request)),
    )


async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    logger.warning("Error occurred: %s", exc.message)
    errors = exc.errors if exc.kind is ErrorKind.VALIDATION else None
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.message, errors, exc, _debug(request)),
    )


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [f"{err['loc'][-1]}: {err['msg']}" for err in exc.errors()]
    return await api_error_handler(
        request, ApiError(ErrorKind.VALIDATION, "Validation failed", errors)
    )


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    # 404 from the router and 405 for a known path with the wrong verb are
    # both "no such route" to clients
    if exc.status_code in (404, 405):
        return JSONResponse(
            status_code=404,
            content=error_body(f"Route {request.url.path} not found"),
        )
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(str(exc.detail), exc=exc, debug=_debug(request)),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ApiError, api_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
