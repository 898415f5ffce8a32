import logging
import time

from fastapi import FastAPI, Request

from .database import format_timestamp, utc_now
from .errors import internal_error_response

request_logger = logging.getLogger("product_api.requests")


def _target(request: Request) -> str:
    query = request.url.query
    return f"{request.url.path}?{query}" if query else request.url.path


async def translate_unhandled_errors(request: Request, call_next):
    """Anything the exception handlers did not claim becomes a 500 envelope."""
    try:
        return await call_next(request)
    except Exception as exc:
        return internal_error_response(request, exc)


async def log_requests(request: Request, call_next):
    timestamp = format_timestamp(utc_now())
    method = request.method
    target = _target(request)
    user_agent = request.headers.get("user-agent") or "Unknown User Agent"
    request_logger.info("[%s] %s request to %s - User Agent: %s", timestamp, method, target, user_agent)

    start = time.perf_counter()
    try:
        return await call_next(request)
    finally:
        duration_ms = round((time.perf_counter() - start) * 1000)
        request_logger.info("[%s] %s request to %s completed in %dms", timestamp, method, target, duration_ms)


def register_middleware(app: FastAPI) -> None:
    # Last registered runs outermost: logging wraps error translation
    app.middleware("http")(translate_unhandled_errors)
    app.middleware("http")(log_requests)
