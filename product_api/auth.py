from dataclasses import dataclass
from typing import Optional, Iterable, Union

from fastapi import Header, Request

from .errors import ApiError, ErrorKind

API_KEY_HEADER = "X-API-Key"


@dataclass(frozen=True)
class ApiKeyContext:
    api_key: str
    # reserved for admin-only operations; nothing checks it yet
    is_admin: bool


def check_api_key(api_key: Optional[str], allowed: Iterable[str]) -> Union[ApiKeyContext, ApiError]:
    if not api_key:
        return ApiError(
            ErrorKind.AUTHENTICATION,
            "API key is required. Please enter a valid API key",
        )
    if api_key not in allowed:
        return ApiError(ErrorKind.AUTHORIZATION, "Invalid API key. Access denied.")
    return ApiKeyContext(api_key=api_key, is_admin="admin" in api_key)


def require_api_key(request: Request, x_api_key: Optional[str] = Header(None)) -> ApiKeyContext:
    result = check_api_key(x_api_key, request.app.state.settings.api_keys)
    if isinstance(result, ApiError):
        raise result
    request.state.api_key = result.api_key
    request.state.is_admin = result.is_admin
    return result
