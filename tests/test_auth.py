from product_api.auth import ApiKeyContext, check_api_key
from product_api.config import DEFAULT_API_KEYS
from product_api.errors import ApiError, ErrorKind


def test_missing_key():
    for key in (None, ""):
        result = check_api_key(key, DEFAULT_API_KEYS)
        assert isinstance(result, ApiError)
        assert result.kind is ErrorKind.AUTHENTICATION
        assert result.status_code == 401


def test_unknown_key():
    result = check_api_key("guess", DEFAULT_API_KEYS)
    assert isinstance(result, ApiError)
    assert result.kind is ErrorKind.AUTHORIZATION
    assert result.status_code == 403


def test_valid_keys():
    assert check_api_key("your-secret-api-key-123", DEFAULT_API_KEYS) == ApiKeyContext(
        api_key="your-secret-api-key-123", is_admin=False
    )
    assert check_api_key("admin-key-456", DEFAULT_API_KEYS).is_admin is True


def test_allow_list_is_configurable():
    assert isinstance(check_api_key("admin-key-456", ("other",)), ApiError)
    assert check_api_key("other", ("other",)).is_admin is False
