import pytest

from product_api.validation import (
    CATEGORY_NOT_ALLOWED,
    CATEGORY_REQUIRED,
    DESCRIPTION_NOT_STRING,
    IN_STOCK_NOT_BOOLEAN,
    NAME_REQUIRED,
    PRICE_REQUIRED,
    normalize_product,
    validate_product,
)

VALID = {"name": "Novel", "price": 12.5, "category": "books"}


def test_valid_payload_has_no_violations():
    assert validate_product(VALID) == []
    assert validate_product({**VALID, "description": "", "inStock": False}) == []


def test_missing_everything():
    assert validate_product({}) == [NAME_REQUIRED, PRICE_REQUIRED, CATEGORY_REQUIRED]


@pytest.mark.parametrize("name", [None, "", "   ", 42, ["Novel"]])
def test_bad_names(name):
    assert validate_product({**VALID, "name": name}) == [NAME_REQUIRED]


@pytest.mark.parametrize("price", [None, 0, -1, "10", True, float("inf"), float("nan")])
def test_bad_prices(price):
    assert validate_product({**VALID, "price": price}) == [PRICE_REQUIRED]


def test_blank_category_is_not_also_reported_as_disallowed():
    assert validate_product({**VALID, "category": "  "}) == [CATEGORY_REQUIRED]


def test_category_allow_list_ignores_case_and_padding():
    assert validate_product({**VALID, "category": " Home "}) == []
    assert validate_product({**VALID, "category": "kitchen"}) == [CATEGORY_NOT_ALLOWED]


def test_optional_fields_must_have_the_right_type():
    errors = validate_product({**VALID, "description": 7, "inStock": "yes"})
    assert errors == [DESCRIPTION_NOT_STRING, IN_STOCK_NOT_BOOLEAN]


def test_null_optionals_count_as_absent():
    payload = {**VALID, "description": None, "inStock": None}
    assert validate_product(payload) == []
    assert normalize_product(payload) == VALID


def test_normalize_trims_and_lowercases_in_place():
    payload = {"name": "  Lamp ", "price": 20, "category": " HOME", "description": " warm light "}
    out = normalize_product(payload)
    assert out is payload
    assert payload == {"name": "Lamp", "price": 20, "category": "home", "description": "warm light"}
