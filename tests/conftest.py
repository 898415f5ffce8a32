import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.database import ProductStore
from product_api.main import create_app



@pytest.fixture
def store():
    return ProductStore.seeded()


@pytest.fixture
def client(store):
    return TestClient(create_app(Settings(), store))


@pytest.fixture
def dev_client(store):
    return TestClient(create_app(Settings(environment="development"), store))
