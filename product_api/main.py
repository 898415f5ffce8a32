# product_api/main.py
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import Settings
from .database import ProductStore
from .errors import register_exception_handlers
from .middleware import register_middleware
from .routes import root_router, router

ENDPOINTS = (
    ("GET", "/api/products", "List products with filtering & pagination"),
    ("GET", "/api/products/search", "Search products"),
    ("GET", "/api/products/stats", "Product statistics"),
    ("GET", "/api/products/:id", "Get specific product"),
    ("POST", "/api/products", "Create product (requires auth)"),
    ("PUT", "/api/products/:id", "Update product (requires auth)"),
    ("DELETE", "/api/products/:id", "Delete product (requires auth)"),
)


def create_app(settings: Optional[Settings] = None, store: Optional[ProductStore] = None) -> FastAPI:
    """Build an app around its own store; tests pass fresh ones for isolation."""
    settings = settings or Settings()
    app = FastAPI(title="product-api (in-memory demo)")
    app.state.settings = settings
    app.state.store = store if store is not None else ProductStore.seeded()

    register_middleware(app)
    # added last so it wraps everything, 500 envelopes included
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    app.include_router(root_router)
    app.include_router(router)
    return app


app = create_app(Settings.from_env())
