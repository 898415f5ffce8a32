# product_api/routes.py
import json
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Dict, Any, List

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse

from .auth import ApiKeyContext, require_api_key
from .database import ProductStore
from .errors import ApiError, ErrorKind
from .models import Product, ProductIn
from .validation import normalize_product, validate_product

root_router = APIRouter()
router = APIRouter(prefix="/api/products")


# ---------------------------
# Dependencies
# ---------------------------
def get_store(request: Request) -> ProductStore:
    return request.app.state.store


async def read_json_object(request: Request) -> Dict[str, Any]:
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        payload = json.loads(raw)
    except ValueError:
        raise ApiError(ErrorKind.MALFORMED_PAYLOAD, "Invalid JSON payload")
    if not isinstance(payload, dict):
        raise ApiError(ErrorKind.MALFORMED_PAYLOAD, "Request body must be a JSON object")
    return payload


async def validated_product(request: Request, auth: ApiKeyContext = Depends(require_api_key)) -> Dict[str, Any]:
    # auth is a parameter so it always resolves before the body is touched
    payload = await read_json_object(request)
    errors = validate_product(payload)
    if errors:
        raise ApiError(ErrorKind.VALIDATION, "Validation failed", errors)
    return normalize_product(payload)


# ---------------------------
# Helpers
# ---------------------------
def _dump(products: List[Product]) -> List[Dict[str, Any]]:
    return [p.to_json() for p in products]


def _round_price(value: float) -> float:
    # halves round up, never to even
    return float(Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP))


def _not_found() -> ApiError:
    return ApiError(ErrorKind.NOT_FOUND, "Product not found")


def _paginate(items: List[Product], page: int, limit: int) -> Dict[str, Any]:
    total = len(items)
    start = (page - 1) * limit
    end = start + limit
    return {
        "success": True,
        "data": _dump(items[start:end]),
        "pagination": {
            "currentPage": page,
            "totalProducts": total,
            "totalPages": math.ceil(total / limit),
            "productsPerPage": limit,
            "hasNextPage": end < total,
            "hasPreviousPage": start > 0,
        },
    }


# ---------------------------
# Root
# ---------------------------
@root_router.get("/", response_class=PlainTextResponse)
async def root():
    return "Hello World"


# ---------------------------
# Read endpoints
# ---------------------------
@router.get("")
async def list_products(
    category: Optional[str] = None,
    search: Optional[str] = None,
    instock: Optional[str] = None,
    page: int = Query(1, ge=1),
    limit: int = Query(10, ge=1),
    store: ProductStore = Depends(get_store),
):
    out = store.list()
    if category:
        wanted = category.lower()
        out = [p for p in out if p.category.lower() == wanted]
    if search:
        term = search.lower()
        out = [p for p in out if term in p.name.lower()]
    if instock is not None:
        # anything other than "true" means out of stock
        wanted_stock = instock.lower() == "true"
        out = [p for p in out if p.in_stock == wanted_stock]
    return _paginate(out, page, limit)


@router.get("/search")
async def search_products(
    q: Optional[str] = None,
    category: Optional[str] = None,
    store: ProductStore = Depends(get_store),
):
    if not q or not q.strip():
        raise ApiError(ErrorKind.VALIDATION, 'Search query parameter "q" is required')
    term = q.lower()
    results = [
        p for p in store.list()
        if term in p.name.lower() or term in p.description.lower()
    ]
    if category:
        wanted = category.lower()
        results = [p for p in results if p.category.lower() == wanted]
    return {"success": True, "data": _dump(results), "searchTerm": q, "count": len(results)}


@router.get("/stats")
async def product_stats(store: ProductStore = Depends(get_store)):
    products = store.list()
    breakdown: Dict[str, int] = {}
    for p in products:
        breakdown[p.category] = breakdown.get(p.category, 0) + 1

    stats: Dict[str, Any] = {
        "totalProducts": len(products),
        "inStock": sum(1 for p in products if p.in_stock),
        "outOfStock": sum(1 for p in products if not p.in_stock),
        "categoryBreakdown": breakdown,
        "averagePrice": 0,
        "priceRange": {"min": 0, "max": 0},
    }
    if products:
        prices = [p.price for p in products]
        stats["averagePrice"] = _round_price(sum(prices) / len(prices))
        stats["priceRange"] = {"min": min(prices), "max": max(prices)}
    return {"success": True, "data": stats}


@router.get("/{product_id}")
async def get_product(product_id: str, store: ProductStore = Depends(get_store)):
    p = store.find(product_id)
    if p is None:
        raise _not_found()
    return {"success": True, "data": p.to_json()}


# ---------------------------
# Write endpoints (X-API-Key required)
# ---------------------------
@router.post("", status_code=201)
async def create_product(
    payload: Dict[str, Any] = Depends(validated_product),
    store: ProductStore = Depends(get_store),
):
    product = store.insert(ProductIn.model_validate(payload))
    return {"success": True, "message": "Product created successfully", "data": product.to_json()}


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    payload: Dict[str, Any] = Depends(validated_product),
    store: ProductStore = Depends(get_store),
):
    # only the fields the client sent; omitted description/inStock keep their values
    patch = ProductIn.model_validate(payload).model_dump(exclude_unset=True)
    product = store.replace(product_id, patch)
    if product is None:
        raise _not_found()
    return {"success": True, "message": "Product updated successfully", "data": product.to_json()}


@router.delete("/{product_id}")
async def delete_product(
    product_id: str,
    auth: ApiKeyContext = Depends(require_api_key),
    store: ProductStore = Depends(get_store),
):
    removed = store.remove(product_id)
    if removed is None:
        raise _not_found()
    return {"success": True, "message": "Product deleted successfully", "data": removed.to_json()}
