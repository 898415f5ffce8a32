# sdk/productclient.py
import requests
import httpx
from typing import Optional, Dict, Any

API_KEY_HEADER = "X-API-Key"


class ProductClient:
    def __init__(self, base_url: str = "http://localhost:3000", api_key: Optional[str] = None,
                 timeout: int = 10, transport: Optional[httpx.AsyncBaseTransport] = None):
        self.base_url = base_url.rstrip("/")
        self.session = requests.Session()
        self.timeout = timeout
        self.api_key = api_key
        # only used by the async helpers; lets tests route straight into an ASGI app
        self.transport = transport
        if api_key:
            self.session.headers.update({API_KEY_HEADER: api_key})

    def _url(self, path: str = "") -> str:
        return f"{self.base_url}/api/products{path}"

    def _auth_headers(self) -> Dict[str, str]:
        return {API_KEY_HEADER: self.api_key} if self.api_key else {}

    # Reads
    def list_products(self, category: Optional[str] = None, search: Optional[str] = None,
                      in_stock: Optional[bool] = None, page: int = 1, limit: int = 10):
        params: Dict[str, Any] = {"page": page, "limit": limit}
        if category:
            params["category"] = category
        if search:
            params["search"] = search
        if in_stock is not None:
            params["instock"] = "true" if in_stock else "false"
        r = self.session.get(self._url(), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def search_products(self, q: str, category: Optional[str] = None):
        params = {"q": q}
        if category:
            params["category"] = category
        r = self.session.get(self._url("/search"), params=params, timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_stats(self):
        r = self.session.get(self._url("/stats"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def get_product(self, product_id: str):
        r = self.session.get(self._url(f"/{product_id}"), timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    # Writes
    def create_product(self, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        r = self.session.post(self._url(), json=_product_body(name, price, category, description, in_stock),
                              timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def update_product(self, product_id: str, name: str, price: float, category: str,
                       description: Optional[str] = None, in_stock: Optional[bool] = None):
        r = self.session.put(self._url(f"/{product_id}"),
                             json=_product_body(name, price, category, description, in_stock),
                             timeout=self.timeout)
        r.raise_for_status()
        return r.json()

    def delete_product(self, product_id: str):
        r = self.session.delete(self._url(f"/{product_id}"), timeout=self.timeout)
        # do not raise on 404 here; callers may want the error envelope
        return r.json()

    # Async variants (httpx)
    async def list_products_async(self, **params):
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                     transport=self.transport) as client:
            r = await client.get("/api/products", params=params)
            r.raise_for_status()
            return r.json()

    async def create_product_async(self, name: str, price: float, category: str,
                                   description: Optional[str] = None, in_stock: Optional[bool] = None):
        async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout,
                                     transport=self.transport) as client:
            r = await client.post("/api/products",
                                  json=_product_body(name, price, category, description, in_stock),
                                  headers=self._auth_headers())
            r.raise_for_status()
            return r.json()


def _product_body(name, price, category, description, in_stock) -> Dict[str, Any]:
    body: Dict[str, Any] = {"name": name, "price": price, "category": category}
    if description is not None:
        body["description"] = description
    if in_stock is not None:
        body["inStock"] = in_stock
    return body
