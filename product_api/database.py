import threading
import uuid
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any, List, Iterable

from .models import Product, ProductIn, SAMPLE_PRODUCTS

# The in-memory product collection. Every read and write goes through one lock
# so a threaded server never sees a half-applied mutation.


def format_timestamp(moment: datetime) -> str:
    return moment.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def utc_now() -> datetime:
    """Current UTC time cut to whole milliseconds, the precision stamps are stored at."""
    now = datetime.now(timezone.utc)
    return now.replace(microsecond=now.microsecond // 1000 * 1000)


def _parse_timestamp(value: str) -> datetime:
    return datetime.fromisoformat(value.replace("Z", "+00:00"))


def _timestamp_after(previous: Optional[str]) -> str:
    now = utc_now()
    if previous:
        floor = _parse_timestamp(previous)
        if now <= floor:
            now = floor + timedelta(milliseconds=1)
    return format_timestamp(now)


class ProductStore:
    def __init__(self, products: Iterable[Product] = ()):
        self._products: List[Product] = list(products)
        self._lock = threading.Lock()

    @classmethod
    def seeded(cls) -> "ProductStore":
        return cls(SAMPLE_PRODUCTS)

    def __len__(self) -> int:
        with self._lock:
            return len(self._products)

    def _index_of(self, product_id: str) -> int:
        for i, p in enumerate(self._products):
            if p.id == product_id:
                return i
        return -1

    def _new_id(self) -> str:
        taken = {p.id for p in self._products}
        pid = str(uuid.uuid4())
        while pid in taken:
            pid = str(uuid.uuid4())
        return pid

    def list(self) -> List[Product]:
        with self._lock:
            return self._products.copy()

    def find(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            return self._products[i] if i >= 0 else None

    def insert(self, candidate: ProductIn) -> Product:
        with self._lock:
            product = Product(id=self._new_id(), **candidate.model_dump())
            self._products.append(product)
            return product

    def replace(self, product_id: str, patch: Dict[str, Any]) -> Optional[Product]:
        """Merge ``patch`` (field names, not wire aliases) over the stored record.

        Fields missing from ``patch`` keep their stored values. ``updated_at`` is
        always moved forward, even when two updates land in the same millisecond.
        """
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return None
            current = self._products[i]
            changes = {k: v for k, v in patch.items() if k not in ("id", "updated_at")}
            changes["updated_at"] = _timestamp_after(current.updated_at)
            updated = current.model_copy(update=changes)
            self._products[i] = updated
            return updated

    def remove(self, product_id: str) -> Optional[Product]:
        with self._lock:
            i = self._index_of(product_id)
            if i < 0:
                return None
            return self._products.pop(i)
