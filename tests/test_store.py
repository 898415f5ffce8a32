from datetime import datetime, timezone

from product_api import database
from product_api.database import ProductStore
from product_api.models import ProductIn


def _candidate(**overrides):
    return ProductIn.model_validate({"name": "Mug", "price": 8, "category": "home", **overrides})


def test_seeded_store():
    store = ProductStore.seeded()
    assert [p.id for p in store.list()] == ["1", "2", "3"]
    assert store.find("3").category == "kitchen"
    assert store.find("nope") is None


def test_insert_assigns_fresh_id_and_defaults():
    store = ProductStore.seeded()
    p = store.insert(_candidate())
    assert p.id not in {"1", "2", "3"}
    assert p.in_stock is True
    assert p.description == ""
    assert p.updated_at is None
    assert store.list()[-1] == p
    assert len(store) == 4


def test_list_is_a_snapshot():
    store = ProductStore.seeded()
    snapshot = store.list()
    store.remove("1")
    assert len(snapshot) == 3
    assert len(store) == 2


def test_replace_merges_and_stamps():
    store = ProductStore.seeded()
    updated = store.replace("2", {"price": 750})
    assert updated.price == 750
    assert updated.name == "Smartphone"
    assert updated.in_stock is True
    assert updated.updated_at.endswith("Z")
    assert store.list()[1] == updated


def test_replace_never_touches_id():
    store = ProductStore.seeded()
    updated = store.replace("1", {"id": "99", "name": "Notebook"})
    assert updated.id == "1"
    assert store.find("99") is None


def test_back_to_back_replacements_move_timestamp_forward():
    store = ProductStore.seeded()
    stamps = [store.replace("1", {"price": 1000 + i}).updated_at for i in range(20)]
    assert stamps == sorted(set(stamps))


def test_missing_ids():
    store = ProductStore.seeded()
    assert store.replace("x", {"price": 1}) is None
    assert store.remove("x") is None
    assert len(store) == 3


def test_remove_returns_record_and_closes_gap():
    store = ProductStore.seeded()
    removed = store.remove("2")
    assert removed.name == "Smartphone"
    assert [p.id for p in store.list()] == ["1", "3"]


class FrozenClock(datetime):
    """Always half way through the same millisecond."""

    @classmethod
    def now(cls, tz=None):
        return datetime(2026, 1, 1, 12, 0, 0, 293500, tzinfo=timezone.utc)


def test_same_millisecond_updates_still_move_forward(monkeypatch):
    monkeypatch.setattr(database, "datetime", FrozenClock)
    assert database.utc_now().microsecond == 293000

    store = ProductStore.seeded()
    stamps = [store.replace("1", {"price": 1000 + i}).updated_at for i in range(3)]
    assert stamps == [
        "2026-01-01T12:00:00.293Z",
        "2026-01-01T12:00:00.294Z",
        "2026-01-01T12:00:00.295Z",
    ]
