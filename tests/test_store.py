"""Tests for the in-memory product store."""

from products_api.app.core.store import ProductStore, create_seeded_store


def product_fields(**overrides):
    fields = {"name": "Lamp", "price": 19.99, "category": "Home", "stock": 5}
    fields.update(overrides)
    return fields


def test_seeded_store_holds_five_products():
    store = create_seeded_store()
    assert len(store) == 5
    assert [p.id for p in store.list()] == [1, 2, 3, 4, 5]
    assert store.next_id() == 6


def test_empty_store_starts_at_one():
    store = ProductStore([])
    assert store.next_id() == 1
    assert store.add(product_fields()).id == 1


def test_add_assigns_next_id_and_default_description():
    store = create_seeded_store()
    product = store.add(product_fields(id=99))
    assert product.id == 6
    assert product.description == ""
    assert store.get(6) == product


def test_deleted_ids_are_never_reused():
    store = create_seeded_store()
    store.delete(5)
    assert store.add(product_fields()).id == 6
    store.delete(6)
    assert store.add(product_fields()).id == 7


def test_replace_keeps_description_when_omitted():
    store = create_seeded_store()
    updated = store.replace(2, product_fields())
    assert updated.id == 2
    assert updated.name == "Lamp"
    assert updated.description == "Wireless mouse"


def test_replace_overwrites_description_when_given():
    store = create_seeded_store()
    updated = store.replace(2, product_fields(description="Desk lamp"))
    assert updated.description == "Desk lamp"


def test_replace_and_delete_missing_return_none():
    store = create_seeded_store()
    assert store.replace(42, product_fields()) is None
    assert store.delete(42) is None
    assert len(store) == 5


def test_list_returns_a_snapshot():
    store = create_seeded_store()
    snapshot = store.list()
    snapshot.pop()
    snapshot[0].name = "Changed"
    assert len(store) == 5
    assert store.get(1).name == "Laptop"


def test_seeded_stores_are_independent():
    first = create_seeded_store()
    second = create_seeded_store()
    first.delete(1)
    assert second.get(1) is not None


def test_reset_restores_records():
    store = create_seeded_store()
    store.reset([{"id": 10, **product_fields()}])
    assert [p.id for p in store.list()] == [10]
    assert store.next_id() == 11
