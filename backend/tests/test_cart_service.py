import pytest

from models.cart import CartItem
from services.cart_service import CartService
from services.catalog_service import CatalogService
from utils.errors import NotFound, ValidationFailed


@pytest.fixture()
def products(db_session):
    catalog = CatalogService(db_session)
    chess = catalog.create_product({"name": "Chess", "price": 10.0, "stock": 5})
    dice = catalog.create_product({"name": "Dice", "price": 2.5, "stock": 50})
    return chess, dice


def _rows(db_session, cart_id, product_id):
    return db_session.query(CartItem).filter_by(cart_id=cart_id, product_id=product_id).count()


def test_add_is_additive_with_single_row(db_session, customer, products):
    chess, _ = products
    carts = CartService(db_session)

    first = carts.add_item(customer.id, chess.id, 2)
    second = carts.add_item(customer.id, chess.id, 3)

    assert first.id == second.id
    assert second.quantity == 5
    assert _rows(db_session, customer.cart.id, chess.id) == 1


@pytest.mark.parametrize("quantity", [None, 0])
def test_add_defaults_to_one(db_session, customer, products, quantity):
    chess, _ = products
    item = CartService(db_session).add_item(customer.id, chess.id, quantity)
    assert item.quantity == 1


def test_add_unknown_product_has_no_effect(db_session, customer):
    with pytest.raises(NotFound):
        CartService(db_session).add_item(customer.id, 999, 1)
    assert db_session.query(CartItem).count() == 0


def test_add_without_cart_is_not_found(db_session, products):
    chess, _ = products
    with pytest.raises(NotFound):
        CartService(db_session).add_item(12345, chess.id, 1)


def test_update_overwrites_quantity(db_session, customer, products):
    chess, _ = products
    carts = CartService(db_session)
    carts.add_item(customer.id, chess.id, 2)

    item = carts.update_item(customer.id, chess.id, 5)

    assert item.quantity == 5


def test_update_missing_line_is_not_found(db_session, customer, products):
    chess, _ = products
    with pytest.raises(NotFound):
        CartService(db_session).update_item(customer.id, chess.id, 3)


@pytest.mark.parametrize("quantity", [0, -2])
def test_update_rejects_non_positive_quantity(db_session, customer, products, quantity):
    chess, _ = products
    carts = CartService(db_session)
    carts.add_item(customer.id, chess.id, 2)

    with pytest.raises(ValidationFailed):
        carts.update_item(customer.id, chess.id, quantity)
    assert carts.get_cart(customer.id).items[0].quantity == 2


def test_remove_only_touches_that_line(db_session, customer, products):
    chess, dice = products
    carts = CartService(db_session)
    carts.add_item(customer.id, chess.id, 1)
    carts.add_item(customer.id, dice.id, 4)

    carts.remove_item(customer.id, chess.id)

    cart = carts.get_cart(customer.id)
    assert [(it.product_id, it.quantity) for it in cart.items] == [(dice.id, 4)]
    with pytest.raises(NotFound):
        carts.remove_item(customer.id, chess.id)


def test_clear_empty_cart_succeeds(db_session, customer):
    carts = CartService(db_session)
    assert carts.clear(customer.id) == 0
    assert carts.get_cart(customer.id).items == []


def test_clear_removes_every_line(db_session, customer, products):
    chess, dice = products
    carts = CartService(db_session)
    carts.add_item(customer.id, chess.id, 1)
    carts.add_item(customer.id, dice.id, 1)

    assert carts.clear(customer.id) == 2
    assert carts.get_cart(customer.id).items == []


def test_missing_cart_is_not_found(db_session):
    carts = CartService(db_session)
    with pytest.raises(NotFound):
        carts.get_cart(42)
    with pytest.raises(NotFound):
        carts.clear(42)
    with pytest.raises(NotFound):
        carts.remove_item(42, 1)


def test_add_merges_with_row_lock_when_dialect_has_no_upsert(db_session, customer, products, monkeypatch):
    monkeypatch.setattr("services.cart_service.UPSERT_INSERTS", {})
    chess, _ = products
    carts = CartService(db_session)

    first = carts.add_item(customer.id, chess.id, 2)
    assert first.quantity == 2

    second = carts.add_item(customer.id, chess.id, 3)

    assert second.quantity == 5
    assert _rows(db_session, customer.cart.id, chess.id) == 1
