# backend/services/cart_service.py
import logging
from typing import Optional

from sqlalchemy import select, delete
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.orm import Session, joinedload, selectinload

from database import atomic
from models.cart import Cart, CartItem
from models.product import Product
from utils.errors import NotFound, ValidationFailed

logger = logging.getLogger(__name__)

# Dialects with INSERT ... ON CONFLICT DO UPDATE
UPSERT_INSERTS = {
    "sqlite": sqlite.insert,
    "postgresql": postgresql.insert,
}


class CartService:
    """
    Cart line items, one row per (cart, product).
    Adding merges into the existing row by incrementing; updating overwrites.
    """

    def __init__(self, db: Session):
        self.db = db

    def _find_cart(self, user_id: int) -> Optional[Cart]:
        return self.db.scalars(select(Cart).where(Cart.user_id == user_id)).first()

    def _get_cart(self, user_id: int) -> Cart:
        cart = self._find_cart(user_id)
        if cart is None:
            raise NotFound("Cart not found")
        return cart

    def _get_item(self, cart_id: int, product_id: int) -> Optional[CartItem]:
        stmt = (
            select(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .execution_options(populate_existing=True)
        )
        return self.db.scalars(stmt).first()

    # =====================================================
    # QUERY
    # =====================================================
    def get_cart(self, user_id: int) -> Cart:
        """The cart with its items, each with product and gallery loaded."""
        stmt = (
            select(Cart)
            .where(Cart.user_id == user_id)
            .options(
                selectinload(Cart.items)
                .joinedload(CartItem.product)
                .selectinload(Product.images)
            )
        )
        cart = self.db.scalars(stmt).first()
        if cart is None:
            raise NotFound("Cart not found")
        return cart

    # =====================================================
    # COMMANDS
    # =====================================================
    def _merge_quantity(self, cart_id: int, product_id: int, quantity: int) -> None:
        dialect = self.db.get_bind().dialect.name
        insert = UPSERT_INSERTS.get(dialect)

        if insert is not None:
            stmt = insert(CartItem).values(cart_id=cart_id, product_id=product_id, quantity=quantity)
            stmt = stmt.on_conflict_do_update(
                index_elements=["cart_id", "product_id"],
                set_={"quantity": CartItem.quantity + stmt.excluded.quantity},
            )
            self.db.execute(stmt)
            return

        # Row lock for dialects without ON CONFLICT
        item = self.db.scalars(
            select(CartItem)
            .where(CartItem.cart_id == cart_id, CartItem.product_id == product_id)
            .with_for_update()
        ).first()
        if item is None:
            self.db.add(CartItem(cart_id=cart_id, product_id=product_id, quantity=quantity))
        else:
            item.quantity += quantity
        self.db.flush()

    def add_item(self, user_id: int, product_id: int, quantity: Optional[int] = None) -> CartItem:
        """
        Add ``quantity`` (default 1) of a product to the user's cart.
        Repeated adds accumulate: add(p, 2) twice leaves quantity 4.
        """
        quantity = quantity or 1
        if quantity < 0:
            raise ValidationFailed("Quantity must be positive")

        with atomic(self.db):
            cart = self._find_cart(user_id)
            product = self.db.get(Product, product_id)
            if cart is None or product is None:
                raise NotFound("Cart or product not found")

            self._merge_quantity(cart.id, product.id, quantity)
            item = self._get_item(cart.id, product.id)

        logger.info("Cart %s: +%d of product %s -> %d", item.cart_id, quantity, product_id, item.quantity)
        return item

    def update_item(self, user_id: int, product_id: int, quantity: int) -> CartItem:
        """Overwrite the quantity of an existing line."""
        if quantity is None or quantity < 1:
            raise ValidationFailed("Quantity must be at least 1")

        with atomic(self.db):
            cart = self._get_cart(user_id)
            item = self._get_item(cart.id, product_id)
            if item is None:
                raise NotFound("Product not found in cart")
            item.quantity = quantity

        logger.info("Cart %s: product %s set to %d", item.cart_id, product_id, quantity)
        return item

    def remove_item(self, user_id: int, product_id: int) -> None:
        with atomic(self.db):
            cart = self._get_cart(user_id)
            item = self._get_item(cart.id, product_id)
            if item is None:
                raise NotFound("Product not found in cart")
            self.db.delete(item)

        logger.info("Cart %s: product %s removed", cart.id, product_id)

    def clear(self, user_id: int) -> int:
        """Remove every line; an already empty cart is fine. Returns rows removed."""
        with atomic(self.db):
            cart_id = self._get_cart(user_id).id
            result = self.db.execute(delete(CartItem).where(CartItem.cart_id == cart_id))

        self.db.expire_all()
        logger.info("Cart %s cleared (%d line(s))", cart_id, result.rowcount)
        return result.rowcount
