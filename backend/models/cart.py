# backend/models/cart.py
from sqlalchemy import Column, Integer, ForeignKey, DateTime, UniqueConstraint, func
from sqlalchemy.orm import relationship
from database import Base

# Represents the user's shopping cart (one per user)
class Cart(Base):
    __tablename__ = "carts" # Table name

    id = Column(Integer, primary_key=True, index=True) # Primary key
    user_id = Column(Integer, ForeignKey("users.id", ondelete="CASCADE"), unique=True, index=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now()) # Creation timestamp

    user = relationship("User", back_populates="cart")
    # One-to-many relationship with cart items
    items = relationship("CartItem", back_populates="cart", cascade="all, delete-orphan", order_by="CartItem.id")


# Represents a single item (product + quantity) within a cart
class CartItem(Base):
    __tablename__ = "cart_items" # Table name

    id = Column(Integer, primary_key=True, index=True)
    cart_id = Column(Integer, ForeignKey("carts.id", ondelete="CASCADE"), index=True, nullable=False) # Foreign key to parent cart
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), index=True, nullable=False) # Foreign key to product
    quantity = Column(Integer, nullable=False, default=1) # Product quantity

    cart = relationship("Cart", back_populates="items") # Relationship back to Cart
    product = relationship("Product", back_populates="cart_items") # Relationship to Product

    __table_args__ = (
        # The add-to-cart upsert targets this constraint
        UniqueConstraint("cart_id", "product_id", name="uq_cartitem_cart_product"),
    )
