# backend/models/product.py
from sqlalchemy import Column, Integer, String, Text, Float, ForeignKey, CheckConstraint
from sqlalchemy.orm import relationship
from database import Base

# Model Product
# A catalog entry with price, stock and an ordered image collection.
# `image` is the legacy single-image field; it always mirrors the primary image
# once a set of images has been attached.
class Product(Base):
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    name = Column(String, nullable=False, index=True)
    description = Column(Text, nullable=True)

    price = Column(Float, CheckConstraint("price >= 0"), nullable=False)
    stock = Column(Integer, CheckConstraint("stock >= 0"), nullable=False, default=0)

    # Legacy single image URL, kept for older consumers
    image = Column(String, nullable=True)

    category_id = Column(Integer, ForeignKey("categories.id", ondelete="SET NULL"), nullable=True, index=True)

    # Id of the one primary image; a single column cannot point at two images
    primary_image_id = Column(Integer, nullable=True)

    category = relationship("Category", back_populates="products")
    images = relationship(
        "ProductImage",
        back_populates="product",
        order_by="ProductImage.position",
        cascade="all, delete-orphan",
    )
    cart_items = relationship("CartItem", back_populates="product", cascade="all, delete-orphan")

    @property
    def primary_image(self):
        if self.primary_image_id is None:
            return None
        return next((img for img in self.images if img.id == self.primary_image_id), None)


# One image in a product's gallery
class ProductImage(Base):
    __tablename__ = "product_images"

    id = Column(Integer, primary_key=True, index=True)
    product_id = Column(Integer, ForeignKey("products.id", ondelete="CASCADE"), nullable=False, index=True)
    url = Column(String, nullable=False)
    position = Column(Integer, nullable=False, default=0) # Order index within the product

    product = relationship("Product", back_populates="images")

    @property
    def is_primary(self) -> bool:
        return self.id is not None and self.product is not None and self.product.primary_image_id == self.id
