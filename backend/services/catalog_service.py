# backend/services/catalog_service.py
import logging
from typing import Any, Dict, List, Optional, Sequence, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session, joinedload, selectinload

from database import atomic
from models.category import Category
from models.product import Product
from services.image_service import set_images
from utils.errors import Conflict, NotFound, ValidationFailed

logger = logging.getLogger(__name__)

PRODUCT_FIELDS = ("name", "price", "description", "stock", "category_id")
# Fields an update may reset to NULL
CLEARABLE_FIELDS = ("description", "category_id")


class CatalogService:
    """
    Products, their images and categories.
    Reads always include the category and the gallery ordered by position.
    """

    def __init__(self, db: Session):
        self.db = db

    def _product_query(self):
        return select(Product).options(
            joinedload(Product.category),
            selectinload(Product.images),
        )

    # =====================================================
    # PRODUCTS - QUERY
    # =====================================================
    def list_products(self, q: Optional[str] = None, category_id: Optional[int] = None) -> List[Product]:
        stmt = self._product_query()
        if q:
            stmt = stmt.where(Product.name.ilike(f"%{q.strip()}%"))
        if category_id is not None:
            stmt = stmt.where(Product.category_id == category_id)
        return list(self.db.scalars(stmt.order_by(Product.id)).unique())

    def get_product(self, product_id: int) -> Product:
        product = self.db.scalars(self._product_query().where(Product.id == product_id)).unique().first()
        if product is None:
            raise NotFound("Product not found")
        return product

    # =====================================================
    # PRODUCTS - COMMANDS
    # =====================================================
    def _check_fields(self, data: Dict[str, Any]) -> None:
        if "name" in data and not (data["name"] or "").strip():
            raise ValidationFailed("Product name is required")
        if data.get("price") is not None and data["price"] < 0:
            raise ValidationFailed("Price must be >= 0")
        if data.get("stock") is not None and data["stock"] < 0:
            raise ValidationFailed("Stock must be >= 0")
        if data.get("category_id") is not None and self.db.get(Category, data["category_id"]) is None:
            raise NotFound("Category not found")

    def create_product(self, data: Dict[str, Any], image_urls: Optional[List[str]] = None) -> Product:
        """Create the product and attach its images in one transaction."""
        if data.get("price") is None:
            raise ValidationFailed("Price is required")
        self._check_fields({**data, "name": data.get("name")})

        with atomic(self.db):
            product = Product(**{k: data[k] for k in PRODUCT_FIELDS if data.get(k) is not None})
            self.db.add(product)
            self.db.flush()
            set_images(self.db, product, image_urls or [])

        logger.info("Created product %s (%s)", product.id, product.name)
        return self.get_product(product.id)

    def update_product(
        self,
        product_id: int,
        changes: Dict[str, Any],
        image_urls: Optional[List[str]] = None,
        clear: Sequence[str] = (),
    ) -> Tuple[Product, List[str]]:
        """
        Apply the given field changes; ``None`` values are left untouched and
        fields named in ``clear`` are set to NULL. With new image URLs the
        gallery is fully replaced. Returns the product and the URLs no longer
        in use.
        """
        clear = set(clear)
        unknown = clear - set(CLEARABLE_FIELDS)
        if unknown:
            raise ValidationFailed(f"Cannot clear field(s): {', '.join(sorted(unknown))}")

        changes = {k: v for k, v in changes.items() if k in PRODUCT_FIELDS and v is not None}
        both = clear & set(changes)
        if both:
            raise ValidationFailed(f"Field(s) both set and cleared: {', '.join(sorted(both))}")
        self._check_fields(changes)

        with atomic(self.db):
            product = self.get_product(product_id)
            for key, value in changes.items():
                setattr(product, key, value)
            for key in clear:
                setattr(product, key, None)
            replaced = set_images(self.db, product, image_urls or [])

        logger.info(
            "Updated product %s fields=%s cleared=%s images=%d",
            product_id, sorted(changes), sorted(clear), len(image_urls or []),
        )
        return self.get_product(product_id), replaced

    def delete_product(self, product_id: int) -> List[str]:
        """Delete the product with its images and cart lines; returns its image URLs."""
        with atomic(self.db):
            product = self.get_product(product_id)
            urls = [img.url for img in product.images]
            if product.image and product.image not in urls:
                urls.append(product.image)
            self.db.delete(product)

        logger.info("Deleted product %s", product_id)
        return urls

    # =====================================================
    # CATEGORIES
    # =====================================================
    def list_categories(self) -> List[Category]:
        return list(self.db.scalars(select(Category).order_by(Category.name)))

    def get_category(self, category_id: int) -> Category:
        category = self.db.get(Category, category_id)
        if category is None:
            raise NotFound("Category not found")
        return category

    def _ensure_name_free(self, name: str, exclude_id: Optional[int] = None) -> None:
        stmt = select(Category).where(Category.name == name)
        if exclude_id is not None:
            stmt = stmt.where(Category.id != exclude_id)
        if self.db.scalars(stmt).first() is not None:
            raise Conflict(f"Category '{name}' already exists")

    def create_category(self, name: str) -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationFailed("Category name is required")
        self._ensure_name_free(name)

        with atomic(self.db):
            category = Category(name=name)
            self.db.add(category)

        self.db.refresh(category)
        logger.info("Created category %s (%s)", category.id, category.name)
        return category

    def update_category(self, category_id: int, name: str) -> Category:
        name = (name or "").strip()
        if not name:
            raise ValidationFailed("Category name is required")

        with atomic(self.db):
            category = self.get_category(category_id)
            self._ensure_name_free(name, exclude_id=category_id)
            category.name = name

        self.db.refresh(category)
        return category

    def delete_category(self, category_id: int) -> None:
        # Products stay in the catalog without a category
        with atomic(self.db):
            category = self.get_category(category_id)
            self.db.delete(category)
        logger.info("Deleted category %s", category_id)
