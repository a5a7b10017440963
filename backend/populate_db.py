import os
import sys
import logging

# Add 'backend' folder to Python path
sys.path.append(os.path.abspath(os.path.dirname(__file__)))

from sqlalchemy import select
from sqlalchemy.orm import Session

from database import SessionLocal, init_db
from models.category import Category
from models.product import Product
from models.users import User
from services.catalog_service import CatalogService
from services.user_service import UserService

logger = logging.getLogger(__name__)

# Configuration
ADMIN_EMAIL = os.getenv("SEED_ADMIN_EMAIL", "admin@example.com")
ADMIN_PASSWORD = os.getenv("SEED_ADMIN_PASSWORD", "admin123")

CATALOG = {
    "Games": [
        ("Chess", 10.0, 5, "Wooden chess set"),
        ("Checkers", 7.5, 12, "Classic checkers"),
    ],
    "Books": [
        ("Python Tricks", 29.9, 3, "A buffet of Python features"),
    ],
}
# End Configuration


def seed(session: Session) -> dict:
    """Create the admin account, categories and products that are missing. Safe to rerun."""
    created = {"users": 0, "categories": 0, "products": 0}
    users = UserService(session)
    catalog = CatalogService(session)

    if session.scalars(select(User).where(User.email == ADMIN_EMAIL)).first() is None:
        users.create_user("Admin", ADMIN_EMAIL, ADMIN_PASSWORD, is_admin=True)
        created["users"] += 1

    for category_name, products in CATALOG.items():
        category = session.scalars(select(Category).where(Category.name == category_name)).first()
        if category is None:
            category = catalog.create_category(category_name)
            created["categories"] += 1

        for name, price, stock, description in products:
            exists = session.scalars(
                select(Product).where(Product.name == name, Product.category_id == category.id)
            ).first()
            if exists:
                continue
            # No gallery: the cover resolves to the placeholder
            catalog.create_product(
                {"name": name, "price": price, "stock": stock, "description": description, "category_id": category.id}
            )
            created["products"] += 1

    return created


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO)
    init_db()
    session = SessionLocal()
    try:
        result = seed(session)
        logger.info("Seed finished: %s", result)
    finally:
        session.close()
