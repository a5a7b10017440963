# Import every model so SQLAlchemy registers them on Base.metadata
from models.users import User
from models.category import Category
from models.product import Product, ProductImage
from models.cart import Cart, CartItem
from models.log import Log

__all__ = ["User", "Category", "Product", "ProductImage", "Cart", "CartItem", "Log"]
