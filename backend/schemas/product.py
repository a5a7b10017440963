# backend/schemas/product.py
from pydantic import BaseModel, ConfigDict
from typing import Optional, List


# Base configuration for ORM compatibility
class ORMBase(BaseModel):
    model_config = ConfigDict(from_attributes=True)


class CategoryRef(ORMBase):
    id: int
    name: str


class ProductImageOut(ORMBase):
    id: int
    url: str
    position: int
    is_primary: bool


# Full product representation, used by the catalog, detail and admin views
class ProductOut(ORMBase):
    id: int
    name: str
    price: float
    description: Optional[str] = None
    stock: int
    image: Optional[str] = None # Legacy single image
    category_id: Optional[int] = None
    category: Optional[CategoryRef] = None
    images: List[ProductImageOut] = []
    cover_image: Optional[str] = None
