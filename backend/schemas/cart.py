from pydantic import BaseModel, ConfigDict, Field
from typing import List, Optional

# Request schema for adding a product to the cart; 0 or missing quantity means 1
class CartAddItem(BaseModel):
    product_id: int
    quantity: Optional[int] = Field(default=None, ge=0)

# Request schema for overwriting the quantity of a cart line
class CartUpdateItem(BaseModel):
    product_id: int
    quantity: int = Field(ge=1)

# The stored cart line returned by add/update
class CartItemOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    cart_id: int
    product_id: int
    quantity: int

# Response schema for a single line of the cart view
class CartLineOut(BaseModel):
    product_id: int
    name: str
    price: float
    quantity: int
    subtotal: float
    cover_image: Optional[str] = None

# Response schema for the entire cart
class CartOut(BaseModel):
    id: int
    user_id: int
    items: List[CartLineOut]
    total: float
