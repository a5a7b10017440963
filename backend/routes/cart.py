# backend/routes/cart.py
from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.cart import Cart
from models.users import User
from schemas.cart import CartAddItem, CartUpdateItem, CartOut, CartItemOut, CartLineOut
from services.cart_service import CartService
from services.image_service import resolve_cover_image
from utils.audit import write_log, client_ip
from utils.errors import Forbidden
from utils.tokenJWT import get_current_user

router = APIRouter(prefix="/cart", tags=["Cart"])


def _ensure_cart_access(user: User, user_id: int):
    # Customers may only touch their own cart; admins may touch any
    if user.id != user_id and not user.is_admin:
        raise Forbidden("Not allowed to access this cart")


def _cart_to_out(cart: Cart) -> CartOut:
    items_out = []
    total = 0.0

    for it in cart.items:
        product = it.product
        subtotal = product.price * it.quantity
        total += subtotal
        items_out.append(CartLineOut(
            product_id=it.product_id,
            name=product.name,
            price=product.price,
            quantity=it.quantity,
            subtotal=round(subtotal, 2),
            cover_image=resolve_cover_image(product, settings.PLACEHOLDER_IMAGE),
        ))

    return CartOut(id=cart.id, user_id=cart.user_id, items=items_out, total=round(total, 2))


@router.get("/{user_id}", response_model=CartOut)
def get_cart(
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(current_user, user_id)
    return _cart_to_out(CartService(db).get_cart(user_id))


@router.post("/{user_id}", response_model=CartItemOut, status_code=status.HTTP_201_CREATED)
def add_to_cart(
    user_id: int,
    payload: CartAddItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(current_user, user_id)
    item = CartService(db).add_item(user_id, payload.product_id, payload.quantity)
    out = CartItemOut.model_validate(item)

    write_log(
        db, user_id=current_user.id, action="CART_ADD", resource="cart",
        status="SUCCESS", ip=client_ip(request),
        meta={"cart_user_id": user_id, "product_id": payload.product_id, "quantity": out.quantity},
    )
    return out


@router.put("/{user_id}", response_model=CartItemOut)
def update_cart_item(
    user_id: int,
    payload: CartUpdateItem,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(current_user, user_id)
    item = CartService(db).update_item(user_id, payload.product_id, payload.quantity)
    out = CartItemOut.model_validate(item)

    write_log(
        db, user_id=current_user.id, action="CART_UPDATE", resource="cart",
        status="SUCCESS", ip=client_ip(request),
        meta={"cart_user_id": user_id, "product_id": payload.product_id, "quantity": out.quantity},
    )
    return out


@router.delete("/{user_id}/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_cart_item(
    user_id: int,
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(current_user, user_id)
    CartService(db).remove_item(user_id, product_id)

    write_log(
        db, user_id=current_user.id, action="CART_DELETE", resource="cart",
        status="SUCCESS", ip=client_ip(request),
        meta={"cart_user_id": user_id, "product_id": product_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete("/{user_id}", status_code=status.HTTP_204_NO_CONTENT)
def clear_cart(
    user_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _ensure_cart_access(current_user, user_id)
    removed = CartService(db).clear(user_id)

    write_log(
        db, user_id=current_user.id, action="CART_CLEAR", resource="cart",
        status="SUCCESS", ip=client_ip(request),
        meta={"cart_user_id": user_id, "removed": removed},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
