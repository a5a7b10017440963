# backend/routes/products.py
from typing import Optional, List

from fastapi import APIRouter, Depends, Query, Request, Response, UploadFile, File, Form, status
from sqlalchemy.orm import Session

from config import settings
from database import get_db
from models.product import Product
from models.users import User
from schemas.product import ProductOut
from services.catalog_service import CatalogService
from services.image_service import resolve_cover_image
from utils.audit import write_log, client_ip
from utils.tokenJWT import require_admin
from utils.uploads import save_images, discard_images

router = APIRouter(tags=["Products"])


# ---- HELPERS ----
def product_to_out(product: Product) -> ProductOut:
    """Serialize a product; every product view resolves its cover image here."""
    out = ProductOut.model_validate(product)
    out.cover_image = resolve_cover_image(product, settings.PLACEHOLDER_IMAGE)
    return out


# =========================
# PRODUCT LIST
# =========================
@router.get("/products", response_model=List[ProductOut])
def list_products(
    q: Optional[str] = Query(None, description="Substring of the product name"),
    category_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
):
    products = CatalogService(db).list_products(q=q, category_id=category_id)
    return [product_to_out(p) for p in products]


# =========================
# SINGLE PRODUCT
# =========================
@router.get("/products/{product_id}", response_model=ProductOut)
def get_product(product_id: int, db: Session = Depends(get_db)):
    return product_to_out(CatalogService(db).get_product(product_id))


# =========================
# CREATE PRODUCT (multipart, up to MAX_PRODUCT_IMAGES files under "images")
# =========================
@router.post("/products", response_model=ProductOut, status_code=status.HTTP_201_CREATED)
def create_product(
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    name: str = Form(...),
    price: float = Form(...),
    description: Optional[str] = Form(None),
    stock: int = Form(0),
    category_id: Optional[int] = Form(None),
    images: Optional[List[UploadFile]] = File(None),
):
    urls = save_images(images or [])
    try:
        product = CatalogService(db).create_product(
            {"name": name, "price": price, "description": description, "stock": stock, "category_id": category_id},
            urls,
        )
    except Exception:
        # Nothing was committed, so the files are orphans
        discard_images(urls)
        raise

    write_log(
        db, user_id=current_user.id, action="PRODUCT_CREATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "images": len(urls)},
    )
    return product_to_out(product)


# =========================
# UPDATE PRODUCT (partial fields; new images replace the whole gallery)
# =========================
@router.put("/products/{product_id}", response_model=ProductOut)
def update_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
    name: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    description: Optional[str] = Form(None),
    stock: Optional[int] = Form(None),
    category_id: Optional[int] = Form(None),
    clear: Optional[List[str]] = Form(None, description="Fields to reset: description, category_id"),
    images: Optional[List[UploadFile]] = File(None),
):
    """
    Omitted fields keep their value; send `clear=description` or
    `clear=category_id` (repeatable) to reset them.
    """
    service = CatalogService(db)
    service.get_product(product_id)

    urls = save_images(images or [])
    try:
        product, replaced = service.update_product(
            product_id,
            {"name": name, "price": price, "description": description, "stock": stock, "category_id": category_id},
            urls,
            clear=clear or [],
        )
    except Exception:
        discard_images(urls)
        raise
    discard_images(replaced)

    write_log(
        db, user_id=current_user.id, action="PRODUCT_UPDATE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product.id, "images_replaced": bool(urls)},
    )
    return product_to_out(product)


# =========================
# DELETE PRODUCT
# =========================
@router.delete("/products/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_product(
    product_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    urls = CatalogService(db).delete_product(product_id)
    discard_images(urls)
    write_log(
        db, user_id=current_user.id, action="PRODUCT_DELETE", resource="products",
        status="SUCCESS", ip=client_ip(request), meta={"id": product_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
