# backend/routes/categories.py
from typing import List

from fastapi import APIRouter, Depends, Request, Response, status
from sqlalchemy.orm import Session

from database import get_db
from models.users import User
from routes.products import product_to_out
from schemas.category import CategoryCreate, CategoryOut
from schemas.product import ProductOut
from services.catalog_service import CatalogService
from utils.audit import write_log, client_ip
from utils.tokenJWT import require_admin

router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=List[CategoryOut])
def list_categories(db: Session = Depends(get_db)):
    return CatalogService(db).list_categories()


@router.get("/{category_id}", response_model=CategoryOut)
def get_category(category_id: int, db: Session = Depends(get_db)):
    return CatalogService(db).get_category(category_id)


# Products of one category (empty list when it has none)
@router.get("/{category_id}/products", response_model=List[ProductOut])
def list_category_products(category_id: int, db: Session = Depends(get_db)):
    products = CatalogService(db).list_products(category_id=category_id)
    return [product_to_out(p) for p in products]


@router.post("", response_model=CategoryOut, status_code=status.HTTP_201_CREATED)
def create_category(
    payload: CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = CatalogService(db).create_category(payload.name)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_CREATE", resource="categories",
        status="SUCCESS", ip=client_ip(request), meta={"id": category.id, "name": category.name},
    )
    return category


@router.put("/{category_id}", response_model=CategoryOut)
def update_category(
    category_id: int,
    payload: CategoryCreate,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    category = CatalogService(db).update_category(category_id, payload.name)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_UPDATE", resource="categories",
        status="SUCCESS", ip=client_ip(request), meta={"id": category.id, "name": category.name},
    )
    return category


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_category(
    category_id: int,
    request: Request,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_admin),
):
    CatalogService(db).delete_category(category_id)
    write_log(
        db, user_id=current_user.id, action="CATEGORY_DELETE", resource="categories",
        status="SUCCESS", ip=client_ip(request), meta={"id": category_id},
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)
