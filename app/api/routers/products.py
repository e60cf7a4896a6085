# app/api/routers/products.py
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from app.api.deps import require_admin
from app.data.database import get_db
from app.domain.schemas import ProductIn, ProductUpdate, ProductOut, ProductListOut, MessageOut
from app.services.identity_client import Identity
from app.services.product_service import ProductService

router = APIRouter(prefix="/products", tags=["products"])


def get_service(db: Session):
    return ProductService(db)


@router.get("", response_model=ProductListOut)
def list_products(
    category: Optional[str] = Query(None, description="ID kategorii"),
    search: Optional[str] = Query(None),
    deals: bool = Query(False),
    limit: Optional[int] = Query(None, ge=1),
    offset: int = Query(0, ge=0),
    db: Session = Depends(get_db),
):
    rows, count = get_service(db).list_products(category, search, deals, limit, offset)
    return {"data": rows, "count": count}


@router.get("/{product_id}", response_model=Optional[ProductOut])
def get_product(product_id: str, db: Session = Depends(get_db)):
    # nieznane id zwraca null, nie 404
    return get_service(db).get_product(product_id)


@router.post("", response_model=ProductOut, status_code=201)
def create_product(
    payload: ProductIn,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).create_product(payload)


@router.put("/{product_id}", response_model=ProductOut)
def update_product(
    product_id: str,
    payload: ProductUpdate,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    return get_service(db).update_product(product_id, payload)


@router.delete("/{product_id}", response_model=MessageOut)
def delete_product(
    product_id: str,
    admin: Identity = Depends(require_admin),
    db: Session = Depends(get_db),
):
    get_service(db).delete_product(product_id)
    return {"message": "Product deleted successfully"}
