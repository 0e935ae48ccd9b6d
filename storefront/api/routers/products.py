# storefront/api/routers/products.py
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    ProductAddIn,
    ProductUpdateIn,
    ProductFetchIn,
    ProductOut,
    ProductListOut,
)
from storefront.services.product_service import ProductService

router = APIRouter(prefix="/api/products", tags=["products"])


def get_service(db: Session = Depends(get_db)) -> ProductService:
    return ProductService(db)


@router.post("/add", status_code=201)
def add_product(payload: ProductAddIn, svc: ProductService = Depends(get_service)):
    product = svc.add_product(
        user_id=payload.user_id,
        title=payload.title,
        description=payload.description,
        price=payload.price,
        is_discounted=payload.is_discounted,
        discount_percentage=payload.discount_percentage,
        stock_quantity=payload.stock_quantity,
        category_ids=payload.category_ids,
        size_ids=payload.size_ids,
        images=payload.images,
    )
    return {"message": "Product added successfully!", "product": ProductOut.model_validate(product)}


@router.post("/fetch")
def fetch_product(payload: ProductFetchIn, svc: ProductService = Depends(get_service)):
    product = svc.get_product(payload.product_id)
    return {"message": "Product fetched successfully!", "product": ProductOut.model_validate(product)}


@router.put("/update")
def update_product(payload: ProductUpdateIn, svc: ProductService = Depends(get_service)):
    fields = payload.model_dump(exclude={"user_id", "product_id", "category_ids", "size_ids"})
    product = svc.update_product(
        user_id=payload.user_id,
        product_id=payload.product_id,
        fields=fields,
        category_ids=payload.category_ids,
        size_ids=payload.size_ids,
    )
    return {"message": "Product updated successfully!", "product": ProductOut.model_validate(product)}


@router.get("/list")
def list_products(svc: ProductService = Depends(get_service)):
    return [ProductListOut.model_validate(p) for p in svc.list_products()]
