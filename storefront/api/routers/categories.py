from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    CategoryAddIn,
    CatalogDeleteIn,
    CategoryProductsIn,
    CategoryOut,
    ProductOut,
)
from storefront.services.catalog_service import CategoryService

router = APIRouter(prefix="/api/categories", tags=["categories"])


def get_service(db: Session = Depends(get_db)) -> CategoryService:
    return CategoryService(db)


@router.post("/add", status_code=201)
def add_category(payload: CategoryAddIn, svc: CategoryService = Depends(get_service)):
    category = svc.add_category(payload.user_id, payload.name)
    return {"message": "Category added successfully!", "category": CategoryOut.model_validate(category)}


@router.get("/list")
def list_categories(svc: CategoryService = Depends(get_service)):
    return [CategoryOut.model_validate(c) for c in svc.list_categories()]


@router.post("/products")
def products_by_category(payload: CategoryProductsIn, svc: CategoryService = Depends(get_service)):
    products = svc.products_in_category(payload.category_id)
    return {
        "message": f"Products fetched successfully for category ID: {payload.category_id}",
        "products": [ProductOut.model_validate(p) for p in products],
    }


@router.delete("/delete")
def delete_category(payload: CatalogDeleteIn, svc: CategoryService = Depends(get_service)):
    svc.delete_category(payload.user_id, payload.id)
    return {"message": f"Category with ID {payload.id} successfully deleted."}
