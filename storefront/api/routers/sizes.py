from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from storefront.data.database import get_db
from storefront.domain.schemas import (
    SizeAddIn,
    CatalogDeleteIn,
    SizeProductsIn,
    SizeOut,
    ProductOut,
)
from storefront.services.catalog_service import SizeService

router = APIRouter(prefix="/api/sizes", tags=["sizes"])


def get_service(db: Session = Depends(get_db)) -> SizeService:
    return SizeService(db)


@router.post("/add", status_code=201)
def add_size(payload: SizeAddIn, svc: SizeService = Depends(get_service)):
    size = svc.add_size(payload.user_id, payload.size_name)
    return {"message": "Size added successfully!", "size": SizeOut.model_validate(size)}


@router.get("/list")
def list_sizes(svc: SizeService = Depends(get_service)):
    return [SizeOut.model_validate(s) for s in svc.list_sizes()]


@router.post("/products")
def products_by_size(payload: SizeProductsIn, svc: SizeService = Depends(get_service)):
    products = svc.products_with_size(payload.size_id)
    return {
        "message": f"Products fetched successfully for size ID: {payload.size_id}",
        "products": [ProductOut.model_validate(p) for p in products],
    }


@router.delete("/delete")
def delete_size(payload: CatalogDeleteIn, svc: SizeService = Depends(get_service)):
    svc.delete_size(payload.user_id, payload.id)
    return {"message": f"Size with ID {payload.id} successfully deleted."}
