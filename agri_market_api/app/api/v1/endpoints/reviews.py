"""Review endpoints for products and services."""

from typing import List

from fastapi import APIRouter, Depends, status

from agri_market_api.app.api.v1.errors import storage_errors
from agri_market_api.app.schemas.review import ReviewCreate, ReviewRead
from agri_market_api.app.storage import Storage, get_storage

router = APIRouter()


@router.post("", response_model=ReviewRead, status_code=status.HTTP_201_CREATED)
def create_review(review: ReviewCreate, storage: Storage = Depends(get_storage)) -> ReviewRead:
    with storage_errors("Failed to create review"):
        return storage.create_review(review)


@router.get("/product/{product_id}", response_model=List[ReviewRead])
def list_product_reviews(product_id: int, storage: Storage = Depends(get_storage)) -> List[ReviewRead]:
    with storage_errors("Failed to get product reviews"):
        return storage.get_reviews_for_product(product_id)


@router.get("/service/{service_id}", response_model=List[ReviewRead])
def list_service_reviews(service_id: int, storage: Storage = Depends(get_storage)) -> List[ReviewRead]:
    with storage_errors("Failed to get service reviews"):
        return storage.get_reviews_for_service(service_id)
