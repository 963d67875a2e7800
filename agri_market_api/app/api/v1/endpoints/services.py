"""
Service endpoints.

Transportation, equipment rental and advisory offers published by
service providers.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from agri_market_api.app.api.v1.errors import not_found, storage_errors
from agri_market_api.app.schemas.service import (
    ServiceCreate,
    ServiceRead,
    ServiceType,
    ServiceUpdate,
)
from agri_market_api.app.storage import Storage, get_storage

router = APIRouter()


@router.post("", response_model=ServiceRead, status_code=status.HTTP_201_CREATED)
def create_service(service: ServiceCreate, storage: Storage = Depends(get_storage)) -> ServiceRead:
    with storage_errors("Failed to create service"):
        return storage.create_service(service)


@router.get("", response_model=List[ServiceRead])
def list_services(
    limit: Optional[int] = Query(None, ge=1),
    type: Optional[ServiceType] = Query(None, description="Service type filter"),
    storage: Storage = Depends(get_storage),
) -> List[ServiceRead]:
    with storage_errors("Failed to get services"):
        return storage.get_services(limit=limit, service_type=type.value if type else None)


@router.get("/provider/{provider_id}", response_model=List[ServiceRead])
def list_provider_services(provider_id: int, storage: Storage = Depends(get_storage)) -> List[ServiceRead]:
    with storage_errors("Failed to get provider services"):
        return storage.get_services_by_provider(provider_id)


@router.get("/{service_id}", response_model=ServiceRead)
def get_service(service_id: int, storage: Storage = Depends(get_storage)) -> ServiceRead:
    with storage_errors("Failed to get service"):
        service = storage.get_service(service_id)
        if not service:
            raise not_found("Service")
        return service


@router.put("/{service_id}", response_model=ServiceRead)
def update_service(
    service_id: int,
    updates: ServiceUpdate,
    storage: Storage = Depends(get_storage),
) -> ServiceRead:
    with storage_errors("Failed to update service"):
        service = storage.update_service(service_id, updates)
        if not service:
            raise not_found("Service")
        return service


@router.delete("/{service_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_service(service_id: int, storage: Storage = Depends(get_storage)) -> None:
    with storage_errors("Failed to delete service"):
        if not storage.delete_service(service_id):
            raise not_found("Service")
    return None
