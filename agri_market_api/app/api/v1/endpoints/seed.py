"""
Seeding endpoint.

``POST /seed`` loads the demonstration dataset into the active
storage backend.  It is not idempotent: a second call against the
database backend fails on the duplicate usernames and returns 500.
"""

from fastapi import APIRouter, Depends, status

from agri_market_api.app.api.v1.errors import storage_errors
from agri_market_api.app.schemas.seed import SeedResult
from agri_market_api.app.schemas.user import UserPublic
from agri_market_api.app.storage import Storage, get_storage, seed_storage

router = APIRouter()


@router.post("", response_model=SeedResult, status_code=status.HTTP_201_CREATED)
def seed_database(storage: Storage = Depends(get_storage)) -> SeedResult:
    with storage_errors("Failed to seed database"):
        data = seed_storage(storage)
    data["users"] = [UserPublic.model_validate(u) for u in data["users"]]
    return SeedResult(message="Seed data created successfully", data=data)
