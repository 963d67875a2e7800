"""
User endpoints.

Registration, login, profile lookup and role listings.  Every response
uses ``UserPublic`` so the stored password hash never leaves the
server.  There are no sessions or tokens: login verifies the password
and returns the user.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from agri_market_api.app.api.v1.errors import not_found, storage_errors
from agri_market_api.app.core.security import hash_password, verify_password
from agri_market_api.app.schemas.user import (
    UserCreate,
    UserLogin,
    UserPublic,
    UserRead,
    UserRole,
    UserUpdate,
)
from agri_market_api.app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


def _public(user: UserRead) -> UserPublic:
    return UserPublic.model_validate(user)


@router.post("/register", response_model=UserPublic, status_code=status.HTTP_201_CREATED)
def register_user(user: UserCreate, storage: Storage = Depends(get_storage)) -> UserPublic:
    """Register a new user.

    Username and email are checked for availability first (400 if
    taken).  The check is advisory: on the database backend a
    concurrent registration still trips the UNIQUE constraint and
    yields a 500.
    """
    with storage_errors("Failed to register user"):
        if storage.get_user_by_username(user.username):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Username already taken")
        if storage.get_user_by_email(user.email):
            raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Email already registered")
        hashed = user.model_copy(update={"password": hash_password(user.password)})
        created = storage.create_user(hashed)
    logger.info("Registered user %s (%s)", created.id, created.role)
    return _public(created)


@router.post("/login", response_model=UserPublic)
def login_user(credentials: UserLogin, storage: Storage = Depends(get_storage)) -> UserPublic:
    """Check a username/password pair and return the matching user."""
    if not credentials.username or not credentials.password:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Username and password are required",
        )
    with storage_errors("Failed to login"):
        user = storage.get_user_by_username(credentials.username)
    if not user or not verify_password(credentials.password, user.password):
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail="Invalid credentials")
    return _public(user)


@router.get("/role/all", response_model=List[UserPublic])
def list_all_users(storage: Storage = Depends(get_storage)) -> List[UserPublic]:
    with storage_errors("Failed to get all users"):
        return [_public(u) for u in storage.list_users()]


@router.get("/role/{role}", response_model=List[UserPublic])
def list_users_by_role(role: UserRole, storage: Storage = Depends(get_storage)) -> List[UserPublic]:
    with storage_errors("Failed to get users by role"):
        return [_public(u) for u in storage.get_users_by_role(role.value)]


@router.get("/{user_id}", response_model=UserPublic)
def get_user(user_id: int, storage: Storage = Depends(get_storage)) -> UserPublic:
    with storage_errors("Failed to get user"):
        user = storage.get_user(user_id)
        if not user:
            raise not_found("User")
        return _public(user)


@router.put("/{user_id}", response_model=UserPublic)
def update_user(
    user_id: int,
    updates: UserUpdate,
    storage: Storage = Depends(get_storage),
) -> UserPublic:
    """Update a user's profile.

    Partial updates are supported; the role cannot be changed.  A new
    password is hashed before it is stored.
    """
    if updates.password is not None:
        updates = updates.model_copy(update={"password": hash_password(updates.password)})
    with storage_errors("Failed to update user"):
        user = storage.update_user(user_id, updates)
        if not user:
            raise not_found("User")
        return _public(user)
