"""
Order endpoints.

Orders are listed per buyer or per farmer.  The status can be set to
any value of ``OrderStatus`` at any time; there is no transition
check.
"""

import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException, status

from agri_market_api.app.api.v1.errors import not_found, storage_errors
from agri_market_api.app.schemas.order import OrderCreate, OrderRead, OrderStatusUpdate
from agri_market_api.app.storage import Storage, get_storage

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("", response_model=OrderRead, status_code=status.HTTP_201_CREATED)
def create_order(order: OrderCreate, storage: Storage = Depends(get_storage)) -> OrderRead:
    with storage_errors("Failed to create order"):
        return storage.create_order(order)


@router.get("/buyer/{buyer_id}", response_model=List[OrderRead])
def list_buyer_orders(buyer_id: int, storage: Storage = Depends(get_storage)) -> List[OrderRead]:
    with storage_errors("Failed to get buyer orders"):
        return storage.get_orders_by_buyer(buyer_id)


@router.get("/farmer/{farmer_id}", response_model=List[OrderRead])
def list_farmer_orders(farmer_id: int, storage: Storage = Depends(get_storage)) -> List[OrderRead]:
    with storage_errors("Failed to get farmer orders"):
        return storage.get_orders_by_farmer(farmer_id)


@router.get("/{order_id}", response_model=OrderRead)
def get_order(order_id: int, storage: Storage = Depends(get_storage)) -> OrderRead:
    with storage_errors("Failed to get order"):
        order = storage.get_order(order_id)
        if not order:
            raise not_found("Order")
        return order


@router.put("/{order_id}/status", response_model=OrderRead)
def update_order_status(
    order_id: int,
    body: OrderStatusUpdate,
    storage: Storage = Depends(get_storage),
) -> OrderRead:
    if body.status is None:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Status is required")
    with storage_errors("Failed to update order status"):
        order = storage.update_order_status(order_id, body.status)
        if not order:
            raise not_found("Order")
    logger.info("Order %s is now %s", order_id, order.status)
    return order
