"""
Pydantic models for orders.

An order links a buyer, the farmer selling and the product bought.
Status changes are not constrained to a state machine: any status may
replace any other.
"""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field

from .base import CamelModel


class OrderStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    SHIPPED = "shipped"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class OrderBase(CamelModel):
    buyer_id: int
    farmer_id: int
    product_id: int
    quantity: Decimal = Field(..., examples=["10"])
    total_price: Decimal = Field(..., examples=["450"])
    status: OrderStatus = OrderStatus.PENDING
    payment_status: bool = False
    shipping_address: str = Field(..., min_length=1)


class OrderCreate(OrderBase):
    pass


class OrderStatusUpdate(CamelModel):
    # Optional so that a missing status is answered with 400.
    status: Optional[OrderStatus] = None


class OrderRead(OrderBase):
    id: int
    created_at: datetime
