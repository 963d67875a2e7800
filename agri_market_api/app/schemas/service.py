"""Pydantic models for services offered by service providers."""

from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from pydantic import Field, field_validator

from .base import CamelModel, reject_null


class ServiceType(str, Enum):
    TRANSPORTATION = "transportation"
    EQUIPMENT_RENTAL = "equipment_rental"
    ADVISORY = "advisory"


class ServiceBase(CamelModel):
    provider_id: int = Field(..., examples=[4])
    title: str = Field(..., min_length=1, examples=["Fast Transport Services"])
    description: str = Field("", examples=["Reliable and quick transportation"])
    service_type: ServiceType = Field(..., examples=["transportation"])
    price: Optional[Decimal] = Field(None, examples=["1500"])
    pricing_unit: Optional[str] = Field(None, examples=["per trip"])
    location: Optional[str] = None
    availability: Optional[str] = None
    rating: Optional[Decimal] = None


class ServiceCreate(ServiceBase):
    pass


class ServiceUpdate(CamelModel):
    """Partial update of a service; ``id`` and ``created_at`` are fixed."""

    provider_id: Optional[int] = None
    title: Optional[str] = None
    description: Optional[str] = None
    service_type: Optional[ServiceType] = None
    price: Optional[Decimal] = None
    pricing_unit: Optional[str] = None
    location: Optional[str] = None
    availability: Optional[str] = None
    rating: Optional[Decimal] = None

    @field_validator("provider_id", "title", "description", "service_type")
    @classmethod
    def not_null(cls, v):
        return reject_null(v)


class ServiceRead(ServiceBase):
    id: int
    created_at: datetime
