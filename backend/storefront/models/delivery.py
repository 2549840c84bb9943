"""Delivery price data models."""

from pydantic import BaseModel, Field


class DeliveryPrice(BaseModel):
    """Delivery fee for a location."""

    location: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
