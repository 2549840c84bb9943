"""Order data models."""

from datetime import UTC, datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class OrderStatus(str, Enum):
    """Order lifecycle stages."""

    SUBMITTED = "submitted"
    AWAITING_PAYMENT = "awaiting_payment"
    CONFIRMED = "confirmed"
    PROCESSING = "processing"
    IN_TRANSIT = "in_transit"
    OUT_FOR_DELIVERY = "out_for_delivery"
    DELIVERED = "delivered"
    CANCELLED = "cancelled"


class StatusHistoryEntry(BaseModel):
    """One entry of an order's append-only status history."""

    status: OrderStatus
    timestamp: str = Field(..., description="UTC ISO-8601 timestamp")
    note: str = ""

    model_config = ConfigDict(use_enum_values=True)


class Customization(BaseModel):
    """Jersey personalization."""

    playerName: Optional[str] = None
    playerNumber: Optional[str] = None

    @property
    def is_set(self) -> bool:
        return bool(self.playerName or self.playerNumber)


class OrderItem(BaseModel):
    """Line item snapshot copied from the cart at order time."""

    id: str = Field(..., description="Product id")
    name: str = Field(..., min_length=1)
    price: float = Field(..., ge=0, description="Unit price in cedis")
    quantity: int = Field(..., ge=1)
    image: Optional[str] = None
    size: Optional[str] = None
    colorId: Optional[str] = None
    customization: Optional[Customization] = None


class ShippingInfo(BaseModel):
    """Shipping details collected at checkout."""

    firstName: str = ""
    lastName: str = ""
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None
    city: Optional[str] = None
    region: Optional[str] = None
    location: Optional[str] = Field(None, description="Delivery zone used for the delivery fee")

    model_config = ConfigDict(extra="allow")

    @property
    def full_name(self) -> str:
        return f"{self.firstName} {self.lastName}".strip()

    @property
    def delivery_location(self) -> Optional[str]:
        return self.location or self.city


class PaymentInfo(BaseModel):
    """Payment metadata."""

    method: str = "paystack"
    reference: Optional[str] = None


class DeliveryPersonInfo(BaseModel):
    """Courier details attached when an order goes out for delivery."""

    name: str
    phone: str
    vehicleInfo: Optional[str] = None
    assignedAt: Optional[str] = None


class StockAdjustment(BaseModel):
    """Pending or applied inventory decrement owed by an order."""

    productId: str
    quantity: int = Field(..., ge=1)
    applied: bool = False


class OrderInDB(BaseModel):
    """Order model as stored in database."""

    orderId: str = Field(..., description="Externally generated order id")
    userId: Optional[str] = None
    guestEmail: Optional[str] = None
    guestPhone: Optional[str] = None
    customerName: Optional[str] = None
    status: OrderStatus = OrderStatus.SUBMITTED
    statusHistory: list[StatusHistoryEntry] = Field(default_factory=list)
    items: list[OrderItem]
    shipping: ShippingInfo
    payment: PaymentInfo = Field(default_factory=PaymentInfo)
    subtotal: float = Field(..., ge=0)
    shippingCost: float = Field(0.0, ge=0)
    tax: float = Field(0.0, ge=0)
    total: float = Field(..., ge=0)
    paystackReference: Optional[str] = None
    deliveryPersonInfo: Optional[DeliveryPersonInfo] = None
    stockAdjustments: list[StockAdjustment] = Field(default_factory=list)
    orderDate: datetime = Field(default_factory=lambda: datetime.now(UTC))

    model_config = ConfigDict(
        use_enum_values=True,
        json_schema_extra={
            "example": {
                "orderId": "ORD-1718000000000-7GQ2K9XZA",
                "userId": None,
                "guestEmail": "ama@example.com",
                "guestPhone": "0241234567",
                "status": "submitted",
                "statusHistory": [
                    {
                        "status": "submitted",
                        "timestamp": "2024-06-10T10:00:00+00:00",
                        "note": "Order submitted successfully",
                    }
                ],
                "items": [
                    {
                        "id": "man-utd-home-jersey",
                        "name": "Manchester United Home Jersey",
                        "price": 89.99,
                        "quantity": 1,
                        "colorId": "home",
                    }
                ],
                "shipping": {"firstName": "Ama", "lastName": "Mensah", "city": "Accra"},
                "payment": {"method": "paystack", "reference": "PAY-1718000000000-7GQ2K9XZA"},
                "subtotal": 89.99,
                "shippingCost": 15.0,
                "tax": 0.0,
                "total": 104.99,
                "paystackReference": "PAY-1718000000000-7GQ2K9XZA",
            }
        },
    )

    @property
    def contact_email(self) -> Optional[str]:
        return self.guestEmail or self.shipping.email

    @property
    def contact_phone(self) -> Optional[str]:
        return self.guestPhone or self.shipping.phone

    @property
    def contact_name(self) -> str:
        return self.customerName or self.shipping.full_name or "Customer"
