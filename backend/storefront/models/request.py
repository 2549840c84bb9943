"""API request and response models."""

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from storefront.models.cart import CartItem
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import CustomLeague, LeagueSummary, Team
from storefront.models.order import (
    DeliveryPersonInfo,
    OrderInDB,
    OrderItem,
    OrderStatus,
    PaymentInfo,
    ShippingInfo,
    StatusHistoryEntry,
)
from storefront.models.product import Product


class CreateOrderRequest(BaseModel):
    """Order creation request sent after returning from the payment page."""

    orderId: str = Field(..., min_length=1)
    userId: Optional[str] = None
    guestEmail: Optional[str] = None
    guestPhone: Optional[str] = None
    customerName: Optional[str] = None
    items: list[OrderItem]
    shipping: ShippingInfo
    payment: Optional[PaymentInfo] = None
    subtotal: Optional[float] = Field(None, ge=0)
    shippingCost: Optional[float] = Field(None, ge=0)
    tax: Optional[float] = Field(None, ge=0)
    total: float = Field(..., ge=0)
    paystackReference: Optional[str] = None
    status: OrderStatus = OrderStatus.SUBMITTED

    model_config = {
        "json_schema_extra": {
            "example": {
                "orderId": "ORD-1718000000000-7GQ2K9XZA",
                "guestEmail": "ama@example.com",
                "guestPhone": "0241234567",
                "customerName": "Ama Mensah",
                "items": [
                    {"id": "man-utd-home-jersey", "name": "Manchester United Home Jersey",
                     "price": 89.99, "quantity": 1, "colorId": "home"}
                ],
                "shipping": {"firstName": "Ama", "lastName": "Mensah", "location": "Accra"},
                "total": 104.99,
                "paystackReference": "PAY-1718000000000-7GQ2K9XZA",
            }
        }
    }


class CreateOrderResponse(BaseModel):
    """Order creation response."""

    success: bool = True
    orderId: str
    alreadyExists: bool = False
    trackingLink: Optional[str] = None
    message: str = ""


class UpdateStatusRequest(BaseModel):
    """Order status change request."""

    orderId: str = Field(..., min_length=1)
    status: OrderStatus
    customerEmail: Optional[str] = None
    customerPhone: Optional[str] = None
    customerName: Optional[str] = None
    note: Optional[str] = None
    deliveryPersonInfo: Optional[DeliveryPersonInfo] = None


class UpdateStatusResponse(BaseModel):
    """Order status change response."""

    success: bool = True
    orderId: str
    status: OrderStatus
    statusHistory: list[StatusHistoryEntry]
    notifications: dict[str, bool] = Field(default_factory=dict)
    message: str = ""

    model_config = ConfigDict(use_enum_values=True)


class OrderResponse(BaseModel):
    """Single order response."""

    success: bool = True
    order: OrderInDB
    progress: Optional[dict[str, Any]] = None


class OrderListResponse(BaseModel):
    """Order list response."""

    success: bool = True
    orders: list[OrderInDB]
    count: int


class CheckReferenceResponse(BaseModel):
    """Payment reference existence check."""

    exists: bool
    orderId: Optional[str] = None


class OrderIdRequest(BaseModel):
    """Request naming a single order."""

    orderId: str = Field(..., min_length=1)


class ConfirmDeliveryRequest(OrderIdRequest):
    """Customer confirmation that an order arrived."""

    userId: Optional[str] = None


class VerifyGuestRequest(OrderIdRequest):
    """Guest tracking lookup."""

    email: str = Field(..., min_length=1)


class VerifyGuestResponse(BaseModel):
    """Guest tracking lookup result."""

    success: bool = True
    message: str = "Order verified"
    orderId: str
    email: str


class ReconcileStockResponse(BaseModel):
    """Outcome of a stock reconciliation sweep."""

    success: bool = True
    ordersChecked: int
    adjustmentsApplied: int
    adjustmentsPending: int


class PaymentInitializeRequest(BaseModel):
    """Payment initialization request."""

    email: EmailStr
    amount: float = Field(..., gt=0, description="Amount in cedis")
    metadata: dict[str, Any] = Field(default_factory=dict)


class PaymentInitializeData(BaseModel):
    """Hosted checkout details returned by the provider."""

    authorization_url: str
    access_code: Optional[str] = None
    reference: str


class PaymentInitializeResponse(BaseModel):
    """Payment initialization response."""

    success: bool = True
    data: PaymentInitializeData


class PaymentVerifyRequest(BaseModel):
    """Payment verification request."""

    reference: str = Field(..., min_length=1)


class PaymentVerifyData(BaseModel):
    """Verified transaction details."""

    reference: str
    amount: float = Field(..., description="Amount in cedis")
    status: str
    paidAt: Optional[str] = None
    channel: Optional[str] = None
    customer: Optional[dict[str, Any]] = None
    metadata: Optional[Any] = None


class PaymentVerifyResponse(BaseModel):
    """Payment verification response."""

    success: bool = True
    message: str = ""
    data: PaymentVerifyData


class CartResponse(BaseModel):
    """Cart contents."""

    success: bool = True
    items: list[CartItem]
    count: int


class CartMergeRequest(BaseModel):
    """Guest cart read from local storage."""

    items: list[CartItem] = Field(default_factory=list)


class CartItemUpdate(BaseModel):
    """Quantity change for a cart line."""

    productId: str
    colorId: Optional[str] = None
    size: Optional[str] = None
    quantity: int


class CartItemRemove(BaseModel):
    """Cart line to remove."""

    productId: str
    colorId: Optional[str] = None
    size: Optional[str] = None


class LeaguesResponse(BaseModel):
    """League listing."""

    leagues: list[LeagueSummary]


class TeamsResponse(BaseModel):
    """Team listing."""

    teams: list[Team]


class TeamDetailResponse(BaseModel):
    """Team page data."""

    team: Team
    products: list[Product]


class ProductResponse(BaseModel):
    """Single product."""

    success: bool = True
    product: Product


class DeliveryPriceResponse(BaseModel):
    """Delivery fee lookup result."""

    success: bool = True
    price: float
    location: str
    found: bool


class CustomLeagueResponse(BaseModel):
    """Single custom league."""

    success: bool = True
    league: CustomLeague


class CustomLeaguesResponse(BaseModel):
    """Custom league listing."""

    success: bool = True
    leagues: list[CustomLeague]


class CustomTeamResponse(BaseModel):
    """Single custom team."""

    success: bool = True
    team: Team


class DeliveryPriceListResponse(BaseModel):
    """All delivery prices."""

    success: bool = True
    prices: list[DeliveryPrice]


class TeamLinkResponse(BaseModel):
    """Outcome of persisting team-to-league links."""

    success: bool = True
    linked: int
    unmatched: list[str]


class MessageResponse(BaseModel):
    """Acknowledgement without a payload."""

    success: bool = True
    message: str


class ErrorResponse(BaseModel):
    """Error response model."""

    success: bool = False
    error: str
    details: Optional[Any] = None
    missingFields: Optional[list[str]] = None


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
    version: str
    services: dict[str, str]


class DashboardStats(BaseModel):
    """Headline figures for the admin dashboard."""

    revenue: str
    revenueChange: str
    orders: str
    ordersChange: str
    products: str
    productsChange: str
    customers: str
    customersChange: str


class DashboardOrder(BaseModel):
    """Open order row on the admin dashboard."""

    id: str
    customer: str
    amount: str
    status: str
    date: str


class DashboardProduct(BaseModel):
    """Best-selling product row on the admin dashboard."""

    name: str
    sales: int
    revenue: str


class DashboardResponse(BaseModel):
    """Admin dashboard response."""

    success: bool = True
    stats: DashboardStats
    recentOrders: list[DashboardOrder]
    topProducts: list[DashboardProduct]
    ordersByStatus: dict[str, int]
