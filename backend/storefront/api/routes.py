"""Storefront API routes."""

import logging
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, status

from storefront.config import get_settings
from storefront.database.mongodb import mongodb
from storefront.models.cart import CartItem
from storefront.models.request import (
    CartItemRemove,
    CartItemUpdate,
    CartMergeRequest,
    CartResponse,
    CheckReferenceResponse,
    ConfirmDeliveryRequest,
    CreateOrderRequest,
    CreateOrderResponse,
    DeliveryPriceResponse,
    HealthResponse,
    LeaguesResponse,
    MessageResponse,
    OrderIdRequest,
    OrderListResponse,
    OrderResponse,
    PaymentInitializeRequest,
    PaymentInitializeResponse,
    PaymentVerifyRequest,
    PaymentVerifyResponse,
    ProductResponse,
    TeamDetailResponse,
    TeamsResponse,
    UpdateStatusRequest,
    UpdateStatusResponse,
    VerifyGuestRequest,
    VerifyGuestResponse,
)
from storefront.services.cart_service import cart_service
from storefront.services.catalog_service import catalog_service
from storefront.services.order_service import order_service, tracking_progress
from storefront.services.payment_service import payment_service

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(prefix=settings.api_prefix)


@router.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Health check endpoint."""
    mongodb_status = "connected" if mongodb.is_connected else "disconnected"

    return HealthResponse(
        status="healthy" if mongodb_status == "connected" else "degraded",
        version=settings.app_version,
        services={
            "mongodb": mongodb_status,
            "paystack": "configured" if payment_service.is_available() else "not_configured",
            "smtp": "configured" if settings.smtp_host else "not_configured",
            "sms": "configured" if settings.arkesel_api_key else "not_configured",
        },
    )


# ── Catalog ──────────────────────────────────────────────────────────────────


@router.get("/leagues", response_model=LeaguesResponse)
async def list_leagues() -> LeaguesResponse:
    """List custom leagues and the static leagues none of them cover."""
    return LeaguesResponse(leagues=await catalog_service.list_leagues())


@router.get("/teams", response_model=TeamsResponse)
async def list_teams(sport: Optional[str] = None) -> TeamsResponse:
    """List teams, optionally filtered by sport."""
    return TeamsResponse(teams=await catalog_service.list_teams(sport))


@router.get("/teams/{team_id}", response_model=TeamDetailResponse)
async def get_team(team_id: str) -> TeamDetailResponse:
    """Get a team with its products."""
    team, products = await catalog_service.get_team(team_id)
    return TeamDetailResponse(team=team, products=products)


@router.get("/products/{product_id}", response_model=ProductResponse)
async def get_product(product_id: str) -> ProductResponse:
    """Get a single product."""
    return ProductResponse(product=await catalog_service.get_product(product_id))


@router.get("/delivery-prices", response_model=DeliveryPriceResponse)
async def get_delivery_price(location: Optional[str] = None) -> DeliveryPriceResponse:
    """Look up the delivery fee for a location. Unknown locations cost 0."""
    if not location or not location.strip():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Location parameter is required",
        )

    price = await catalog_service.get_delivery_price(location)
    return DeliveryPriceResponse(
        price=price.price if price else 0.0,
        location=location.strip(),
        found=price is not None,
    )


# ── Payments ─────────────────────────────────────────────────────────────────


@router.post("/paystack/initialize", response_model=PaymentInitializeResponse)
async def initialize_payment(request: PaymentInitializeRequest) -> PaymentInitializeResponse:
    """Start a Paystack hosted checkout.

    Body:
        email: Customer email
        amount: Amount in cedis
        metadata: Forwarded to Paystack (cart, shipping, order id)
    """
    data = await payment_service.initialize(request.email, request.amount, request.metadata)
    return PaymentInitializeResponse(data=data)


@router.post("/paystack/verify", response_model=PaymentVerifyResponse)
async def verify_payment(request: PaymentVerifyRequest) -> PaymentVerifyResponse:
    """Verify a Paystack transaction by reference."""
    data = await payment_service.verify(request.reference)
    return PaymentVerifyResponse(data=data)


# ── Orders ───────────────────────────────────────────────────────────────────


@router.post("/orders/create", response_model=CreateOrderResponse)
async def create_order(request: CreateOrderRequest) -> CreateOrderResponse:
    """Create an order after a successful payment.

    Repeating the call with the same ``paystackReference`` returns the
    existing order with ``alreadyExists`` set.
    """
    result = await order_service.create_order(request)
    return CreateOrderResponse(
        orderId=result.orderId,
        alreadyExists=result.alreadyExists,
        trackingLink=result.trackingLink,
        message="Order already exists" if result.alreadyExists else "Order created successfully",
    )


@router.post("/orders/update-status", response_model=UpdateStatusResponse)
async def update_order_status(request: UpdateStatusRequest) -> UpdateStatusResponse:
    """Change an order's status and notify the customer."""
    result = await order_service.update_status(request)
    return UpdateStatusResponse(
        orderId=result.order.orderId,
        status=result.order.status,
        statusHistory=result.order.statusHistory,
        notifications=result.notifications,
        message="Order status updated successfully",
    )


@router.post("/orders/verify-payment", response_model=PaymentVerifyResponse)
async def verify_order_payment(request: OrderIdRequest) -> PaymentVerifyResponse:
    """Re-verify an order's payment with Paystack (back-office).

    On success the order moves to ``submitted`` and the confirmation is resent.
    """
    result = await order_service.verify_order_payment(request.orderId)
    return PaymentVerifyResponse(
        data=result.payment, message="Payment verified and order status updated"
    )


@router.post("/orders/confirm-delivery", response_model=MessageResponse)
async def confirm_delivery(request: ConfirmDeliveryRequest) -> MessageResponse:
    """Customer confirms an order arrived."""
    await order_service.confirm_delivery(request.orderId, request.userId)
    return MessageResponse(message="Order marked as delivered successfully")


@router.post("/orders/verify-guest", response_model=VerifyGuestResponse)
async def verify_guest_order(request: VerifyGuestRequest) -> VerifyGuestResponse:
    """Check a guest's email against an order before showing its tracking page."""
    order = await order_service.verify_guest_order(request.orderId, request.email)
    return VerifyGuestResponse(orderId=order.orderId, email=request.email)


@router.get("/orders/check-reference", response_model=CheckReferenceResponse)
async def check_reference(reference: str = Query(..., min_length=1)) -> CheckReferenceResponse:
    """Check whether an order exists for a payment reference."""
    order = await order_service.find_by_reference(reference)
    return CheckReferenceResponse(exists=order is not None, orderId=order.orderId if order else None)


@router.get("/orders/user/{user_id}", response_model=OrderListResponse)
async def list_user_orders(user_id: str) -> OrderListResponse:
    """List a user's orders, newest first."""
    orders = await order_service.list_user_orders(user_id)
    return OrderListResponse(orders=orders, count=len(orders))


@router.get("/orders/{order_id}", response_model=OrderResponse)
async def get_order(order_id: str) -> OrderResponse:
    """Get an order with its tracking progress."""
    order = await order_service.get_order(order_id)
    return OrderResponse(order=order, progress=tracking_progress(order.status))


# ── Cart ─────────────────────────────────────────────────────────────────────


def _cart_response(items: list[CartItem]) -> CartResponse:
    return CartResponse(items=items, count=sum(item.quantity for item in items))


@router.get("/cart/{user_id}", response_model=CartResponse)
async def get_cart(user_id: str) -> CartResponse:
    """Get a signed-in user's cart."""
    return _cart_response(await cart_service.get_cart(user_id))


@router.post("/cart/{user_id}/items", response_model=CartResponse, status_code=status.HTTP_201_CREATED)
async def add_cart_item(user_id: str, item: CartItem) -> CartResponse:
    """Add a line, summing quantities with an identical line."""
    await cart_service.add_item(user_id, item)
    return _cart_response(await cart_service.get_cart(user_id))


@router.patch("/cart/{user_id}/items", response_model=CartResponse)
async def update_cart_item(user_id: str, update: CartItemUpdate) -> CartResponse:
    """Set a line's quantity."""
    updated = await cart_service.update_quantity(
        user_id, update.productId, update.colorId, update.size, update.quantity
    )
    if not updated:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cart item not found: {update.productId}",
        )
    return _cart_response(await cart_service.get_cart(user_id))


@router.delete("/cart/{user_id}/items", response_model=CartResponse)
async def remove_cart_item(user_id: str, item: CartItemRemove) -> CartResponse:
    """Remove a line."""
    removed = await cart_service.remove_item(user_id, item.productId, item.colorId, item.size)
    if not removed:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=f"Cart item not found: {item.productId}",
        )
    return _cart_response(await cart_service.get_cart(user_id))


@router.delete("/cart/{user_id}", response_model=MessageResponse)
async def clear_cart(user_id: str) -> MessageResponse:
    """Empty a user's cart."""
    removed = await cart_service.clear_cart(user_id)
    return MessageResponse(message=f"Removed {removed} cart items")


@router.put("/cart/{user_id}", response_model=CartResponse)
async def replace_cart(user_id: str, request: CartMergeRequest) -> CartResponse:
    """Overwrite a user's cart with the client's lines."""
    return _cart_response(await cart_service.replace_cart(user_id, request.items))


@router.post("/cart/{user_id}/merge", response_model=CartResponse)
async def merge_cart(user_id: str, request: CartMergeRequest) -> CartResponse:
    """Merge the guest cart into the user's cart on sign-in.

    The response holds the merged lines for the client to store locally.
    """
    return _cart_response(await cart_service.merge_guest_cart(user_id, request.items))
