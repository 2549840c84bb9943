"""Order creation and lifecycle."""

import logging
from datetime import UTC, datetime
from typing import Optional

from pydantic import BaseModel

from storefront.config import get_settings
from storefront.data.teams import find_generated_product
from storefront.database.mongodb import (
    delivery_price_repository,
    order_repository,
    product_repository,
)
from storefront.database.repositories import (
    DeliveryPriceRepository,
    OrderRepository,
    ProductRepository,
)
from storefront.exceptions import (
    InvalidStatusTransitionError,
    OrderAccessDeniedError,
    OrderNotFoundError,
    OrderTotalMismatchError,
    OrderValidationError,
    UnknownProductError,
)
from storefront.models.order import (
    DeliveryPersonInfo,
    OrderInDB,
    OrderItem,
    OrderStatus,
    PaymentInfo,
    StatusHistoryEntry,
    StockAdjustment,
)
from storefront.models.request import CreateOrderRequest, PaymentVerifyData, UpdateStatusRequest
from storefront.services.notification_service import (
    NotificationService,
    notification_service,
    tracking_link,
)
from storefront.services.payment_service import PaymentService, payment_service
from storefront.services.pricing import OrderTotals, calculate_totals, totals_match
from storefront.utils.helpers import get_timestamp

logger = logging.getLogger(__name__)
settings = get_settings()

# Enforced only when settings.enforce_status_transitions is on.
ALLOWED_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.SUBMITTED: frozenset({
        OrderStatus.AWAITING_PAYMENT,
        OrderStatus.CONFIRMED,
        OrderStatus.PROCESSING,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.AWAITING_PAYMENT: frozenset({
        OrderStatus.SUBMITTED,
        OrderStatus.CONFIRMED,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.CONFIRMED: frozenset({
        OrderStatus.PROCESSING,
        OrderStatus.IN_TRANSIT,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.PROCESSING: frozenset({
        OrderStatus.IN_TRANSIT,
        OrderStatus.OUT_FOR_DELIVERY,
        OrderStatus.CANCELLED,
    }),
    OrderStatus.IN_TRANSIT: frozenset({OrderStatus.OUT_FOR_DELIVERY, OrderStatus.DELIVERED}),
    OrderStatus.OUT_FOR_DELIVERY: frozenset({OrderStatus.IN_TRANSIT, OrderStatus.DELIVERED}),
    OrderStatus.DELIVERED: frozenset(),
    OrderStatus.CANCELLED: frozenset(),
}

# Customer-facing tracking steps; in_transit and out_for_delivery share a step.
TRACKING_STEPS: list[tuple[str, frozenset[OrderStatus]]] = [
    ("placed", frozenset({OrderStatus.SUBMITTED, OrderStatus.AWAITING_PAYMENT})),
    ("confirmed", frozenset({OrderStatus.CONFIRMED})),
    ("processing", frozenset({OrderStatus.PROCESSING})),
    ("on_the_way", frozenset({OrderStatus.IN_TRANSIT, OrderStatus.OUT_FOR_DELIVERY})),
    ("delivered", frozenset({OrderStatus.DELIVERED})),
]


def is_transition_allowed(current: str, requested: str) -> bool:
    """Whether ``requested`` may follow ``current``. Repeating a status is always allowed."""
    if current == requested:
        return True
    return OrderStatus(requested) in ALLOWED_TRANSITIONS.get(OrderStatus(current), frozenset())


def tracking_progress(status: str) -> dict[str, object]:
    """Map a status onto the customer-facing tracking steps."""
    if status == OrderStatus.CANCELLED:
        return {"stage": "cancelled", "step": 0, "totalSteps": len(TRACKING_STEPS)}
    for index, (stage, statuses) in enumerate(TRACKING_STEPS, start=1):
        if OrderStatus(status) in statuses:
            return {"stage": stage, "step": index, "totalSteps": len(TRACKING_STEPS)}
    return {"stage": "unknown", "step": 0, "totalSteps": len(TRACKING_STEPS)}


class OrderCreationResult(BaseModel):
    """Outcome of an order creation request."""

    orderId: str
    alreadyExists: bool = False
    trackingLink: str
    order: Optional[OrderInDB] = None
    notifications: dict[str, bool] = {}


class StatusUpdateResult(BaseModel):
    """Outcome of a status change."""

    order: OrderInDB
    notifications: dict[str, bool] = {}


class PaymentVerificationResult(BaseModel):
    """Outcome of re-checking an order's payment."""

    order: OrderInDB
    payment: PaymentVerifyData
    notifications: dict[str, bool] = {}


class StockReconciliationResult(BaseModel):
    """Outcome of a stock reconciliation sweep."""

    ordersChecked: int = 0
    adjustmentsApplied: int = 0
    adjustmentsPending: int = 0


class OrderService:
    """Creates orders, moves them through their lifecycle and keeps stock in step."""

    def __init__(
        self,
        orders: Optional[OrderRepository] = None,
        products: Optional[ProductRepository] = None,
        delivery_prices: Optional[DeliveryPriceRepository] = None,
        notifications: Optional[NotificationService] = None,
        payments: Optional[PaymentService] = None,
    ) -> None:
        self.orders = orders or order_repository
        self.products = products or product_repository
        self.delivery_prices = delivery_prices or delivery_price_repository
        self.notifications = notifications or notification_service
        self.payments = payments or payment_service

    # ── Reads ────────────────────────────────────────────────────────────────

    async def get_order(self, order_id: str) -> OrderInDB:
        """Get order by id."""
        order = await self.orders.get(order_id)
        if order is None:
            raise OrderNotFoundError(order_id)
        return order

    async def find_by_reference(self, reference: str) -> Optional[OrderInDB]:
        """Get the order created for a payment reference, if any."""
        return await self.orders.find_by_reference(reference)

    async def list_user_orders(self, user_id: str) -> list[OrderInDB]:
        """List a user's orders, newest first."""
        return await self.orders.list_by_user(user_id)

    async def list_recent_orders(self, limit: Optional[int] = None) -> list[OrderInDB]:
        """List the newest orders for the admin back-office."""
        return await self.orders.list_recent(limit or settings.admin_orders_limit)

    async def delete_order(self, order_id: str) -> None:
        """Delete an order (admin only)."""
        if not await self.orders.delete(order_id):
            raise OrderNotFoundError(order_id)
        logger.info("Order %s deleted", order_id)

    # ── Creation ─────────────────────────────────────────────────────────────

    async def _price_lines(self, items: list[OrderItem]) -> tuple[list[OrderItem], set[str]]:
        """Reprice lines from the catalog.

        Returns the repriced lines and the ids of products that have stored
        inventory.
        """
        priced: list[OrderItem] = []
        stocked: set[str] = set()
        for item in items:
            product = await self.products.get(item.id)
            if product is not None:
                stocked.add(product.id)
            else:
                product = find_generated_product(item.id)
            if product is None:
                raise UnknownProductError(item.id)
            if product.price != item.price:
                logger.warning(
                    "Price of %s differs from catalog: submitted %.2f, catalog %.2f",
                    item.id,
                    item.price,
                    product.price,
                )
            priced.append(item.model_copy(update={"price": product.price}))
        return priced, stocked

    async def _delivery_fee(self, location: Optional[str]) -> float:
        if not location or not location.strip():
            return 0.0
        price = await self.delivery_prices.get(location.strip())
        return price.price if price else 0.0

    async def quote(self, items: list[OrderItem], location: Optional[str]) -> OrderTotals:
        """Compute server-side totals for a prospective order."""
        priced, _ = await self._price_lines(items)
        return calculate_totals(priced, await self._delivery_fee(location))

    async def create_order(self, request: CreateOrderRequest) -> OrderCreationResult:
        """Create an order after payment.

        A repeated call with the same ``paystackReference`` returns the
        existing order id with ``alreadyExists`` set.
        """
        missing = [field for field in ("items", "total") if not getattr(request, field)]
        if missing:
            raise OrderValidationError("Missing required order information", missing_fields=missing)

        if request.paystackReference:
            existing = await self.orders.find_by_reference(request.paystackReference)
            if existing is not None:
                logger.info(
                    "Order %s already exists for reference %s",
                    existing.orderId,
                    request.paystackReference,
                )
                return OrderCreationResult(
                    orderId=existing.orderId,
                    alreadyExists=True,
                    trackingLink=tracking_link(existing.orderId),
                    order=existing,
                )

        priced, stocked = await self._price_lines(request.items)
        totals = calculate_totals(priced, await self._delivery_fee(request.shipping.delivery_location))
        if not totals_match(request.total, totals.total):
            logger.warning(
                "Rejecting order %s: submitted total %.2f, expected %.2f",
                request.orderId,
                request.total,
                totals.total,
            )
            raise OrderTotalMismatchError(request.total, totals.total)

        status = OrderStatus(request.status)
        order = OrderInDB(
            orderId=request.orderId,
            userId=request.userId,
            guestEmail=request.guestEmail,
            guestPhone=request.guestPhone,
            customerName=request.customerName,
            status=status,
            statusHistory=[
                StatusHistoryEntry(
                    status=status, timestamp=get_timestamp(), note="Order submitted successfully"
                )
            ],
            items=priced,
            shipping=request.shipping,
            payment=request.payment or PaymentInfo(reference=request.paystackReference),
            subtotal=totals.subtotal,
            shippingCost=totals.shipping_cost,
            tax=totals.tax,
            total=totals.total,
            paystackReference=request.paystackReference,
            stockAdjustments=[
                StockAdjustment(productId=line.id, quantity=line.quantity)
                for line in priced
                if line.id in stocked
            ],
        )

        await self.orders.create(order)
        logger.info("Order %s created (total %.2f)", order.orderId, order.total)

        order = await self._apply_stock_adjustments(order)
        notifications = await self._send_confirmation(order)

        return OrderCreationResult(
            orderId=order.orderId,
            trackingLink=tracking_link(order.orderId),
            order=order,
            notifications=notifications,
        )

    async def _send_confirmation(self, order: OrderInDB) -> dict[str, bool]:
        return await self.notifications.send_order_confirmation(
            order_id=order.orderId,
            customer_name=order.contact_name,
            total=order.total,
            items=order.items,
            email=order.contact_email,
            phone=order.contact_phone,
        )

    # ── Stock ────────────────────────────────────────────────────────────────

    async def _apply_stock_adjustments(self, order: OrderInDB) -> OrderInDB:
        """Apply pending stock decrements. Failures stay pending for the next sweep."""
        pending = [a for a in order.stockAdjustments if not a.applied]
        if not pending:
            return order

        adjustments = []
        for adjustment in order.stockAdjustments:
            if not adjustment.applied:
                try:
                    new_stock = await self.products.decrement_stock(
                        adjustment.productId, adjustment.quantity
                    )
                    if new_stock is None:
                        logger.warning(
                            "Product %s no longer exists; dropping stock adjustment for order %s",
                            adjustment.productId,
                            order.orderId,
                        )
                    adjustment = adjustment.model_copy(update={"applied": True})
                except Exception as e:
                    logger.error(
                        "Failed to update stock for %s (order %s): %s",
                        adjustment.productId,
                        order.orderId,
                        e,
                    )
            adjustments.append(adjustment)

        try:
            await self.orders.save_stock_adjustments(order.orderId, adjustments)
        except Exception as e:
            logger.error("Failed to record stock adjustments for order %s: %s", order.orderId, e)
        return order.model_copy(update={"stockAdjustments": adjustments})

    async def reconcile_stock(self) -> StockReconciliationResult:
        """Re-apply stock adjustments left pending by earlier failures."""
        result = StockReconciliationResult()
        for order in await self.orders.list_pending_stock():
            before = sum(1 for a in order.stockAdjustments if not a.applied)
            updated = await self._apply_stock_adjustments(order)
            after = sum(1 for a in updated.stockAdjustments if not a.applied)
            result.ordersChecked += 1
            result.adjustmentsApplied += before - after
            result.adjustmentsPending += after

        logger.info(
            "Stock reconciliation: %d orders, %d applied, %d pending",
            result.ordersChecked,
            result.adjustmentsApplied,
            result.adjustmentsPending,
        )
        return result

    # ── Status ───────────────────────────────────────────────────────────────

    async def _append_status(
        self,
        order: OrderInDB,
        status: OrderStatus,
        note: Optional[str] = None,
        extra: Optional[dict] = None,
    ) -> OrderInDB:
        if settings.enforce_status_transitions and not is_transition_allowed(order.status, status):
            raise InvalidStatusTransitionError(order.status, status.value)

        entry = StatusHistoryEntry(
            status=status,
            timestamp=get_timestamp(),
            note=note or f"Order status updated to {status.value}",
        )
        updated = await self.orders.append_status(order.orderId, entry, extra)
        if updated is None:
            raise OrderNotFoundError(order.orderId)
        logger.info("Order %s status updated to %s", order.orderId, status.value)
        return updated

    async def update_status(self, request: UpdateStatusRequest) -> StatusUpdateResult:
        """Append a status change to an order's history and notify the customer."""
        order = await self.get_order(request.orderId)
        status = OrderStatus(request.status)

        extra = None
        if request.deliveryPersonInfo is not None:
            person: DeliveryPersonInfo = request.deliveryPersonInfo
            if not person.assignedAt:
                person = person.model_copy(update={"assignedAt": datetime.now(UTC).isoformat()})
            extra = {"deliveryPersonInfo": person.model_dump()}

        updated = await self._append_status(order, status, request.note, extra)

        notifications = await self.notifications.send_status_update(
            order_id=updated.orderId,
            status=status.value,
            customer_name=request.customerName or updated.contact_name,
            email=request.customerEmail or updated.contact_email,
            phone=request.customerPhone or updated.contact_phone,
        )
        return StatusUpdateResult(order=updated, notifications=notifications)

    async def verify_order_payment(self, order_id: str) -> PaymentVerificationResult:
        """Re-check an order's payment with Paystack and move it to ``submitted``.

        Meant for orders left in ``awaiting_payment``. The confirmation email
        and SMS go out again once Paystack reports the charge as successful.

        Raises:
            OrderNotFoundError: unknown order
            OrderValidationError: the order carries no payment reference
            PaymentError: Paystack refused, timed out or reports no success
        """
        order = await self.get_order(order_id)
        reference = order.paystackReference or order.payment.reference
        if not reference:
            raise OrderValidationError("Payment reference not found for this order")

        payment = await self.payments.verify(reference)
        updated = await self._append_status(
            order, OrderStatus.SUBMITTED, "Payment manually verified by admin"
        )
        notifications = await self._send_confirmation(updated)
        return PaymentVerificationResult(order=updated, payment=payment, notifications=notifications)

    async def confirm_delivery(self, order_id: str, user_id: Optional[str] = None) -> OrderInDB:
        """Mark an order delivered on the customer's say-so.

        When ``user_id`` is given it must own the order.
        """
        order = await self.get_order(order_id)
        if user_id and order.userId != user_id:
            raise OrderAccessDeniedError("Unauthorized to confirm delivery for this order")
        return await self._append_status(
            order, OrderStatus.DELIVERED, "Delivery confirmed by customer"
        )

    async def verify_guest_order(self, order_id: str, email: str) -> OrderInDB:
        """Let a guest open an order by proving they know its email (case-insensitive)."""
        order = await self.get_order(order_id)
        order_email = (order.contact_email or "").strip().lower()
        if not order_email or order_email != email.strip().lower():
            raise OrderAccessDeniedError("Email does not match this order")
        return order


# Global order service instance
order_service = OrderService()
