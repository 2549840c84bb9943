"""Admin dashboard statistics."""

import logging
from collections import Counter
from datetime import UTC, datetime
from typing import Optional

from storefront.database.mongodb import order_repository, product_repository
from storefront.database.repositories import OrderRepository, ProductRepository
from storefront.models.order import OrderInDB, OrderStatus
from storefront.models.request import (
    DashboardOrder,
    DashboardProduct,
    DashboardResponse,
    DashboardStats,
)
from storefront.utils.helpers import format_amount

logger = logging.getLogger(__name__)

# Upper bound of orders scanned for statistics
DASHBOARD_ORDER_LIMIT = 1000
TOP_PRODUCTS = 5


def _order_date(order: OrderInDB) -> datetime:
    # Motor hands back naive UTC datetimes
    if order.orderDate.tzinfo is None:
        return order.orderDate.replace(tzinfo=UTC)
    return order.orderDate


def _customer_key(order: OrderInDB) -> Optional[str]:
    return order.userId or order.contact_email


def _change_text(current: float, previous: float) -> str:
    if previous <= 0:
        return "No previous data"
    change = (current - previous) / previous * 100
    if round(change, 1) == 0:
        return "No change from last month"
    return f"{'+' if change > 0 else ''}{change:.1f}% from last month"


def _month_starts(now: datetime) -> tuple[datetime, datetime]:
    this_month = now.replace(day=1, hour=0, minute=0, second=0, microsecond=0)
    if this_month.month == 1:
        last_month = this_month.replace(year=this_month.year - 1, month=12)
    else:
        last_month = this_month.replace(month=this_month.month - 1)
    return last_month, this_month


class DashboardService:
    """Computes admin dashboard figures from stored orders and products."""

    def __init__(
        self,
        orders: Optional[OrderRepository] = None,
        products: Optional[ProductRepository] = None,
    ) -> None:
        self.orders = orders or order_repository
        self.products = products or product_repository

    async def get_dashboard(self, now: Optional[datetime] = None) -> DashboardResponse:
        """Build dashboard statistics. Cancelled orders don't count towards revenue."""
        now = now or datetime.now(UTC)
        orders = await self.orders.list_recent(DASHBOARD_ORDER_LIMIT)
        products = await self.products.list_all()

        billable = [o for o in orders if o.status != OrderStatus.CANCELLED]
        last_month, this_month = _month_starts(now)
        this_month_orders = [o for o in billable if _order_date(o) >= this_month]
        last_month_orders = [o for o in billable if last_month <= _order_date(o) < this_month]

        first_seen: dict[str, datetime] = {}
        for order in orders:
            key = _customer_key(order)
            if key and (key not in first_seen or _order_date(order) < first_seen[key]):
                first_seen[key] = _order_date(order)
        new_customers = sum(1 for seen in first_seen.values() if seen >= this_month)

        stats = DashboardStats(
            revenue=format_amount(sum(o.total for o in billable)),
            revenueChange=_change_text(
                sum(o.total for o in this_month_orders), sum(o.total for o in last_month_orders)
            ),
            orders=str(len(orders)),
            ordersChange=_change_text(len(this_month_orders), len(last_month_orders)),
            products=str(len(products)),
            productsChange=f"{sum(1 for p in products if p.available and p.stock > 0)} in stock",
            customers=str(len(first_seen)),
            customersChange=f"+{new_customers} new this month",
        )

        recent = [
            DashboardOrder(
                id=order.orderId,
                customer=order.customerName or order.shipping.full_name or order.guestEmail or "Guest",
                amount=format_amount(order.total),
                status=order.status,
                date=_order_date(order).date().isoformat(),
            )
            for order in orders
            if order.status != OrderStatus.DELIVERED
        ]

        sales: dict[str, dict] = {}
        for order in billable:
            for item in order.items:
                entry = sales.setdefault(item.id, {"name": item.name, "sales": 0, "revenue": 0.0})
                entry["sales"] += item.quantity
                entry["revenue"] += item.price * item.quantity
        top = sorted(sales.values(), key=lambda entry: entry["sales"], reverse=True)[:TOP_PRODUCTS]

        logger.info("Dashboard computed from %d orders and %d products", len(orders), len(products))
        return DashboardResponse(
            stats=stats,
            recentOrders=recent,
            topProducts=[
                DashboardProduct(
                    name=entry["name"], sales=entry["sales"], revenue=format_amount(entry["revenue"])
                )
                for entry in top
            ],
            ordersByStatus=dict(Counter(order.status for order in orders)),
        )


# Global dashboard service instance
dashboard_service = DashboardService()
