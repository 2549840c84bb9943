"""Shared fixtures: in-memory repositories and recording notifiers."""

from typing import Any, Optional

import pytest

from storefront.database.repositories import (
    CartRepository,
    CatalogRepository,
    DeliveryPriceRepository,
    OrderRepository,
    ProductRepository,
)
from storefront.exceptions import DuplicateOrderError
from storefront.models.cart import CartItem
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import CustomLeague, Team, TeamLeagueLink
from storefront.models.order import OrderInDB, StatusHistoryEntry, StockAdjustment
from storefront.models.product import Product
from storefront.services.cart_service import CartService
from storefront.services.catalog_service import CatalogService
from storefront.services.order_service import OrderService


class InMemoryOrderRepository(OrderRepository):
    def __init__(self) -> None:
        self.orders: dict[str, OrderInDB] = {}

    async def create(self, order: OrderInDB) -> OrderInDB:
        if order.orderId in self.orders:
            raise DuplicateOrderError(order.orderId)
        self.orders[order.orderId] = order.model_copy(deep=True)
        return order

    async def get(self, order_id: str) -> Optional[OrderInDB]:
        order = self.orders.get(order_id)
        return order.model_copy(deep=True) if order else None

    async def find_by_reference(self, reference: str) -> Optional[OrderInDB]:
        return next((o for o in self.orders.values() if o.paystackReference == reference), None)

    async def list_by_user(self, user_id: str) -> list[OrderInDB]:
        orders = [o for o in self.orders.values() if o.userId == user_id]
        return sorted(orders, key=lambda o: o.orderDate, reverse=True)

    async def list_recent(self, limit: int = 50) -> list[OrderInDB]:
        return sorted(self.orders.values(), key=lambda o: o.orderDate, reverse=True)[:limit]

    async def append_status(
        self,
        order_id: str,
        entry: StatusHistoryEntry,
        extra: Optional[dict[str, Any]] = None,
    ) -> Optional[OrderInDB]:
        order = self.orders.get(order_id)
        if order is None:
            return None
        data = order.model_dump()
        data.update(extra or {})
        data["status"] = entry.status
        data["statusHistory"].append(entry.model_dump())
        self.orders[order_id] = OrderInDB.model_validate(data)
        return await self.get(order_id)

    async def save_stock_adjustments(
        self, order_id: str, adjustments: list[StockAdjustment]
    ) -> None:
        order = self.orders[order_id]
        self.orders[order_id] = order.model_copy(update={"stockAdjustments": list(adjustments)})

    async def list_pending_stock(self) -> list[OrderInDB]:
        return [
            o.model_copy(deep=True)
            for o in self.orders.values()
            if any(not a.applied for a in o.stockAdjustments)
        ]

    async def delete(self, order_id: str) -> bool:
        return self.orders.pop(order_id, None) is not None


class InMemoryProductRepository(ProductRepository):
    def __init__(self, products: Optional[list[Product]] = None) -> None:
        self.products = {p.id: p for p in products or []}
        self.failing: set[str] = set()

    async def get(self, product_id: str) -> Optional[Product]:
        return self.products.get(product_id)

    async def list_all(self) -> list[Product]:
        return list(self.products.values())

    async def list_by_team(self, team_id: str) -> list[Product]:
        return [p for p in self.products.values() if p.teamId == team_id and p.available]

    async def upsert(self, product: Product) -> Product:
        self.products[product.id] = product
        return product

    async def decrement_stock(self, product_id: str, quantity: int) -> Optional[int]:
        if product_id in self.failing:
            raise ConnectionError("Database not connected")
        product = self.products.get(product_id)
        if product is None:
            return None
        new_stock = max(0, product.stock - quantity)
        self.products[product_id] = product.model_copy(update={"stock": new_stock})
        return new_stock


class InMemoryCartRepository(CartRepository):
    def __init__(self) -> None:
        self.carts: dict[str, list[CartItem]] = {}

    async def list_items(self, user_id: str) -> list[CartItem]:
        return list(self.carts.get(user_id, []))

    async def add_item(self, user_id: str, item: CartItem) -> CartItem:
        lines = self.carts.setdefault(user_id, [])
        for index, line in enumerate(lines):
            if line.line_key == item.line_key:
                lines[index] = line.model_copy(update={"quantity": line.quantity + item.quantity})
                return lines[index]
        lines.append(item)
        return item

    async def set_quantity(self, user_id, product_id, color_id, size, quantity) -> bool:
        lines = self.carts.get(user_id, [])
        for index, line in enumerate(lines):
            if line.line_key == (product_id, color_id, size):
                lines[index] = line.model_copy(update={"quantity": quantity})
                return True
        return False

    async def remove_item(self, user_id, product_id, color_id, size) -> bool:
        lines = self.carts.get(user_id, [])
        kept = [line for line in lines if line.line_key != (product_id, color_id, size)]
        self.carts[user_id] = kept
        return len(kept) != len(lines)

    async def clear(self, user_id: str) -> int:
        return len(self.carts.pop(user_id, []))


class InMemoryCatalogRepository(CatalogRepository):
    def __init__(self) -> None:
        self.leagues: dict[str, CustomLeague] = {}
        self.teams: dict[str, Team] = {}
        self.links: dict[str, TeamLeagueLink] = {}

    async def list_leagues(self) -> list[CustomLeague]:
        return list(self.leagues.values())

    async def get_league(self, league_id: str) -> Optional[CustomLeague]:
        return self.leagues.get(league_id)

    async def create_league(self, league: CustomLeague) -> CustomLeague:
        self.leagues[league.id] = league
        return league

    async def delete_league(self, league_id: str) -> bool:
        return self.leagues.pop(league_id, None) is not None

    async def list_custom_teams(self) -> list[Team]:
        return list(self.teams.values())

    async def get_custom_team(self, team_id: str) -> Optional[Team]:
        return self.teams.get(team_id)

    async def create_custom_team(self, team: Team) -> Team:
        self.teams[team.id] = team
        return team

    async def list_team_links(self) -> list[TeamLeagueLink]:
        return list(self.links.values())

    async def save_team_links(self, links: list[TeamLeagueLink]) -> int:
        for link in links:
            self.links[link.teamId] = link
        return len(links)

    async def delete_team_links(self, league_id: str) -> int:
        stale = [team_id for team_id, link in self.links.items() if link.leagueId == league_id]
        for team_id in stale:
            del self.links[team_id]
        return len(stale)


class InMemoryDeliveryPriceRepository(DeliveryPriceRepository):
    def __init__(self, prices: Optional[dict[str, float]] = None) -> None:
        self.prices = dict(prices or {})

    async def get(self, location: str) -> Optional[DeliveryPrice]:
        if location in self.prices:
            return DeliveryPrice(location=location, price=self.prices[location])
        return None

    async def list_all(self) -> list[DeliveryPrice]:
        return [DeliveryPrice(location=loc, price=price) for loc, price in self.prices.items()]

    async def upsert(self, price: DeliveryPrice) -> DeliveryPrice:
        self.prices[price.location] = price.price
        return price


class RecordingNotifications:
    """Stands in for NotificationService and records every call."""

    def __init__(self) -> None:
        self.confirmations: list[dict[str, Any]] = []
        self.status_updates: list[dict[str, Any]] = []

    async def send_order_confirmation(self, **kwargs: Any) -> dict[str, bool]:
        self.confirmations.append(kwargs)
        return {"email": True}

    async def send_status_update(self, **kwargs: Any) -> dict[str, bool]:
        self.status_updates.append(kwargs)
        return {"email": True}


@pytest.fixture
def products() -> InMemoryProductRepository:
    return InMemoryProductRepository(
        [
            Product(id="a", name="Jersey A", price=50.0, stock=10, teamId="man-utd"),
            Product(id="b", name="Cap B", price=20.0, stock=10, teamId="man-utd"),
        ]
    )


@pytest.fixture
def orders() -> InMemoryOrderRepository:
    return InMemoryOrderRepository()


@pytest.fixture
def delivery_prices() -> InMemoryDeliveryPriceRepository:
    return InMemoryDeliveryPriceRepository({"Accra": 15.0})


@pytest.fixture
def carts() -> InMemoryCartRepository:
    return InMemoryCartRepository()


@pytest.fixture
def catalog() -> InMemoryCatalogRepository:
    return InMemoryCatalogRepository()


@pytest.fixture
def notifications() -> RecordingNotifications:
    return RecordingNotifications()


@pytest.fixture
def order_service(orders, products, delivery_prices, notifications) -> OrderService:
    return OrderService(
        orders=orders,
        products=products,
        delivery_prices=delivery_prices,
        notifications=notifications,
    )


@pytest.fixture
def cart_service(carts) -> CartService:
    return CartService(carts=carts)


@pytest.fixture
def catalog_service(catalog, products, delivery_prices) -> CatalogService:
    return CatalogService(catalog=catalog, products=products, delivery_prices=delivery_prices)


@pytest.fixture
def order_payload() -> dict[str, Any]:
    """Checkout payload for two lines (50 x 1 + 20 x 2) delivered to Accra."""
    return {
        "orderId": "ORD-1718000000000-AAAAAAAAA",
        "items": [
            {"id": "a", "name": "Jersey A", "price": 50.0, "quantity": 1, "colorId": "red"},
            {"id": "b", "name": "Cap B", "price": 20.0, "quantity": 2, "colorId": None},
        ],
        "shipping": {
            "firstName": "Ama",
            "lastName": "Mensah",
            "email": "ama@example.com",
            "phone": "0241234567",
            "address": "12 Ring Road",
            "city": "Accra",
        },
        "subtotal": 90.0,
        "shippingCost": 15.0,
        "tax": 0.0,
        "total": 105.0,
        "paystackReference": "PAY-1718000000000-BBBBBBBBB",
    }
