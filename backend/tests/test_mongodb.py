"""MongoDB repository tests against mongomock-motor."""

import asyncio

import pytest
from mongomock_motor import AsyncMongoMockClient

from storefront.database.mongodb import (
    MongoCartRepository,
    MongoCatalogRepository,
    MongoDB,
    MongoDeliveryPriceRepository,
    MongoOrderRepository,
    MongoProductRepository,
)
from storefront.exceptions import DuplicateOrderError
from storefront.models.cart import CartItem
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import CustomLeague, Team, TeamLeagueLink
from storefront.models.order import (
    OrderInDB,
    OrderItem,
    ShippingInfo,
    StatusHistoryEntry,
    StockAdjustment,
)
from storefront.models.product import Product


@pytest.fixture
async def mongo() -> MongoDB:
    manager = MongoDB()
    manager.client = AsyncMongoMockClient()
    manager.db = manager.client["storefront_test"]
    await manager.create_indexes()
    return manager


def make_order(order_id="ORD-1", reference="PAY-1", user_id="user-1") -> OrderInDB:
    return OrderInDB(
        orderId=order_id,
        userId=user_id,
        statusHistory=[
            StatusHistoryEntry(status="submitted", timestamp="2024-06-10T10:00:00+00:00",
                               note="Order submitted successfully")
        ],
        items=[OrderItem(id="a", name="Jersey A", price=50.0, quantity=1)],
        shipping=ShippingInfo(firstName="Ama", city="Accra"),
        subtotal=50.0,
        total=65.0,
        shippingCost=15.0,
        paystackReference=reference,
        stockAdjustments=[StockAdjustment(productId="a", quantity=1)],
    )


def test_collection_requires_connection():
    with pytest.raises(ConnectionError):
        MongoDB().collection("orders")


async def test_order_round_trip_and_reference_lookup(mongo):
    repo = MongoOrderRepository(mongo)
    await repo.create(make_order())

    assert (await repo.get("ORD-1")).total == 65.0
    assert (await repo.find_by_reference("PAY-1")).orderId == "ORD-1"
    assert await repo.find_by_reference("PAY-2") is None
    assert [o.orderId for o in await repo.list_by_user("user-1")] == ["ORD-1"]


async def test_duplicate_order_id_is_rejected(mongo):
    repo = MongoOrderRepository(mongo)
    await repo.create(make_order())

    with pytest.raises(DuplicateOrderError):
        await repo.create(make_order(reference="PAY-2"))


async def test_append_status_pushes_history(mongo):
    repo = MongoOrderRepository(mongo)
    await repo.create(make_order())

    updated = await repo.append_status(
        "ORD-1",
        StatusHistoryEntry(status="confirmed", timestamp="2024-06-10T11:00:00+00:00"),
        {"deliveryPersonInfo": {"name": "Kwesi", "phone": "0501234567"}},
    )

    assert updated.status == "confirmed"
    assert [entry.status for entry in updated.statusHistory] == ["submitted", "confirmed"]
    assert updated.deliveryPersonInfo.name == "Kwesi"
    assert await repo.append_status(
        "missing", StatusHistoryEntry(status="confirmed", timestamp="t")
    ) is None


async def test_pending_stock_outbox(mongo):
    repo = MongoOrderRepository(mongo)
    await repo.create(make_order())
    await repo.create(make_order("ORD-2", "PAY-2"))

    await repo.save_stock_adjustments(
        "ORD-2", [StockAdjustment(productId="a", quantity=1, applied=True)]
    )

    assert [o.orderId for o in await repo.list_pending_stock()] == ["ORD-1"]


async def test_delete_order(mongo):
    repo = MongoOrderRepository(mongo)
    await repo.create(make_order())

    assert await repo.delete("ORD-1") is True
    assert await repo.delete("ORD-1") is False
    assert await repo.list_recent() == []


async def test_stock_decrement_floors_at_zero(mongo):
    repo = MongoProductRepository(mongo)
    await repo.upsert(Product(id="a", name="Jersey A", price=50.0, stock=3, teamId="man-utd"))

    assert await repo.decrement_stock("a", 5) == 0
    assert (await repo.get("a")).stock == 0
    assert await repo.decrement_stock("unknown", 1) is None
    assert [p.id for p in await repo.list_by_team("man-utd")] == ["a"]


async def test_concurrent_stock_decrements_are_all_applied(mongo):
    repo = MongoProductRepository(mongo)
    await repo.upsert(Product(id="p", name="Scarf", price=15.0, stock=5))

    results = await asyncio.gather(*(repo.decrement_stock("p", 1) for _ in range(3)))

    assert sorted(results) == [2, 3, 4]
    assert (await repo.get("p")).stock == 2


async def test_stock_decrement_without_stock_field(mongo):
    await mongo.collection("products").insert_one({"id": "legacy", "name": "Old Scarf", "price": 10.0})
    repo = MongoProductRepository(mongo)

    assert await repo.decrement_stock("legacy", 2) == 0
    assert (await repo.get("legacy")).stock == 0


async def test_cart_lines_sum_by_product_color_and_size(mongo):
    repo = MongoCartRepository(mongo)
    await repo.add_item("user-1", CartItem(productId="a", colorId="red", size="M", quantity=1))
    await repo.add_item("user-1", CartItem(productId="a", colorId="red", size="M", quantity=2))
    await repo.add_item("user-1", CartItem(productId="a", colorId="red", size="L", quantity=1))

    lines = {item.line_key: item.quantity for item in await repo.list_items("user-1")}
    assert lines == {("a", "red", "M"): 3, ("a", "red", "L"): 1}

    assert await repo.set_quantity("user-1", "a", "red", "L", 4)
    assert await repo.remove_item("user-1", "a", "red", "M")
    assert [i.quantity for i in await repo.list_items("user-1")] == [4]
    assert await repo.clear("user-1") == 1


async def test_catalog_repository(mongo):
    repo = MongoCatalogRepository(mongo)
    await repo.create_league(CustomLeague(id="gpl", name="Ghana Premier League", sport="football"))
    await repo.create_custom_team(
        Team(id="t1", name="Dreams FC", league="Ghana Premier League", leagueId="gpl",
             logo="https://x/dreams.png", source="custom")
    )
    await repo.save_team_links([TeamLeagueLink(teamId="asante-kotoko", leagueId="gpl")])
    await repo.save_team_links([TeamLeagueLink(teamId="asante-kotoko", leagueId="gpl")])

    assert (await repo.get_league("gpl")).name == "Ghana Premier League"
    team = await repo.get_custom_team("t1")
    assert team.logo == "https://x/dreams.png"
    assert team.source == "custom"
    assert len(await repo.list_team_links()) == 1
    assert await repo.delete_league("gpl") is True
    assert await repo.list_leagues() == []


async def test_delivery_price_upsert(mongo):
    repo = MongoDeliveryPriceRepository(mongo)
    await repo.upsert(DeliveryPrice(location="Accra", price=15.0))
    await repo.upsert(DeliveryPrice(location="Accra", price=18.0))

    assert (await repo.get("Accra")).price == 18.0
    assert await repo.get("Tema") is None
    assert len(await repo.list_all()) == 1
