"""MongoDB database connection and repositories."""

import logging
from datetime import UTC, datetime
from typing import Any, Optional

from motor.motor_asyncio import AsyncIOMotorClient, AsyncIOMotorCollection, AsyncIOMotorDatabase
from pymongo import ReturnDocument
from pymongo.errors import ConnectionFailure, DuplicateKeyError

from storefront.config import get_settings
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

logger = logging.getLogger(__name__)
settings = get_settings()

_NO_ID = {"_id": 0}


class MongoDB:
    """MongoDB connection manager."""

    def __init__(self) -> None:
        """Initialize MongoDB connection."""
        self.client: Optional[AsyncIOMotorClient] = None
        self.db: Optional[AsyncIOMotorDatabase] = None

    async def connect(self) -> None:
        """Connect to MongoDB."""
        try:
            self.client = AsyncIOMotorClient(
                settings.mongodb_url,
                maxPoolSize=settings.mongodb_max_pool_size,
                minPoolSize=settings.mongodb_min_pool_size,
            )
            self.db = self.client[settings.mongodb_database]

            # Test connection
            await self.client.admin.command("ping")
            logger.info("Connected to MongoDB: %s", settings.mongodb_database)

            await self.create_indexes()

        except ConnectionFailure as e:
            logger.error("Failed to connect to MongoDB: %s", e)
            raise

    async def disconnect(self) -> None:
        """Disconnect from MongoDB."""
        if self.client:
            self.client.close()
            self.client = None
            self.db = None
            logger.info("Disconnected from MongoDB")

    @property
    def is_connected(self) -> bool:
        return self.db is not None

    def collection(self, name: str) -> AsyncIOMotorCollection:
        """Get a collection, failing if the database is not connected."""
        if self.db is None:
            raise ConnectionError("Database not connected")
        return self.db[name]

    async def create_indexes(self) -> None:
        """Create database indexes."""
        orders = self.collection(settings.mongodb_orders_collection)
        await orders.create_index("orderId", unique=True, name="orderId_unique")
        await orders.create_index("paystackReference", name="paystackReference_index")
        await orders.create_index([("userId", 1), ("orderDate", -1)], name="user_orders_index")

        await self.collection(settings.mongodb_products_collection).create_index(
            "id", unique=True, name="productId_unique"
        )
        await self.collection(settings.mongodb_products_collection).create_index(
            "teamId", name="teamId_index"
        )
        await self.collection(settings.mongodb_cart_collection).create_index(
            [("userId", 1), ("productId", 1), ("colorId", 1), ("size", 1)],
            name="cart_line_index",
        )
        await self.collection(settings.mongodb_leagues_collection).create_index(
            "id", unique=True, name="leagueId_unique"
        )
        await self.collection(settings.mongodb_teams_collection).create_index(
            "id", unique=True, name="teamId_unique"
        )
        await self.collection(settings.mongodb_team_links_collection).create_index(
            "teamId", unique=True, name="linkTeamId_unique"
        )
        await self.collection(settings.mongodb_delivery_prices_collection).create_index(
            "location", unique=True, name="location_unique"
        )
        logger.info("MongoDB indexes created")


class MongoOrderRepository(OrderRepository):
    """Orders stored in the ``orders`` collection."""

    def __init__(self, mongo: MongoDB) -> None:
        self._mongo = mongo

    @property
    def _orders(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_orders_collection)

    async def create(self, order: OrderInDB) -> OrderInDB:
        try:
            await self._orders.insert_one(order.model_dump())
        except DuplicateKeyError:
            raise DuplicateOrderError(order.orderId)
        return order

    async def get(self, order_id: str) -> Optional[OrderInDB]:
        data = await self._orders.find_one({"orderId": order_id}, _NO_ID)
        if data:
            return OrderInDB(**data)
        return None

    async def find_by_reference(self, reference: str) -> Optional[OrderInDB]:
        data = await self._orders.find_one({"paystackReference": reference}, _NO_ID)
        if data:
            return OrderInDB(**data)
        return None

    async def list_by_user(self, user_id: str) -> list[OrderInDB]:
        cursor = self._orders.find({"userId": user_id}, _NO_ID).sort("orderDate", -1)
        orders = await cursor.to_list(length=None)
        return [OrderInDB(**order) for order in orders]

    async def list_recent(self, limit: int = 50) -> list[OrderInDB]:
        cursor = self._orders.find({}, _NO_ID).sort("orderDate", -1).limit(limit)
        orders = await cursor.to_list(length=limit)
        return [OrderInDB(**order) for order in orders]

    async def append_status(
        self,
        order_id: str,
        entry: StatusHistoryEntry,
        extra: Optional[dict[str, Any]] = None,
    ) -> Optional[OrderInDB]:
        update_data = {"status": entry.status, **(extra or {})}
        result = await self._orders.update_one(
            {"orderId": order_id},
            {"$set": update_data, "$push": {"statusHistory": entry.model_dump()}},
        )
        if result.matched_count:
            return await self.get(order_id)
        return None

    async def save_stock_adjustments(
        self, order_id: str, adjustments: list[StockAdjustment]
    ) -> None:
        await self._orders.update_one(
            {"orderId": order_id},
            {"$set": {"stockAdjustments": [a.model_dump() for a in adjustments]}},
        )

    async def list_pending_stock(self) -> list[OrderInDB]:
        cursor = self._orders.find(
            {"stockAdjustments": {"$elemMatch": {"applied": False}}}, _NO_ID
        )
        orders = await cursor.to_list(length=None)
        return [OrderInDB(**order) for order in orders]

    async def delete(self, order_id: str) -> bool:
        result = await self._orders.delete_one({"orderId": order_id})
        return result.deleted_count > 0


class MongoProductRepository(ProductRepository):
    """Products stored in the ``products`` collection."""

    def __init__(self, mongo: MongoDB) -> None:
        self._mongo = mongo

    @property
    def _products(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_products_collection)

    async def get(self, product_id: str) -> Optional[Product]:
        data = await self._products.find_one({"id": product_id}, _NO_ID)
        if data:
            return Product(**data)
        return None

    async def list_all(self) -> list[Product]:
        products = await self._products.find({}, _NO_ID).to_list(length=None)
        return [Product(**product) for product in products]

    async def list_by_team(self, team_id: str) -> list[Product]:
        cursor = self._products.find({"teamId": team_id, "available": True}, _NO_ID)
        products = await cursor.to_list(length=None)
        return [Product(**product) for product in products]

    async def upsert(self, product: Product) -> Product:
        data = product.model_dump()
        data["updatedAt"] = datetime.now(UTC)
        await self._products.update_one({"id": product.id}, {"$set": data}, upsert=True)
        return product

    async def decrement_stock(self, product_id: str, quantity: int) -> Optional[int]:
        """Atomically take ``quantity`` off a product's stock, flooring at zero.

        Each step is a single conditional update, so concurrent orders never
        overwrite each other's decrement. Returns the new stock, or None when
        the product doesn't exist.
        """
        projection = {"_id": 0, "stock": 1}
        while True:
            data = await self._products.find_one_and_update(
                {"id": product_id, "stock": {"$gte": quantity}},
                {"$inc": {"stock": -quantity}, "$set": {"updatedAt": datetime.now(UTC)}},
                projection=projection,
                return_document=ReturnDocument.AFTER,
            )
            if data is not None:
                return int(data["stock"])

            # Not enough stock left: floor at zero
            data = await self._products.find_one_and_update(
                {
                    "id": product_id,
                    "$or": [{"stock": {"$lt": quantity}}, {"stock": {"$exists": False}}],
                },
                {"$set": {"stock": 0, "updatedAt": datetime.now(UTC)}},
                projection=projection,
                return_document=ReturnDocument.AFTER,
            )
            if data is not None:
                return 0

            if await self._products.find_one({"id": product_id}, projection) is None:
                return None
            # Restocked between the two updates; try again


class MongoCartRepository(CartRepository):
    """Cart lines stored in the ``cart_items`` collection."""

    def __init__(self, mongo: MongoDB) -> None:
        self._mongo = mongo

    @property
    def _cart(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_cart_collection)

    @staticmethod
    def _line_filter(
        user_id: str, product_id: str, color_id: Optional[str], size: Optional[str]
    ) -> dict[str, Any]:
        return {"userId": user_id, "productId": product_id, "colorId": color_id, "size": size}

    async def list_items(self, user_id: str) -> list[CartItem]:
        cursor = self._cart.find({"userId": user_id}, _NO_ID).sort("createdAt", -1)
        items = await cursor.to_list(length=None)
        return [CartItem(**item) for item in items]

    async def add_item(self, user_id: str, item: CartItem) -> CartItem:
        line = self._line_filter(user_id, item.productId, item.colorId, item.size)
        existing = await self._cart.find_one(line, _NO_ID)

        if existing:
            quantity = int(existing.get("quantity", 0)) + item.quantity
            await self._cart.update_one(line, {"$set": {"quantity": quantity, "price": item.price}})
            return item.model_copy(update={"quantity": quantity})

        data = item.model_dump()
        data["userId"] = user_id
        data["createdAt"] = datetime.now(UTC)
        await self._cart.insert_one(data)
        return item

    async def set_quantity(
        self,
        user_id: str,
        product_id: str,
        color_id: Optional[str],
        size: Optional[str],
        quantity: int,
    ) -> bool:
        result = await self._cart.update_one(
            self._line_filter(user_id, product_id, color_id, size),
            {"$set": {"quantity": quantity}},
        )
        return result.matched_count > 0

    async def remove_item(
        self, user_id: str, product_id: str, color_id: Optional[str], size: Optional[str]
    ) -> bool:
        result = await self._cart.delete_one(
            self._line_filter(user_id, product_id, color_id, size)
        )
        return result.deleted_count > 0

    async def clear(self, user_id: str) -> int:
        result = await self._cart.delete_many({"userId": user_id})
        return result.deleted_count


class MongoCatalogRepository(CatalogRepository):
    """Custom leagues, custom teams and team-to-league links."""

    def __init__(self, mongo: MongoDB) -> None:
        self._mongo = mongo

    @property
    def _leagues(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_leagues_collection)

    @property
    def _teams(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_teams_collection)

    @property
    def _links(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_team_links_collection)

    async def list_leagues(self) -> list[CustomLeague]:
        leagues = await self._leagues.find({}, _NO_ID).to_list(length=None)
        return [CustomLeague(**league) for league in leagues]

    async def get_league(self, league_id: str) -> Optional[CustomLeague]:
        data = await self._leagues.find_one({"id": league_id}, _NO_ID)
        if data:
            return CustomLeague(**data)
        return None

    async def create_league(self, league: CustomLeague) -> CustomLeague:
        data = league.model_dump()
        data["createdAt"] = datetime.now(UTC)
        await self._leagues.insert_one(data)
        return league

    async def delete_league(self, league_id: str) -> bool:
        result = await self._leagues.delete_one({"id": league_id})
        return result.deleted_count > 0

    async def list_custom_teams(self) -> list[Team]:
        teams = await self._teams.find({}, _NO_ID).to_list(length=None)
        return [self._to_team(team) for team in teams]

    async def get_custom_team(self, team_id: str) -> Optional[Team]:
        data = await self._teams.find_one({"id": team_id}, _NO_ID)
        if data:
            return self._to_team(data)
        return None

    async def create_custom_team(self, team: Team) -> Team:
        data = team.model_dump(exclude={"logo", "source"})
        data["logoUrl"] = team.logo
        data["createdAt"] = datetime.now(UTC)
        await self._teams.insert_one(data)
        return team

    async def list_team_links(self) -> list[TeamLeagueLink]:
        links = await self._links.find({}, _NO_ID).to_list(length=None)
        return [TeamLeagueLink(**link) for link in links]

    async def save_team_links(self, links: list[TeamLeagueLink]) -> int:
        for link in links:
            await self._links.update_one(
                {"teamId": link.teamId}, {"$set": link.model_dump()}, upsert=True
            )
        return len(links)

    async def delete_team_links(self, league_id: str) -> int:
        result = await self._links.delete_many({"leagueId": league_id})
        return result.deleted_count

    @staticmethod
    def _to_team(data: dict[str, Any]) -> Team:
        return Team(
            id=data["id"],
            name=data["name"],
            league=data.get("league") or "",
            leagueId=data.get("leagueId"),
            logo=data.get("logoUrl"),
            country=data.get("country"),
            sport=data.get("sport") or "football",
            source="custom",
        )


class MongoDeliveryPriceRepository(DeliveryPriceRepository):
    """Delivery prices stored in the ``delivery_prices`` collection."""

    def __init__(self, mongo: MongoDB) -> None:
        self._mongo = mongo

    @property
    def _prices(self) -> AsyncIOMotorCollection:
        return self._mongo.collection(settings.mongodb_delivery_prices_collection)

    async def get(self, location: str) -> Optional[DeliveryPrice]:
        data = await self._prices.find_one({"location": location}, _NO_ID)
        if data:
            return DeliveryPrice(location=data["location"], price=data.get("price") or 0)
        return None

    async def list_all(self) -> list[DeliveryPrice]:
        prices = await self._prices.find({}, _NO_ID).sort("location", 1).to_list(length=None)
        return [DeliveryPrice(**price) for price in prices]

    async def upsert(self, price: DeliveryPrice) -> DeliveryPrice:
        await self._prices.update_one(
            {"location": price.location},
            {"$set": {**price.model_dump(), "updatedAt": datetime.now(UTC)}},
            upsert=True,
        )
        return price


# Global MongoDB instance
mongodb = MongoDB()
order_repository = MongoOrderRepository(mongodb)
product_repository = MongoProductRepository(mongodb)
cart_repository = MongoCartRepository(mongodb)
catalog_repository = MongoCatalogRepository(mongodb)
delivery_price_repository = MongoDeliveryPriceRepository(mongodb)
