"""Storage ports.

Services depend on these interfaces only; ``storefront.database.mongodb``
provides the MongoDB implementations used by the application.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

from storefront.models.cart import CartItem
from storefront.models.delivery import DeliveryPrice
from storefront.models.league import CustomLeague, Team, TeamLeagueLink
from storefront.models.order import OrderInDB, StatusHistoryEntry, StockAdjustment
from storefront.models.product import Product


class OrderRepository(ABC):
    """Persistence of order documents keyed by ``orderId``."""

    @abstractmethod
    async def create(self, order: OrderInDB) -> OrderInDB:
        """Insert a new order. Raises ``DuplicateOrderError`` if the id is taken."""

    @abstractmethod
    async def get(self, order_id: str) -> Optional[OrderInDB]:
        """Get order by id."""

    @abstractmethod
    async def find_by_reference(self, reference: str) -> Optional[OrderInDB]:
        """Get the order created for a payment reference."""

    @abstractmethod
    async def list_by_user(self, user_id: str) -> list[OrderInDB]:
        """List a user's orders, newest first."""

    @abstractmethod
    async def list_recent(self, limit: int = 50) -> list[OrderInDB]:
        """List all orders, newest first."""

    @abstractmethod
    async def append_status(
        self,
        order_id: str,
        entry: StatusHistoryEntry,
        extra: Optional[dict[str, Any]] = None,
    ) -> Optional[OrderInDB]:
        """Set the status and append ``entry`` to the history in one update."""

    @abstractmethod
    async def save_stock_adjustments(
        self, order_id: str, adjustments: list[StockAdjustment]
    ) -> None:
        """Replace the order's stock adjustment outbox."""

    @abstractmethod
    async def list_pending_stock(self) -> list[OrderInDB]:
        """List orders that still owe at least one stock adjustment."""

    @abstractmethod
    async def delete(self, order_id: str) -> bool:
        """Delete order by id."""


class ProductRepository(ABC):
    """Product catalog and inventory counts."""

    @abstractmethod
    async def get(self, product_id: str) -> Optional[Product]:
        """Get product by id."""

    @abstractmethod
    async def list_all(self) -> list[Product]:
        """List all products."""

    @abstractmethod
    async def list_by_team(self, team_id: str) -> list[Product]:
        """List products attached to a team."""

    @abstractmethod
    async def upsert(self, product: Product) -> Product:
        """Insert or replace a product."""

    @abstractmethod
    async def decrement_stock(self, product_id: str, quantity: int) -> Optional[int]:
        """Decrease stock, floored at zero. Returns the new stock or None if unknown."""


class CartRepository(ABC):
    """Signed-in users' remote carts."""

    @abstractmethod
    async def list_items(self, user_id: str) -> list[CartItem]:
        """List a user's cart lines, newest first."""

    @abstractmethod
    async def add_item(self, user_id: str, item: CartItem) -> CartItem:
        """Add a line, summing quantities when the line already exists."""

    @abstractmethod
    async def set_quantity(
        self,
        user_id: str,
        product_id: str,
        color_id: Optional[str],
        size: Optional[str],
        quantity: int,
    ) -> bool:
        """Set the quantity of an existing line."""

    @abstractmethod
    async def remove_item(
        self, user_id: str, product_id: str, color_id: Optional[str], size: Optional[str]
    ) -> bool:
        """Remove a line."""

    @abstractmethod
    async def clear(self, user_id: str) -> int:
        """Remove every line of a user's cart. Returns the number removed."""


class CatalogRepository(ABC):
    """Admin-managed leagues and teams."""

    @abstractmethod
    async def list_leagues(self) -> list[CustomLeague]:
        """List custom leagues."""

    @abstractmethod
    async def get_league(self, league_id: str) -> Optional[CustomLeague]:
        """Get custom league by id."""

    @abstractmethod
    async def create_league(self, league: CustomLeague) -> CustomLeague:
        """Insert a custom league."""

    @abstractmethod
    async def delete_league(self, league_id: str) -> bool:
        """Delete a custom league."""

    @abstractmethod
    async def list_custom_teams(self) -> list[Team]:
        """List custom teams."""

    @abstractmethod
    async def get_custom_team(self, team_id: str) -> Optional[Team]:
        """Get custom team by id."""

    @abstractmethod
    async def create_custom_team(self, team: Team) -> Team:
        """Insert a custom team."""

    @abstractmethod
    async def list_team_links(self) -> list[TeamLeagueLink]:
        """List stored team-to-league links."""

    @abstractmethod
    async def save_team_links(self, links: list[TeamLeagueLink]) -> int:
        """Upsert team-to-league links. Returns the number written."""

    @abstractmethod
    async def delete_team_links(self, league_id: str) -> int:
        """Remove every link pointing at a league. Returns the number removed."""


class DeliveryPriceRepository(ABC):
    """Delivery fees per location."""

    @abstractmethod
    async def get(self, location: str) -> Optional[DeliveryPrice]:
        """Get the delivery price for an exact location."""

    @abstractmethod
    async def list_all(self) -> list[DeliveryPrice]:
        """List all delivery prices."""

    @abstractmethod
    async def upsert(self, price: DeliveryPrice) -> DeliveryPrice:
        """Insert or update the price for a location."""
