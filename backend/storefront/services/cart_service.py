"""Cart persistence and guest-cart reconciliation."""

import logging
from typing import Optional

from storefront.database.mongodb import cart_repository
from storefront.database.repositories import CartRepository
from storefront.models.cart import MAX_CART_QUANTITY, CartItem

logger = logging.getLogger(__name__)


def reconcile_carts(
    remote: list[CartItem], local: list[CartItem]
) -> tuple[list[CartItem], list[CartItem]]:
    """Merge a guest cart into a signed-in user's remote cart.

    Remote lines take priority. A local line is added only when its
    ``(productId, colorId)`` key is absent remotely. The combined list is then
    deduplicated by the same key, summing quantities into the first-seen line.

    Args:
        remote: Lines already stored for the user
        local: Lines from the guest's local storage

    Returns:
        Tuple of (merged lines, local lines to persist remotely)
    """
    remote_keys = {item.merge_key for item in remote}
    additions = [item for item in local if item.merge_key not in remote_keys]

    merged: dict[tuple[str, Optional[str]], CartItem] = {}
    for item in [*remote, *additions]:
        seen = merged.get(item.merge_key)
        if seen is None:
            merged[item.merge_key] = item.model_copy()
        else:
            merged[item.merge_key] = seen.model_copy(
                update={"quantity": seen.quantity + item.quantity}
            )

    return list(merged.values()), additions


def clamp_quantity(quantity: int) -> int:
    return max(1, min(MAX_CART_QUANTITY, quantity))


class CartService:
    """Signed-in cart operations."""

    def __init__(self, carts: Optional[CartRepository] = None) -> None:
        self.carts = carts or cart_repository

    async def get_cart(self, user_id: str) -> list[CartItem]:
        return await self.carts.list_items(user_id)

    async def add_item(self, user_id: str, item: CartItem) -> CartItem:
        """Add a line; an existing (product, color, size) line has its quantity summed."""
        saved = await self.carts.add_item(user_id, item)
        logger.info("Cart %s: added %s x%d", user_id, item.productId, item.quantity)
        return saved

    async def update_quantity(
        self,
        user_id: str,
        product_id: str,
        color_id: Optional[str],
        size: Optional[str],
        quantity: int,
    ) -> bool:
        """Set a line's quantity, clamped into [1, MAX_CART_QUANTITY]."""
        return await self.carts.set_quantity(
            user_id, product_id, color_id, size, clamp_quantity(quantity)
        )

    async def remove_item(
        self, user_id: str, product_id: str, color_id: Optional[str], size: Optional[str]
    ) -> bool:
        return await self.carts.remove_item(user_id, product_id, color_id, size)

    async def clear_cart(self, user_id: str) -> int:
        removed = await self.carts.clear(user_id)
        logger.info("Cart %s cleared (%d lines)", user_id, removed)
        return removed

    async def replace_cart(self, user_id: str, items: list[CartItem]) -> list[CartItem]:
        """Overwrite the remote cart with the client's lines."""
        await self.carts.clear(user_id)
        for item in items:
            await self.carts.add_item(user_id, item)
        return await self.carts.list_items(user_id)

    async def merge_guest_cart(self, user_id: str, local_items: list[CartItem]) -> list[CartItem]:
        """Reconcile a guest cart on sign-in.

        Lines missing remotely are persisted; the merged list is returned for
        the client to write back to local storage. No locking: the last writer
        to the remote store wins.
        """
        remote = await self.carts.list_items(user_id)
        merged, additions = reconcile_carts(remote, local_items)

        for item in additions:
            await self.carts.add_item(user_id, item)

        logger.info(
            "Cart %s merged: %d remote, %d local, %d added",
            user_id,
            len(remote),
            len(local_items),
            len(additions),
        )
        return merged


# Global cart service instance
cart_service = CartService()
