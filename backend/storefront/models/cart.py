"""Cart data models."""

from typing import Optional

from pydantic import BaseModel, Field

MAX_CART_QUANTITY = 10


class CartItem(BaseModel):
    """Cart line, either from the guest's local storage or the user's remote cart."""

    productId: str
    productName: str = ""
    price: float = Field(0.0, ge=0)
    colorId: Optional[str] = None
    size: Optional[str] = None
    quantity: int = Field(1, ge=1)
    image: Optional[str] = None

    @property
    def line_key(self) -> tuple[str, Optional[str], Optional[str]]:
        """Identity of a line in the remote cart."""
        return (self.productId, self.colorId, self.size)

    @property
    def merge_key(self) -> tuple[str, Optional[str]]:
        """Identity used when reconciling a guest cart with a remote cart."""
        return (self.productId, self.colorId)


class CartItemInDB(CartItem):
    """Cart line as stored in database."""

    userId: str
