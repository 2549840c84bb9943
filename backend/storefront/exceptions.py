"""Custom exceptions for the storefront."""

from typing import Optional


class StorefrontError(Exception):
    """Base exception for all storefront errors."""

    status_code: int = 500


class OrderNotFoundError(StorefrontError):
    """Raised when an order id doesn't exist."""

    status_code = 404

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order not found: {order_id}")


class TeamNotFoundError(StorefrontError):
    """Raised when a team id matches neither a static nor a custom team."""

    status_code = 404

    def __init__(self, team_id: str):
        self.team_id = team_id
        super().__init__(f"Team not found: {team_id}")


class LeagueNotFoundError(StorefrontError):
    """Raised when a custom league id doesn't exist."""

    status_code = 404

    def __init__(self, league_id: str):
        self.league_id = league_id
        super().__init__(f"League not found: {league_id}")


class OrderValidationError(StorefrontError):
    """Raised when an order payload is incomplete or inconsistent."""

    status_code = 400

    def __init__(self, message: str, missing_fields: Optional[list[str]] = None):
        self.missing_fields = missing_fields or []
        super().__init__(message)


class UnknownProductError(OrderValidationError):
    """Raised when an order line references a product the catalog doesn't know."""

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Unknown product: {product_id}")


class OrderTotalMismatchError(OrderValidationError):
    """Raised when the submitted total diverges from the server-computed total."""

    def __init__(self, submitted: float, expected: float):
        self.submitted = submitted
        self.expected = expected
        super().__init__(
            f"Order total mismatch: submitted {submitted:.2f}, expected {expected:.2f}"
        )


class DuplicateOrderError(StorefrontError):
    """Raised when an order id is already taken."""

    status_code = 409

    def __init__(self, order_id: str):
        self.order_id = order_id
        super().__init__(f"Order already exists: {order_id}")


class InvalidStatusTransitionError(StorefrontError):
    """Raised when a status change is not allowed from the current status."""

    status_code = 409

    def __init__(self, current: str, requested: str):
        self.current = current
        self.requested = requested
        super().__init__(f"Cannot change order status from '{current}' to '{requested}'")


class PaymentConfigurationError(StorefrontError):
    """Raised when the payment provider is not configured."""

    def __init__(self) -> None:
        super().__init__("Paystack configuration missing")


class PaymentError(StorefrontError):
    """Raised when the payment provider refuses or cannot be reached."""

    def __init__(self, message: str, status_code: int = 400, details: Optional[dict] = None):
        self.status_code = status_code
        self.details = details
        super().__init__(message)


class ProductNotFoundError(StorefrontError):
    """Raised when a product id matches neither a stored nor a generated product."""

    status_code = 404

    def __init__(self, product_id: str):
        self.product_id = product_id
        super().__init__(f"Product not found: {product_id}")


class OrderAccessDeniedError(StorefrontError):
    """Raised when a customer acts on an order that isn't theirs."""

    status_code = 403
