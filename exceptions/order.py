"""
Order and checkout exceptions.
"""

from .base import MarketplaceException


class OrderException(MarketplaceException):
    """Base exception for order-related errors."""
    pass


class InsufficientStockException(OrderException):
    """Raised when a product has less stock than the cart requests."""

    def __init__(self, product_id: str, requested: int, available: int):
        super().__init__(
            f"Insufficient stock for product {product_id}: requested {requested}, available {available}",
            details={'product_id': product_id, 'requested': requested, 'available': available}
        )
        self.product_id = product_id
        self.requested = requested
        self.available = available
