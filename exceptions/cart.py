"""
Cart-related exceptions.
"""

from .base import MarketplaceException


class CartException(MarketplaceException):
    """Base exception for cart-related errors."""
    pass


class EmptyCartException(CartException):
    """Raised when trying to checkout with empty cart."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Cart is empty for user {user_id}",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class CartItemNotFoundException(CartException):
    """Raised when the product is not in the user's cart."""

    def __init__(self, user_id: str, product_id: str):
        super().__init__(
            f"Product {product_id} is not in the cart of user {user_id}",
            details={'user_id': user_id, 'product_id': product_id}
        )
        self.user_id = user_id
        self.product_id = product_id
