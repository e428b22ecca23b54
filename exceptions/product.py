"""
Product and category exceptions.
"""

from .base import MarketplaceException


class ProductException(MarketplaceException):
    """Base exception for product-related errors."""
    pass


class ProductNotFoundException(ProductException):
    """Raised when product is not found in database."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} not found",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class ProductInactiveException(ProductException):
    """Raised when an inactive product is added to a cart or bought."""

    def __init__(self, product_id: str):
        super().__init__(
            f"Product {product_id} is not available",
            details={'product_id': product_id}
        )
        self.product_id = product_id


class InvalidProductDataException(ProductException):
    """Raised when the product form contains invalid values."""

    def __init__(self, field: str, reason: str):
        super().__init__(
            f"Invalid value for '{field}': {reason}",
            details={'field': field, 'reason': reason}
        )
        self.field = field
        self.reason = reason


class ImageRequiredException(InvalidProductDataException):
    """Raised when a product is submitted without an image."""

    def __init__(self):
        super().__init__("image_url", "an image is required")


class CategoryNotFoundException(ProductException):
    """Raised when the selected category does not exist."""

    def __init__(self, category: str):
        super().__init__(
            f"Category '{category}' not found",
            details={'category': category}
        )
        self.category = category


class ProductOwnershipException(ProductException):
    """Raised when a seller modifies a product of another seller."""

    def __init__(self, product_id: str, user_id: str):
        super().__init__(
            f"User {user_id} does not own product {product_id}",
            details={'product_id': product_id, 'user_id': user_id}
        )
        self.product_id = product_id
        self.user_id = user_id
