"""
Payment-related exceptions.
"""

from .base import MarketplaceException


class PaymentException(MarketplaceException):
    """Base exception for payment-related errors."""
    pass


class PaymentMethodNotSelectedException(PaymentException):
    """Raised when checkout is confirmed without choosing BTC or LTC."""

    def __init__(self, user_id: str):
        super().__init__(
            f"No payment method selected for user {user_id}",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class PriceQuoteUnavailableException(PaymentException):
    """Raised when the price API cannot deliver a quote."""

    def __init__(self, cryptocurrency: str, reason: str):
        super().__init__(
            f"Price quote for {cryptocurrency} unavailable: {reason}",
            details={'cryptocurrency': cryptocurrency, 'reason': reason}
        )
        self.cryptocurrency = cryptocurrency
        self.reason = reason
