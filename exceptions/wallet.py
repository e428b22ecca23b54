"""
Wallet-related exceptions.
"""

from .base import MarketplaceException


class WalletException(MarketplaceException):
    """Base exception for wallet-related errors."""
    pass


class InsufficientBalanceException(WalletException):
    """Raised when user has insufficient wallet balance."""

    def __init__(self, user_id: str, required, available):
        super().__init__(
            f"Insufficient balance for user {user_id}: required {required}, available {available}",
            details={'user_id': user_id, 'required': required, 'available': available}
        )
        self.user_id = user_id
        self.required = required
        self.available = available


class WalletAddressNotFoundException(WalletException):
    """Raised when a bitcoin address does not exist or belongs to another user."""

    def __init__(self, address_id: str):
        super().__init__(
            f"Bitcoin address {address_id} not found",
            details={'address_id': address_id}
        )
        self.address_id = address_id
