"""
Profile and permission exceptions.
"""

from .base import MarketplaceException


class ProfileException(MarketplaceException):
    """Base exception for profile-related errors."""
    pass


class ProfileNotFoundException(ProfileException):
    """Raised when no profile exists for the authenticated user."""

    def __init__(self, user_id: str):
        super().__init__(
            f"Profile for user {user_id} not found",
            details={'user_id': user_id}
        )
        self.user_id = user_id


class SellerAccessDeniedException(ProfileException):
    """Raised when a user without seller or admin role opens the seller dashboard."""

    def __init__(self, user_id: str, role: str):
        super().__init__(
            f"User {user_id} with role '{role}' cannot manage products",
            details={'user_id': user_id, 'role': role}
        )
        self.user_id = user_id
        self.role = role
