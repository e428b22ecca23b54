"""
Custom exceptions for the marketplace.

Exception Hierarchy:
--------------------
MarketplaceException (base)
├── CartException
│   ├── EmptyCartException
│   └── CartItemNotFoundException
├── ProductException
│   ├── ProductNotFoundException
│   ├── ProductInactiveException
│   ├── InvalidProductDataException
│   │   └── ImageRequiredException
│   ├── CategoryNotFoundException
│   └── ProductOwnershipException
├── OrderException
│   └── InsufficientStockException
├── PaymentException
│   ├── PaymentMethodNotSelectedException
│   └── PriceQuoteUnavailableException
├── WalletException
│   ├── InsufficientBalanceException
│   └── WalletAddressNotFoundException
└── ProfileException
    ├── ProfileNotFoundException
    └── SellerAccessDeniedException

Usage:
------
Services raise specific exceptions:
    raise ProductNotFoundException(product_id="...")

The API layer catches them and renders a localized notice:
    except MarketplaceException as e:
        message = handle_service_error(e)
"""

from .base import MarketplaceException
from .cart import CartException, EmptyCartException, CartItemNotFoundException
from .product import (
    ProductException,
    ProductNotFoundException,
    ProductInactiveException,
    InvalidProductDataException,
    ImageRequiredException,
    CategoryNotFoundException,
    ProductOwnershipException,
)
from .order import OrderException, InsufficientStockException
from .payment import PaymentException, PaymentMethodNotSelectedException, PriceQuoteUnavailableException
from .wallet import WalletException, InsufficientBalanceException, WalletAddressNotFoundException
from .profile import ProfileException, ProfileNotFoundException, SellerAccessDeniedException

__all__ = [
    # Base
    'MarketplaceException',

    # Cart
    'CartException',
    'EmptyCartException',
    'CartItemNotFoundException',

    # Product
    'ProductException',
    'ProductNotFoundException',
    'ProductInactiveException',
    'InvalidProductDataException',
    'ImageRequiredException',
    'CategoryNotFoundException',
    'ProductOwnershipException',

    # Order
    'OrderException',
    'InsufficientStockException',

    # Payment
    'PaymentException',
    'PaymentMethodNotSelectedException',
    'PriceQuoteUnavailableException',

    # Wallet
    'WalletException',
    'InsufficientBalanceException',
    'WalletAddressNotFoundException',

    # Profile
    'ProfileException',
    'ProfileNotFoundException',
    'SellerAccessDeniedException',
]
