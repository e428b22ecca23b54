"""
Models Package

This file ensures all SQLAlchemy models are imported and registered,
which is required for relationships to work correctly.
"""

from models.base import Base
from models.profile import Profile
from models.category import Category
from models.product import Product
from models.cart_item import CartItem
from models.order import Order
from models.order_item import OrderItem
from models.wallet_balance import WalletBalance
from models.transaction import Transaction
from models.bitcoin_address import BitcoinAddress
from models.client_preference import ClientPreference

__all__ = [
    'Base',
    'Profile',
    'Category',
    'Product',
    'CartItem',
    'Order',
    'OrderItem',
    'WalletBalance',
    'Transaction',
    'BitcoinAddress',
    'ClientPreference',
]
