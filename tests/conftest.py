"""
Pytest configuration and fixtures for tests.

This file is automatically loaded by pytest and provides shared fixtures
and configuration for all tests.
"""

import sys
import os
from datetime import datetime
from decimal import Decimal

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.pool import StaticPool

# Set required environment variables before importing app modules
os.environ.setdefault('RUNTIME_ENVIRONMENT', 'TEST')
os.environ.setdefault('AUTH_TOKEN_SECRET', 'test_auth_secret_0123456789abcdef0123456789abcdef')
os.environ.setdefault('AUTH_TOKEN_MAX_AGE_SECONDS', '3600')
os.environ.setdefault('WALLET_KEY_SECRET', 'test_wallet_secret_0123456789abcdef')
os.environ.setdefault('DB_NAME', ':memory:')
os.environ.setdefault('DEFAULT_LANGUAGE', 'en')
os.environ.setdefault('CURRENCY', 'EUR')
os.environ.setdefault('COINGECKO_API_URL', 'https://prices.test/api/v3')
os.environ.setdefault('SECURITY_HEADERS_ENABLED', 'true')
os.environ.setdefault('CSP_ENABLED', 'true')
os.environ.setdefault('HSTS_ENABLED', 'false')
os.environ.setdefault('CORS_ALLOWED_ORIGINS', '')

# Add parent directory to Python path so tests can import modules
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from enums.user_role import UserRole
from models.category import Category
from models.product import Product
from models.profile import Profile
from models.wallet_balance import WalletBalance


# ============================================================================
# Database Fixtures
# ============================================================================

@pytest_asyncio.fixture
async def test_engine():
    """Create test database engine (in-memory SQLite)."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        poolclass=StaticPool,
    )

    # Import and create all tables (db also enables foreign keys on connect)
    from db import Base
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    # Cleanup
    await engine.dispose()


@pytest_asyncio.fixture
async def test_session(test_engine):
    """Create test database session."""
    async_session_maker = async_sessionmaker(
        test_engine,
        class_=AsyncSession,
        expire_on_commit=False
    )

    async with async_session_maker() as session:
        yield session
        await session.rollback()


# ============================================================================
# Data Fixtures
# ============================================================================

@pytest.fixture
def make_profile(test_session):
    """Factory: profile with a wallet row holding balance_eur."""
    async def _make(user_id: str, role: UserRole = UserRole.USER,
                    balance_eur: Decimal = Decimal("0"), with_wallet: bool = True) -> str:
        test_session.add(Profile(user_id=user_id, username=f"name_{user_id}", role=role.value))
        if with_wallet:
            test_session.add(WalletBalance(user_id=user_id, balance_eur=balance_eur,
                                           balance_btc=0, balance_ltc=0))
        await test_session.commit()
        return user_id
    return _make


@pytest.fixture
def make_category(test_session):
    async def _make(name: str = "electronics") -> str:
        test_session.add(Category(name=name))
        await test_session.commit()
        return name
    return _make


@pytest.fixture
def make_product(test_session):
    """Factory: product owned by seller_id, returns its id."""
    async def _make(seller_id: str, title: str = "Ledger Nano", price: Decimal = Decimal("10.00"),
                    stock: int = 5, category: str = "electronics", is_active: bool = True,
                    created_at: datetime | None = None) -> str:
        product = Product(title=title, price=price, stock=stock, category=category,
                          image_url="https://img.test/p.png", is_active=is_active, seller_id=seller_id)
        if created_at is not None:
            product.created_at = created_at
        test_session.add(product)
        await test_session.commit()
        return product.id
    return _make
