"""
Unit Tests: HTTP API

Routes are exercised through FastAPI's TestClient with the service layer
mocked, covering:
- Bearer token authentication
- Localized toast notices for service exceptions
- Request payload validation
- Security headers
"""

from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi.testclient import TestClient

import config
from app import app
from enums.cryptocurrency import Cryptocurrency
from enums.theme import Theme
from exceptions import (
    InsufficientBalanceException,
    SellerAccessDeniedException,
    ProductNotFoundException,
    ImageRequiredException,
)
from models.cart_item import CartSummaryDTO, CartItemDTO
from models.payment import CheckoutReceiptDTO
from models.privacy import PrivacyWarningDTO
from models.product import ProductDTO
from models.wallet_balance import WalletBalanceDTO
from utils.auth_token import sign_auth_token
from web.dependencies import get_session


async def override_get_session():
    yield MagicMock()


@pytest.fixture
def client():
    app.dependency_overrides[get_session] = override_get_session
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers():
    token = sign_auth_token("user-1", config.AUTH_TOKEN_SECRET)
    return {"Authorization": f"Bearer {token}"}


class TestAuthentication:

    def test_missing_token(self, client):
        response = client.get("/api/cart")

        assert response.status_code == 401
        assert response.json()["detail"]["variant"] == "destructive"

    def test_invalid_token_in_german(self, client):
        response = client.get("/api/cart", headers={"Authorization": "Bearer user-1.1.deadbeef",
                                                    "Accept-Language": "de-DE"})

        assert response.status_code == 401
        assert response.json()["detail"]["description"] == "Bitte melden Sie sich erneut an."

    def test_non_ascii_signature_is_401(self, client):
        token = sign_auth_token("user-1", config.AUTH_TOKEN_SECRET)
        user_id, issued_at, _ = token.split(".")
        header = f"Bearer {user_id}.{issued_at}.\u00e9t\u00e9".encode("latin-1")

        response = client.get("/api/cart", headers={"Authorization": header})

        assert response.status_code == 401

    def test_public_catalog_needs_no_token(self, client):
        with patch('web.api_router.CatalogService.list_active_products', new=AsyncMock(return_value=[])) as mock:
            response = client.get("/api/products", params={"category": "books"})

        assert response.status_code == 200
        assert response.json() == []
        assert mock.await_args.args[1] == "books"


class TestCart:

    def test_summary(self, client, auth_headers):
        summary = CartSummaryDTO(
            items=[CartItemDTO(product_id="p1", title="Wallet", price=Decimal("10.00"), quantity=2,
                               category="electronics")],
            item_count=2,
            total_eur=Decimal("20.00"),
            wallet=WalletBalanceDTO(balance_eur=Decimal("50")),
        )
        with patch('web.api_router.CartService.get_summary', new=AsyncMock(return_value=summary)) as mock:
            response = client.get("/api/cart", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["item_count"] == 2
        assert body["total_btc"] is None
        assert mock.await_args.args[0] == "user-1"

    def test_add_requires_positive_quantity(self, client, auth_headers):
        response = client.post("/api/cart/items", json={"product_id": "p1", "quantity": 0}, headers=auth_headers)

        assert response.status_code == 422

    def test_unknown_product_is_404(self, client, auth_headers):
        with patch('web.api_router.CartService.add_product',
                   new=AsyncMock(side_effect=ProductNotFoundException("p1"))):
            response = client.post("/api/cart/items", json={"product_id": "p1"}, headers=auth_headers)

        assert response.status_code == 404
        assert response.json()["detail"]["description"] == "This product does not exist anymore."


class TestCheckout:

    def test_success_notice(self, client, auth_headers):
        receipt = CheckoutReceiptDTO(order_id="0123456789abcdef", order_reference="01234567",
                                     total_eur=Decimal("20.00"), payment_method=Cryptocurrency.LTC,
                                     item_count=2, new_balance_eur=Decimal("30.00"))
        with patch('web.api_router.CheckoutService.checkout', new=AsyncMock(return_value=receipt)) as mock:
            response = client.post("/api/checkout", json={"payment_method": "LTC"},
                                   headers={**auth_headers, "Accept-Language": "de"})

        assert response.status_code == 200
        body = response.json()
        assert body["order_reference"] == "01234567"
        assert body["notice"]["title"] == "Bestellung erfolgreich"
        assert mock.await_args.args[1] == Cryptocurrency.LTC

    def test_insufficient_balance_toast(self, client, auth_headers):
        error = InsufficientBalanceException("user-1", Decimal("20.00"), Decimal("5.00"))
        with patch('web.api_router.CheckoutService.checkout', new=AsyncMock(side_effect=error)):
            response = client.post("/api/checkout", json={"payment_method": "BTC"},
                                   headers={**auth_headers, "Accept-Language": "en"})

        assert response.status_code == 409
        assert response.json()["detail"] == {
            "title": "Insufficient Balance",
            "description": "You don't have enough balance on your account.",
            "variant": "destructive",
        }

    def test_unsupported_payment_method(self, client, auth_headers):
        response = client.post("/api/checkout", json={"payment_method": "DOGE"}, headers=auth_headers)

        assert response.status_code == 422


class TestSeller:

    def test_access_denied(self, client, auth_headers):
        with patch('web.api_router.SellerService.list_products',
                   new=AsyncMock(side_effect=SellerAccessDeniedException("user-1", "user"))):
            response = client.get("/api/seller/products", headers=auth_headers)

        assert response.status_code == 403

    def test_image_required_toast(self, client, auth_headers):
        with patch('web.api_router.SellerService.add_product', new=AsyncMock(side_effect=ImageRequiredException())):
            response = client.post("/api/seller/products", json={"title": "x", "price": "1", "stock": "1",
                                                                 "category": "books"},
                                   headers={**auth_headers, "Accept-Language": "en"})

        assert response.status_code == 400
        assert response.json()["detail"]["title"] == "Image required"

    def test_product_added_notice(self, client, auth_headers):
        product = ProductDTO(id="p1", title="Book", price=Decimal("5.00"), stock=1, is_active=True)
        with patch('web.api_router.SellerService.add_product', new=AsyncMock(return_value=product)):
            response = client.post("/api/seller/products", json={"title": "Book", "price": "5", "stock": "1",
                                                                 "category": "books", "image_url": "x"},
                                   headers={**auth_headers, "Accept-Language": "en"})

        assert response.status_code == 201
        assert response.json()["notice"]["title"] == "Product added"


class TestSettingsAndPrivacy:

    def test_toggle_theme(self, client, auth_headers):
        with patch('web.api_router.SettingsService.toggle_theme', new=AsyncMock(return_value=Theme.DARK)):
            response = client.post("/api/settings/theme/toggle", headers=auth_headers)

        assert response.json() == {"theme": "dark"}

    def test_delete_account_notice(self, client, auth_headers):
        with patch('web.api_router.SettingsService.delete_account', new=AsyncMock()) as mock:
            response = client.delete("/api/settings/account", headers={**auth_headers, "Accept-Language": "de"})

        assert response.status_code == 200
        assert response.json()["notice"]["title"] == "Konto gelöscht"
        assert mock.await_args.args[0] == "user-1"

    def test_privacy_warning_requires_client_id(self, client):
        response = client.get("/api/privacy-warning")

        assert response.status_code == 400

    def test_privacy_warning_passes_user_agent(self, client):
        warning = PrivacyWarningDTO(show=True, is_tor_browser=False, title="t", warning="w",
                                    recommendations_title="r", guide_url="/settings#privacy-guide",
                                    guide_button="g", accept_button="a")
        with patch('web.api_router.PrivacyService.evaluate', new=AsyncMock(return_value=warning)) as mock:
            response = client.get("/api/privacy-warning",
                                  headers={"X-Client-Id": "browser-1", "User-Agent": "Chrome/126"})

        assert response.status_code == 200
        assert response.json()["show"] is True
        assert mock.await_args.args[0] == "browser-1"
        assert mock.await_args.args[1] == "Chrome/126"


class TestHealthAndHeaders:

    def test_health(self, client):
        response = client.get("/health")

        assert response.json() == {"status": "healthy"}
        assert response.headers["X-Content-Type-Options"] == "nosniff"
        assert response.headers["X-Frame-Options"] == "DENY"
        assert response.headers["Referrer-Policy"] == "no-referrer"
        assert "default-src 'none'" in response.headers["Content-Security-Policy"]
        assert "Strict-Transport-Security" not in response.headers
