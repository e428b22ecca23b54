"""
Tests for Error Handler Utility

Tests the centralized error handling system that converts
custom exceptions to localized user-friendly notices.
"""

from decimal import Decimal
from unittest.mock import patch

import pytest

from enums.message_entity import MessageEntity
from utils.localizator import Localizator
from exceptions import (
    EmptyCartException,
    InsufficientStockException,
    InsufficientBalanceException,
    ImageRequiredException,
    CategoryNotFoundException,
    SellerAccessDeniedException,
    ProductNotFoundException,
    PriceQuoteUnavailableException,
    MarketplaceException,
)
from utils.error_handler import (
    ERROR_MAPPING,
    TITLE_MAPPING,
    handle_service_error,
    handle_unexpected_error,
    build_error_notice,
    get_http_status,
)


class TestHandleServiceError:
    """Test mapping of exceptions to localization keys"""

    @patch('utils.error_handler.Localizator')
    def test_empty_cart_uses_user_section(self, mock_localizator):
        mock_localizator.get_text.return_value = "Your cart is empty."

        result = handle_service_error(EmptyCartException(user_id="u1"), "en")

        mock_localizator.get_text.assert_called_with(MessageEntity.USER, "error_empty_cart", "en")
        assert result == "Your cart is empty."

    @patch('utils.error_handler.Localizator')
    def test_insufficient_stock_is_formatted(self, mock_localizator):
        mock_localizator.get_text.return_value = "Only {available} left in stock, {requested} requested."

        exc = InsufficientStockException(product_id="p1", requested=3, available=1)
        result = handle_service_error(exc)

        assert result == "Only 1 left in stock, 3 requested."

    @patch('utils.error_handler.Localizator')
    def test_image_required_is_not_treated_as_generic_invalid_data(self, mock_localizator):
        mock_localizator.get_text.return_value = "Please upload an image for your product."

        handle_service_error(ImageRequiredException())

        mock_localizator.get_text.assert_called_with(MessageEntity.SELLER, "image_required", None)

    @patch('utils.error_handler.Localizator')
    def test_unmapped_exception_falls_back(self, mock_localizator):
        mock_localizator.get_text.return_value = "Something went wrong."

        handle_service_error(MarketplaceException("custom"))

        mock_localizator.get_text.assert_called_with(MessageEntity.COMMON, "error_unexpected", None)

    def test_real_texts(self):
        message = handle_service_error(CategoryNotFoundException("weapons"), "en")
        assert message == "The category 'weapons' does not exist."

        message = handle_service_error(PriceQuoteUnavailableException("LTC", "HTTP 500"), "de")
        assert message == "Aktueller LTC-Kurs konnte nicht geladen werden."

    @patch('utils.localizator.config.LANGUAGE', "de")
    def test_missing_language_uses_default_language(self):
        message = handle_service_error(CategoryNotFoundException("weapons"))

        assert message == "Die Kategorie 'weapons' existiert nicht."

    def test_unexpected_error(self):
        assert handle_unexpected_error(ValueError("boom"), "en") == "Something went wrong. Please try again."


class TestBuildErrorNotice:

    def test_insufficient_balance_toast(self):
        exc = InsufficientBalanceException("u1", Decimal("10.00"), Decimal("2.00"))

        notice = build_error_notice(exc, "de")

        assert notice == {
            "title": "Unzureichendes Guthaben",
            "description": "Sie haben nicht genügend Guthaben auf Ihrem Konto.",
            "variant": "destructive",
        }

    def test_generic_title(self):
        notice = build_error_notice(ProductNotFoundException("p1"), "en")

        assert notice["title"] == "Error"
        assert notice["variant"] == "destructive"


class TestHttpStatus:

    def test_status_codes(self):
        assert get_http_status(ProductNotFoundException("p1")) == 404
        assert get_http_status(SellerAccessDeniedException("u1", "user")) == 403
        assert get_http_status(InsufficientStockException("p1", 2, 1)) == 409
        assert get_http_status(InsufficientBalanceException("u1", 1, 0)) == 409
        assert get_http_status(EmptyCartException("u1")) == 400
        assert get_http_status(PriceQuoteUnavailableException("BTC", "timeout")) == 503
        assert get_http_status(RuntimeError()) == 500


class TestMappingTexts:

    @pytest.mark.parametrize("lang", ["de", "en"])
    def test_every_mapped_key_exists(self, lang):
        for entity, key in [*ERROR_MAPPING.values(), *TITLE_MAPPING.values()]:
            assert Localizator.get_text(entity, key, lang)

