"""
Unit Tests: PaymentService

Tests for services/payment.py covering:
- get_payment_options() conversion per cryptocurrency
- start_checkout() balance and empty cart checks
"""

from decimal import Decimal
from unittest.mock import AsyncMock, patch

import pytest

from enums.cryptocurrency import Cryptocurrency
from enums.user_role import UserRole
from exceptions.cart import EmptyCartException
from exceptions.wallet import InsufficientBalanceException
from models.wallet_balance import WalletBalanceDTO
from services.cart import CartService
from services.payment import PaymentService

QUOTES = {Cryptocurrency.BTC: Decimal("40000"), Cryptocurrency.LTC: Decimal("80")}


class TestGetPaymentOptions:

    def test_one_option_per_cryptocurrency(self):
        options = PaymentService.get_payment_options(
            Decimal("20.00"), WalletBalanceDTO(balance_eur=Decimal("50")), QUOTES)

        assert [o.cryptocurrency for o in options.options] == [Cryptocurrency.BTC, Cryptocurrency.LTC]
        assert options.options[0].amount == Decimal("0.0005")
        assert options.options[0].amount_display == "0.0005"
        assert options.options[1].amount == Decimal("0.25")
        assert all(o.available for o in options.options)
        assert options.sufficient_balance is True

    def test_missing_quote_marks_option_unavailable(self):
        quotes = {Cryptocurrency.BTC: None, Cryptocurrency.LTC: Decimal("80")}

        options = PaymentService.get_payment_options(Decimal("20.00"), WalletBalanceDTO(), quotes)

        btc = options.options[0]
        assert btc.amount is None
        assert btc.amount_display == "-"
        assert btc.available is False
        assert options.sufficient_balance is False


class TestStartCheckout:

    @pytest.mark.asyncio
    async def test_empty_cart(self, test_session, make_profile):
        await make_profile("buyer-1", balance_eur=Decimal("10"))

        with pytest.raises(EmptyCartException):
            await PaymentService.start_checkout("buyer-1", test_session)

    @pytest.mark.asyncio
    async def test_insufficient_balance(self, test_session, make_profile, make_product):
        seller = await make_profile("seller-1", UserRole.SELLER)
        await make_profile("buyer-1", balance_eur=Decimal("9.99"))
        product_id = await make_product(seller, price=Decimal("10.00"))
        await CartService.add_product("buyer-1", product_id, test_session)

        with patch('services.payment.PriceService.get_quotes', new=AsyncMock(return_value=QUOTES)) as mock_quotes:
            with pytest.raises(InsufficientBalanceException) as exc_info:
                await PaymentService.start_checkout("buyer-1", test_session)

        mock_quotes.assert_not_called()
        assert exc_info.value.required == Decimal("10.00")

    @pytest.mark.asyncio
    async def test_options_for_cart_total(self, test_session, make_profile, make_product):
        seller = await make_profile("seller-1", UserRole.SELLER)
        await make_profile("buyer-1", balance_eur=Decimal("100"))
        product_id = await make_product(seller, price=Decimal("10.00"))
        await CartService.add_product("buyer-1", product_id, test_session, quantity=2)

        with patch('services.payment.PriceService.get_quotes', new=AsyncMock(return_value=QUOTES)):
            options = await PaymentService.start_checkout("buyer-1", test_session)

        assert options.total_eur == Decimal("20.00")
        assert options.balance_eur == Decimal("100")
        assert options.options[1].amount == Decimal("0.25")
