from decimal import Decimal

import pytest

from services.wallet import WalletService


class TestWalletService:

    @pytest.mark.asyncio
    async def test_balance_of_existing_wallet(self, test_session, make_profile):
        await make_profile("buyer-1", balance_eur=Decimal("12.34"))

        wallet = await WalletService.get_balance("buyer-1", test_session)

        assert wallet.balance_eur == Decimal("12.34")
        assert wallet.balance_btc == Decimal("0")
        assert wallet.balance_ltc == Decimal("0")

    @pytest.mark.asyncio
    async def test_missing_wallet_reads_as_zero(self, test_session, make_profile):
        await make_profile("buyer-1", with_wallet=False)

        wallet = await WalletService.get_balance("buyer-1", test_session)

        assert wallet.balance_eur == Decimal("0")

    @pytest.mark.asyncio
    async def test_get_or_create_is_idempotent(self, test_session, make_profile):
        await make_profile("buyer-1", with_wallet=False)

        first = await WalletService.get_or_create("buyer-1", test_session)
        second = await WalletService.get_or_create("buyer-1", test_session)

        assert first.balance_eur == Decimal("0")
        assert second.balance_eur == Decimal("0")
