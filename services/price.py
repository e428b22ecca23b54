import logging
from decimal import Decimal, ROUND_HALF_UP

from crypto_api.CryptoApiWrapper import CryptoApiWrapper
from enums.cryptocurrency import Cryptocurrency
from exceptions.payment import PriceQuoteUnavailableException

logger = logging.getLogger(__name__)


class PriceService:
    """
    EUR quotes for the accepted cryptocurrencies.

    Quotes are fetched on every call. A failed quote is logged and returned
    as None so the cart and the payment dialog still render without a
    crypto amount.
    """

    @staticmethod
    async def get_eur_price(cryptocurrency: Cryptocurrency) -> Decimal | None:
        try:
            return await CryptoApiWrapper.get_eur_price(cryptocurrency)
        except PriceQuoteUnavailableException as e:
            logger.error(f"Failed to fetch {cryptocurrency.value} price: {e.reason}")
            return None

    @staticmethod
    async def get_quotes() -> dict[Cryptocurrency, Decimal | None]:
        return {crypto: await PriceService.get_eur_price(crypto)
                for crypto in Cryptocurrency.get_payment_options()}

    @staticmethod
    def convert(amount_eur: Decimal, price_eur: Decimal | None,
                cryptocurrency: Cryptocurrency) -> Decimal | None:
        """EUR amount in coins, rounded to the coin's smallest unit."""
        if price_eur is None or price_eur <= 0:
            return None
        quantum = Decimal(1).scaleb(-cryptocurrency.get_divider())
        return (amount_eur / price_eur).quantize(quantum, rounding=ROUND_HALF_UP)
