import asyncio
import logging
from decimal import Decimal, InvalidOperation

import aiohttp

import config
from enums.cryptocurrency import Cryptocurrency
from exceptions.payment import PriceQuoteUnavailableException

logger = logging.getLogger(__name__)


class CryptoApiWrapper:

    @staticmethod
    async def fetch_api_request(url: str, params: dict | None = None, method: str = "GET",
                                data: str | None = None, headers: dict | None = None) -> dict:
        timeout = aiohttp.ClientTimeout(total=config.PRICE_API_TIMEOUT_SECONDS)
        async with aiohttp.ClientSession(timeout=timeout) as session:
            async with session.request(method, url, params=params, data=data, headers=headers) as response:
                response.raise_for_status()
                return await response.json()

    @staticmethod
    async def get_crypto_prices(cryptocurrencies: list[Cryptocurrency] | None = None) -> dict:
        """
        Fetch spot prices from the CoinGecko simple/price endpoint.

        Returns:
            Raw response, e.g. {"bitcoin": {"eur": 58000.12}, "litecoin": {"eur": 70.3}}
        """
        if cryptocurrencies is None:
            cryptocurrencies = Cryptocurrency.get_payment_options()
        params = {
            "ids": ",".join(crypto.get_coingecko_name() for crypto in cryptocurrencies),
            "vs_currencies": config.CURRENCY.value.lower(),
        }
        return await CryptoApiWrapper.fetch_api_request(f"{config.COINGECKO_API_URL}/simple/price", params=params)

    @staticmethod
    async def get_eur_price(cryptocurrency: Cryptocurrency) -> Decimal:
        """
        Price of one coin in EUR.

        Raises:
            PriceQuoteUnavailableException: network error, HTTP error status or malformed body
        """
        try:
            prices = await CryptoApiWrapper.get_crypto_prices([cryptocurrency])
        except aiohttp.ClientResponseError as e:
            raise PriceQuoteUnavailableException(cryptocurrency.value, f"HTTP {e.status}")
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise PriceQuoteUnavailableException(cryptocurrency.value, f"{type(e).__name__}: {e}")
        except ValueError as e:
            # Body is not valid JSON
            raise PriceQuoteUnavailableException(cryptocurrency.value, f"undecodable response: {e}")

        try:
            price = Decimal(str(prices[cryptocurrency.get_coingecko_name()][config.CURRENCY.value.lower()]))
        except (KeyError, TypeError, InvalidOperation):
            raise PriceQuoteUnavailableException(cryptocurrency.value, f"malformed response: {prices}")

        if not price.is_finite() or price <= 0:
            raise PriceQuoteUnavailableException(cryptocurrency.value, f"invalid price {price}")
        return price
