"""
Unit Tests: price quotes

Tests for crypto_api/CryptoApiWrapper.py and services/price.py covering:
- Parsing of the CoinGecko simple/price response
- Failures surfacing as PriceQuoteUnavailableException / None
- EUR to coin conversion
"""

import asyncio
from decimal import Decimal
from unittest.mock import AsyncMock, patch

import aiohttp
import pytest
from aiohttp import web
from aiohttp import test_utils

import config
from crypto_api.CryptoApiWrapper import CryptoApiWrapper
from enums.cryptocurrency import Cryptocurrency
from exceptions.payment import PriceQuoteUnavailableException
from services.price import PriceService

FETCH = 'crypto_api.CryptoApiWrapper.CryptoApiWrapper.fetch_api_request'


async def serve_price_body(body: str) -> test_utils.TestServer:
    """Local stand-in for the CoinGecko endpoint answering with a fixed JSON body."""
    async def simple_price(request):
        return web.Response(text=body, content_type="application/json")

    app = web.Application()
    app.router.add_get("/simple/price", simple_price)
    server = test_utils.TestServer(app)
    await server.start_server()
    return server


class TestCryptoApiWrapper:

    @pytest.mark.asyncio
    async def test_requests_simple_price_endpoint(self):
        with patch(FETCH, new=AsyncMock(return_value={"bitcoin": {"eur": 58000.12}})) as mock_fetch:
            price = await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)

        assert price == Decimal("58000.12")
        url = mock_fetch.call_args.args[0]
        params = mock_fetch.call_args.kwargs["params"]
        assert url.endswith("/simple/price")
        assert params == {"ids": "bitcoin", "vs_currencies": "eur"}

    @pytest.mark.asyncio
    async def test_litecoin_uses_coingecko_id(self):
        with patch(FETCH, new=AsyncMock(return_value={"litecoin": {"eur": 70.3}})) as mock_fetch:
            price = await CryptoApiWrapper.get_eur_price(Cryptocurrency.LTC)

        assert price == Decimal("70.3")
        assert mock_fetch.call_args.kwargs["params"]["ids"] == "litecoin"

    @pytest.mark.asyncio
    async def test_malformed_body_raises(self):
        with patch(FETCH, new=AsyncMock(return_value={"error": "rate limited"})):
            with pytest.raises(PriceQuoteUnavailableException) as exc_info:
                await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)
        assert exc_info.value.cryptocurrency == "BTC"

    @pytest.mark.asyncio
    async def test_network_error_raises(self):
        with patch(FETCH, new=AsyncMock(side_effect=aiohttp.ClientConnectionError("unreachable"))):
            with pytest.raises(PriceQuoteUnavailableException):
                await CryptoApiWrapper.get_eur_price(Cryptocurrency.LTC)

    @pytest.mark.asyncio
    async def test_timeout_raises(self):
        with patch(FETCH, new=AsyncMock(side_effect=asyncio.TimeoutError())):
            with pytest.raises(PriceQuoteUnavailableException):
                await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)

    @pytest.mark.asyncio
    async def test_undecodable_json_body_raises(self):
        server = await serve_price_body("{not json")
        try:
            with patch.object(config, "COINGECKO_API_URL", f"http://{server.host}:{server.port}"):
                with pytest.raises(PriceQuoteUnavailableException) as exc_info:
                    await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)
        finally:
            await server.close()
        assert "undecodable" in exc_info.value.reason

    @pytest.mark.asyncio
    async def test_price_from_http_response(self):
        server = await serve_price_body('{"bitcoin": {"eur": 61234.5}}')
        try:
            with patch.object(config, "COINGECKO_API_URL", f"http://{server.host}:{server.port}"):
                price = await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)
        finally:
            await server.close()
        assert price == Decimal("61234.5")

    @pytest.mark.asyncio
    async def test_nan_price_raises(self):
        with patch(FETCH, new=AsyncMock(return_value={"bitcoin": {"eur": "NaN"}})):
            with pytest.raises(PriceQuoteUnavailableException):
                await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)

    @pytest.mark.asyncio
    async def test_zero_price_raises(self):
        with patch(FETCH, new=AsyncMock(return_value={"bitcoin": {"eur": 0}})):
            with pytest.raises(PriceQuoteUnavailableException):
                await CryptoApiWrapper.get_eur_price(Cryptocurrency.BTC)


class TestPriceService:

    @pytest.mark.asyncio
    async def test_failure_returns_none(self):
        error = PriceQuoteUnavailableException("BTC", "HTTP 429")
        with patch('services.price.CryptoApiWrapper.get_eur_price', new=AsyncMock(side_effect=error)):
            assert await PriceService.get_eur_price(Cryptocurrency.BTC) is None

    @pytest.mark.asyncio
    async def test_undecodable_body_returns_none(self):
        server = await serve_price_body("{not json")
        try:
            with patch.object(config, "COINGECKO_API_URL", f"http://{server.host}:{server.port}"):
                assert await PriceService.get_eur_price(Cryptocurrency.LTC) is None
        finally:
            await server.close()

    @pytest.mark.asyncio
    async def test_quotes_for_all_payment_options(self):
        prices = {Cryptocurrency.BTC: Decimal("50000"), Cryptocurrency.LTC: Decimal("60")}

        async def fake_price(crypto):
            return prices[crypto]

        with patch('services.price.CryptoApiWrapper.get_eur_price', new=AsyncMock(side_effect=fake_price)):
            quotes = await PriceService.get_quotes()

        assert quotes == prices

    def test_convert_rounds_to_smallest_unit(self):
        amount = PriceService.convert(Decimal("10.00"), Decimal("30000"), Cryptocurrency.BTC)
        assert amount == Decimal("0.00033333")

    def test_convert_without_quote(self):
        assert PriceService.convert(Decimal("10.00"), None, Cryptocurrency.LTC) is None
