from enum import Enum


class Cryptocurrency(str, Enum):
    BTC = "BTC"
    LTC = "LTC"

    def get_divider(self) -> int:
        """
        Returns the number of decimal places for this cryptocurrency.

        Values are read from config.CRYPTO_DECIMAL_PLACES, which can be
        overridden via environment variables (CRYPTO_DECIMALS_BTC, CRYPTO_DECIMALS_LTC).
        """
        # Import here to avoid circular dependency
        import config

        return config.CRYPTO_DECIMAL_PLACES.get(self.value, 8)

    def get_coingecko_name(self) -> str:
        match self:
            case Cryptocurrency.BTC:
                return "bitcoin"
            case Cryptocurrency.LTC:
                return "litecoin"

    @staticmethod
    def get_payment_options() -> list['Cryptocurrency']:
        """
        Returns the cryptocurrencies offered in the payment method dialog.
        Order defines display order.
        """
        return [
            Cryptocurrency.BTC,
            Cryptocurrency.LTC,
        ]
