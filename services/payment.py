import logging
from decimal import Decimal

from sqlalchemy.ext.asyncio import AsyncSession

from enums.cryptocurrency import Cryptocurrency
from exceptions.cart import EmptyCartException
from exceptions.wallet import InsufficientBalanceException
from models.payment import PaymentOptionDTO, PaymentOptionsDTO
from models.wallet_balance import WalletBalanceDTO
from repositories.cart_item import CartItemRepository
from services.cart import calculate_total_eur, format_crypto_amount
from services.price import PriceService
from services.wallet import WalletService

logger = logging.getLogger(__name__)


class PaymentService:

    @staticmethod
    def get_payment_options(total_eur: Decimal, wallet: WalletBalanceDTO,
                            prices: dict[Cryptocurrency, Decimal | None]) -> PaymentOptionsDTO:
        """
        Builds the payment method dialog: one option per accepted cryptocurrency
        with the cart total converted at the current quote.
        """
        options = []
        for cryptocurrency in Cryptocurrency.get_payment_options():
            price = prices.get(cryptocurrency)
            amount = PriceService.convert(total_eur, price, cryptocurrency)
            options.append(PaymentOptionDTO(
                cryptocurrency=cryptocurrency,
                price_eur=price,
                amount=amount,
                amount_display=format_crypto_amount(amount),
                available=amount is not None,
            ))
        return PaymentOptionsDTO(
            total_eur=total_eur,
            balance_eur=wallet.balance_eur,
            sufficient_balance=wallet.balance_eur >= total_eur,
            options=options,
        )

    @staticmethod
    async def start_checkout(user_id: str, session: AsyncSession) -> PaymentOptionsDTO:
        """
        Opens the payment method dialog for the user's cart.

        Raises:
            EmptyCartException: cart has no lines
            InsufficientBalanceException: EUR balance does not cover the cart total
        """
        items = await CartItemRepository.get_by_user_id(user_id, session)
        if not items:
            raise EmptyCartException(user_id)

        total_eur = calculate_total_eur(items)
        wallet = await WalletService.get_balance(user_id, session)
        if wallet.balance_eur < total_eur:
            logger.info(f"User {user_id} cannot check out: balance {wallet.balance_eur} < total {total_eur}")
            raise InsufficientBalanceException(user_id, total_eur, wallet.balance_eur)

        prices = await PriceService.get_quotes()
        return PaymentService.get_payment_options(total_eur, wallet, prices)
