import logging
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from enums.cryptocurrency import Cryptocurrency
from exceptions.cart import CartItemNotFoundException
from exceptions.product import ProductNotFoundException, ProductInactiveException, InvalidProductDataException
from models.cart_item import CartItemDTO, CartSummaryDTO
from repositories.cart_item import CartItemRepository
from repositories.product import ProductRepository
from services.price import PriceService
from services.wallet import WalletService

logger = logging.getLogger(__name__)

EUR_QUANTUM = Decimal("0.01")


def format_crypto_amount(amount: Decimal | None) -> str:
    """
    Formats crypto amount to avoid scientific notation.

    Examples:
        9E-6 BTC → 0.000009 BTC
        0.00042156 BTC → 0.00042156 BTC
        1.5 BTC → 1.5 BTC
        None → "-" (quote unavailable)
    """
    if amount is None:
        return "-"
    formatted = f"{amount:.8f}"
    formatted = formatted.rstrip('0').rstrip('.')
    return formatted


def calculate_total_eur(items: list[CartItemDTO]) -> Decimal:
    total = sum((item.line_total for item in items), Decimal("0"))
    return total.quantize(EUR_QUANTUM, rounding=ROUND_HALF_UP)


class CartService:

    @staticmethod
    async def get_items(user_id: str, session: AsyncSession) -> list[CartItemDTO]:
        return await CartItemRepository.get_by_user_id(user_id, session)

    @staticmethod
    async def add_product(user_id: str, product_id: str, session: AsyncSession, quantity: int = 1) -> CartItemDTO:
        """
        Adds a product to the cart, or raises the quantity of its existing line.

        Title, price, image and category are copied from the product at this moment.
        """
        if quantity < 1:
            raise InvalidProductDataException("quantity", "must be at least 1")

        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        if not product.is_active:
            raise ProductInactiveException(product_id)

        cart_item = await CartItemRepository.get_by_product(user_id, product_id, session)
        if cart_item is not None:
            await CartItemRepository.update_quantity(user_id, product_id, cart_item.quantity + quantity, session)
        else:
            await CartItemRepository.create(CartItemDTO(
                user_id=user_id,
                product_id=product.id,
                title=product.title,
                price=product.price,
                quantity=quantity,
                image_url=product.image_url,
                category=product.category,
            ), session)
        await session_commit(session)
        logger.info(f"User {user_id} added {quantity}x product {product_id} to cart")
        return await CartItemRepository.get_by_product(user_id, product_id, session)

    @staticmethod
    async def update_quantity(user_id: str, product_id: str, quantity: int,
                              session: AsyncSession) -> CartItemDTO | None:
        """
        Sets the quantity of a cart line. Quantity is floored at 0, and 0 removes the line.

        Returns:
            The updated line, or None when it was removed
        """
        cart_item = await CartItemRepository.get_by_product(user_id, product_id, session)
        if cart_item is None:
            raise CartItemNotFoundException(user_id, product_id)

        quantity = max(0, quantity)
        if quantity == 0:
            await CartItemRepository.delete(user_id, product_id, session)
            await session_commit(session)
            return None

        await CartItemRepository.update_quantity(user_id, product_id, quantity, session)
        await session_commit(session)
        return await CartItemRepository.get_by_product(user_id, product_id, session)

    @staticmethod
    async def remove_item(user_id: str, product_id: str, session: AsyncSession) -> None:
        await CartItemRepository.delete(user_id, product_id, session)
        await session_commit(session)

    @staticmethod
    async def clear(user_id: str, session: AsyncSession) -> None:
        await CartItemRepository.delete_by_user_id(user_id, session)
        await session_commit(session)

    @staticmethod
    async def get_summary(user_id: str, session: AsyncSession) -> CartSummaryDTO:
        items = await CartItemRepository.get_by_user_id(user_id, session)
        total_eur = calculate_total_eur(items)
        wallet = await WalletService.get_balance(user_id, session)

        summary = CartSummaryDTO(
            items=items,
            item_count=sum(item.quantity for item in items),
            total_eur=total_eur,
            wallet=wallet,
        )
        if not items:
            return summary

        quotes = await PriceService.get_quotes()
        summary.btc_price_eur = quotes[Cryptocurrency.BTC]
        summary.ltc_price_eur = quotes[Cryptocurrency.LTC]
        summary.total_btc = PriceService.convert(total_eur, summary.btc_price_eur, Cryptocurrency.BTC)
        summary.total_ltc = PriceService.convert(total_eur, summary.ltc_price_eur, Cryptocurrency.LTC)
        return summary
