import logging
from datetime import datetime
from decimal import Decimal, ROUND_HALF_UP

from sqlalchemy.ext.asyncio import AsyncSession

from enums.cryptocurrency import Cryptocurrency
from enums.order_status import OrderStatus
from enums.transaction_status import TransactionStatus
from enums.transaction_type import TransactionType
from exceptions.cart import EmptyCartException
from exceptions.order import InsufficientStockException
from exceptions.payment import PaymentMethodNotSelectedException
from exceptions.product import ProductNotFoundException, ProductInactiveException
from exceptions.wallet import InsufficientBalanceException
from models.order import OrderDTO
from models.order_item import OrderItemDTO
from models.payment import CheckoutReceiptDTO
from models.transaction import TransactionDTO
from repositories.cart_item import CartItemRepository
from repositories.order import OrderRepository
from repositories.order_item import OrderItemRepository
from repositories.product import ProductRepository
from repositories.transaction import TransactionRepository
from repositories.wallet_balance import WalletBalanceRepository
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class CheckoutService:

    @staticmethod
    @TransactionManager.with_retry()
    async def checkout(user_id: str, payment_method: Cryptocurrency | None,
                       session: AsyncSession | None = None) -> CheckoutReceiptDTO:
        """
        Turns the user's cart into an order paid from the EUR wallet balance.

        All writes happen in one transaction:
            1. Create order (status pending)
            2. Create order items with the current product price
            3. Decrement stock (only if enough units are left)
            4. Debit wallet (only if the balance covers the total)
            5. Record purchase transaction
            6. Clear cart

        Any failure rolls back every step, the cart stays as it was.

        Raises:
            PaymentMethodNotSelectedException: no BTC/LTC method chosen
            EmptyCartException: cart has no lines
            ProductNotFoundException / ProductInactiveException: product vanished or was deactivated
            InsufficientStockException: fewer units left than requested
            InsufficientBalanceException: EUR balance does not cover the total
        """
        if payment_method is None:
            raise PaymentMethodNotSelectedException(user_id)

        async with TransactionManager.atomic_transaction(session) as session:
            cart_items = await CartItemRepository.get_by_user_id(user_id, session)
            if not cart_items:
                raise EmptyCartException(user_id)

            # Prices are taken from products, the cart only holds a display snapshot
            products = await ProductRepository.get_by_ids([item.product_id for item in cart_items], session)
            order_items = []
            total = Decimal("0")
            for cart_item in cart_items:
                product = products.get(cart_item.product_id)
                if product is None:
                    raise ProductNotFoundException(cart_item.product_id)
                if not product.is_active:
                    raise ProductInactiveException(product.id)
                if product.stock < cart_item.quantity:
                    raise InsufficientStockException(product.id, cart_item.quantity, product.stock)
                total += product.price * cart_item.quantity
                order_items.append(OrderItemDTO(
                    product_id=product.id,
                    quantity=cart_item.quantity,
                    price_eur=product.price,
                ))
            total = total.quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)

            wallet = await WalletBalanceRepository.get_by_user_id(user_id, session)
            available = wallet.balance_eur if wallet else Decimal("0")
            if available < total:
                raise InsufficientBalanceException(user_id, total, available)

            order = await OrderRepository.create(OrderDTO(
                user_id=user_id,
                total_amount_eur=total,
                status=OrderStatus.PENDING,
            ), session)
            for order_item in order_items:
                order_item.order_id = order.id
            await OrderItemRepository.create_many(order_items, session)

            for order_item in order_items:
                decremented = await ProductRepository.decrement_stock(order_item.product_id, order_item.quantity,
                                                                      session)
                if not decremented:
                    # Stock changed since it was read
                    current = await ProductRepository.get_by_id(order_item.product_id, session)
                    raise InsufficientStockException(order_item.product_id, order_item.quantity,
                                                     current.stock if current else 0)

            if not await WalletBalanceRepository.debit_eur(user_id, total, session):
                wallet = await WalletBalanceRepository.get_by_user_id(user_id, session)
                raise InsufficientBalanceException(user_id, total, wallet.balance_eur if wallet else Decimal("0"))

            await TransactionRepository.create(TransactionDTO(
                user_id=user_id,
                amount_eur=-total,
                amount_btc=Decimal("0"),
                type=TransactionType.PURCHASE,
                status=TransactionStatus.CONFIRMED,
                description=f"Order #{order.short_id}",
                confirmed_at=datetime.now(),
            ), session)

            await CartItemRepository.delete_by_user_id(user_id, session)

            wallet = await WalletBalanceRepository.get_by_user_id(user_id, session)

        logger.info(f"Order {order.id} placed by user {user_id}: {total} EUR via {payment_method.value}")
        return CheckoutReceiptDTO(
            order_id=order.id,
            order_reference=order.short_id,
            total_eur=total,
            payment_method=payment_method,
            item_count=sum(item.quantity for item in order_items),
            new_balance_eur=wallet.balance_eur,
        )
