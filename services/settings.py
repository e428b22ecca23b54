import logging

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from enums.theme import Theme
from exceptions.profile import ProfileNotFoundException
from models.profile import ProfileDTO
from repositories.bitcoin_address import BitcoinAddressRepository
from repositories.cart_item import CartItemRepository
from repositories.order import OrderRepository
from repositories.product import ProductRepository
from repositories.profile import ProfileRepository
from repositories.transaction import TransactionRepository
from repositories.wallet_balance import WalletBalanceRepository
from services.profile import ProfileService
from utils.transaction_manager import TransactionManager

logger = logging.getLogger(__name__)


class SettingsService:

    @staticmethod
    async def get_theme(user_id: str, session: AsyncSession) -> Theme:
        profile = await ProfileService.get(user_id, session)
        if profile.theme_preference is None:
            return Theme.LIGHT
        return Theme(profile.theme_preference)

    @staticmethod
    async def set_theme(user_id: str, theme: Theme, session: AsyncSession) -> Theme:
        await ProfileService.get(user_id, session)
        await ProfileRepository.update(ProfileDTO(user_id=user_id, theme_preference=theme), session)
        await session_commit(session)
        return theme

    @staticmethod
    async def toggle_theme(user_id: str, session: AsyncSession) -> Theme:
        theme = await SettingsService.get_theme(user_id, session)
        return await SettingsService.set_theme(user_id, theme.toggled(), session)

    @staticmethod
    @TransactionManager.with_retry()
    async def delete_account(user_id: str, session: AsyncSession | None = None) -> None:
        """
        Permanently deletes the account and everything it owns.

        Removed in one transaction: cart items, transactions, wallet balance,
        bitcoin addresses, orders with their items, the seller's products and
        the profile. Products that appear in other users' orders are
        deactivated and detached from the seller instead of deleted.
        """
        async with TransactionManager.atomic_transaction(session) as session:
            profile = await ProfileRepository.get_by_user_id(user_id, session)
            if profile is None:
                raise ProfileNotFoundException(user_id)

            await CartItemRepository.delete_by_user_id(user_id, session)
            await TransactionRepository.delete_by_user_id(user_id, session)
            await WalletBalanceRepository.delete_by_user_id(user_id, session)
            await BitcoinAddressRepository.delete_by_user_id(user_id, session)
            await OrderRepository.delete_by_user_id(user_id, session)

            kept_products = 0
            for product in await ProductRepository.get_by_seller(user_id, session):
                await CartItemRepository.delete_by_product_id(product.id, session)
                if await ProductRepository.is_referenced_by_orders(product.id, session):
                    await ProductRepository.update(product.id, {"is_active": False, "seller_id": None}, session)
                    kept_products += 1
                else:
                    await ProductRepository.delete(product.id, session)

            await ProfileRepository.delete_by_user_id(user_id, session)

        logger.info(f"Account {user_id} deleted ({kept_products} ordered products kept inactive)")
