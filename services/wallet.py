from sqlalchemy.ext.asyncio import AsyncSession

from models.wallet_balance import WalletBalanceDTO
from repositories.wallet_balance import WalletBalanceRepository


class WalletService:

    @staticmethod
    async def get_balance(user_id: str, session: AsyncSession) -> WalletBalanceDTO:
        """Balances of the user's wallet, all zero when no wallet row exists yet."""
        wallet = await WalletBalanceRepository.get_by_user_id(user_id, session)
        if wallet is None:
            return WalletBalanceDTO()
        return wallet

    @staticmethod
    async def get_or_create(user_id: str, session: AsyncSession) -> WalletBalanceDTO:
        return await WalletBalanceRepository.get_or_create(user_id, session)
