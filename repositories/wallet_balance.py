from decimal import Decimal

from sqlalchemy import select, update, delete, func
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush, session_refresh
from models.wallet_balance import WalletBalance, WalletBalanceDTO


class WalletBalanceRepository:
    @staticmethod
    async def get_by_user_id(user_id: str, session: AsyncSession) -> WalletBalanceDTO | None:
        stmt = (select(WalletBalance)
                .where(WalletBalance.user_id == user_id)
                .execution_options(populate_existing=True))
        wallet = await session_execute(stmt, session)
        wallet = wallet.scalar()
        if wallet is None:
            return None
        return WalletBalanceDTO.model_validate(wallet, from_attributes=True)

    @staticmethod
    async def get_or_create(user_id: str, session: AsyncSession) -> WalletBalanceDTO:
        wallet = await WalletBalanceRepository.get_by_user_id(user_id, session)
        if wallet is not None:
            return wallet
        wallet = WalletBalance(user_id=user_id, balance_eur=0, balance_btc=0, balance_ltc=0)
        session.add(wallet)
        await session_flush(session)
        await session_refresh(session, wallet)
        return WalletBalanceDTO.model_validate(wallet, from_attributes=True)

    @staticmethod
    async def debit_eur(user_id: str, amount: Decimal, session: AsyncSession) -> bool:
        """
        Debit EUR balance only if it covers the amount.

        Returns:
            True if the balance was debited, False if it was insufficient
            or the wallet row does not exist
        """
        # SQLite keeps NUMERIC as REAL, compare and store at cent precision
        stmt = (update(WalletBalance)
                .where(WalletBalance.user_id == user_id,
                       func.round(WalletBalance.balance_eur, 2, type_=WalletBalance.balance_eur.type) >= amount)
                .values(balance_eur=func.round(WalletBalance.balance_eur - amount, 2))
                .execution_options(synchronize_session=False))
        result = await session_execute(stmt, session)
        return result.rowcount == 1

    @staticmethod
    async def delete_by_user_id(user_id: str, session: AsyncSession) -> None:
        stmt = delete(WalletBalance).where(WalletBalance.user_id == user_id)
        await session_execute(stmt, session)
