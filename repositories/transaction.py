from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.transaction import Transaction, TransactionDTO


class TransactionRepository:
    @staticmethod
    async def create(transaction_dto: TransactionDTO, session: AsyncSession) -> str:
        transaction = Transaction(**transaction_dto.model_dump(exclude_none=True))
        session.add(transaction)
        await session_flush(session)
        return transaction.id

    @staticmethod
    async def get_by_user_id(user_id: str, session: AsyncSession) -> list[TransactionDTO]:
        stmt = select(Transaction).where(Transaction.user_id == user_id).order_by(Transaction.created_at.desc())
        transactions = await session_execute(stmt, session)
        return [TransactionDTO.model_validate(transaction, from_attributes=True)
                for transaction in transactions.scalars().all()]

    @staticmethod
    async def delete_by_user_id(user_id: str, session: AsyncSession) -> None:
        stmt = delete(Transaction).where(Transaction.user_id == user_id)
        await session_execute(stmt, session)
