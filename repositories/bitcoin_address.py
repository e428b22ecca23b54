from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.bitcoin_address import BitcoinAddress, BitcoinAddressDTO


class BitcoinAddressRepository:
    @staticmethod
    async def create(user_id: str, address: str, private_key_encrypted: str, session: AsyncSession) -> str:
        bitcoin_address = BitcoinAddress(user_id=user_id, address=address,
                                         private_key_encrypted=private_key_encrypted)
        session.add(bitcoin_address)
        await session_flush(session)
        return bitcoin_address.id

    @staticmethod
    async def get_active_by_user_id(user_id: str, session: AsyncSession) -> list[BitcoinAddressDTO]:
        stmt = (select(BitcoinAddress)
                .where(BitcoinAddress.user_id == user_id, BitcoinAddress.is_active == True)
                .order_by(BitcoinAddress.created_at.desc()))
        addresses = await session_execute(stmt, session)
        return [BitcoinAddressDTO.model_validate(address, from_attributes=True)
                for address in addresses.scalars().all()]

    @staticmethod
    async def get_encrypted_key(address_id: str, user_id: str, session: AsyncSession) -> str | None:
        stmt = select(BitcoinAddress.private_key_encrypted).where(BitcoinAddress.id == address_id,
                                                                 BitcoinAddress.user_id == user_id)
        result = await session_execute(stmt, session)
        return result.scalar()

    @staticmethod
    async def delete_by_user_id(user_id: str, session: AsyncSession) -> None:
        stmt = delete(BitcoinAddress).where(BitcoinAddress.user_id == user_id)
        await session_execute(stmt, session)
