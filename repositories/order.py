from sqlalchemy import select, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush, session_refresh
from models.order import Order, OrderDTO


class OrderRepository:
    @staticmethod
    async def create(order_dto: OrderDTO, session: AsyncSession) -> OrderDTO:
        order = Order(**order_dto.model_dump(exclude_none=True))
        session.add(order)
        await session_flush(session)
        await session_refresh(session, order)
        return OrderDTO.model_validate(order, from_attributes=True)

    @staticmethod
    async def get_by_id(order_id: str, session: AsyncSession) -> OrderDTO | None:
        stmt = select(Order).where(Order.id == order_id)
        order = await session_execute(stmt, session)
        order = order.scalar()
        if order is not None:
            return OrderDTO.model_validate(order, from_attributes=True)
        else:
            return None

    @staticmethod
    async def get_by_user_id(user_id: str, session: AsyncSession) -> list[OrderDTO]:
        stmt = select(Order).where(Order.user_id == user_id).order_by(Order.created_at.desc())
        orders = await session_execute(stmt, session)
        return [OrderDTO.model_validate(order, from_attributes=True) for order in orders.scalars().all()]

    @staticmethod
    async def delete_by_user_id(user_id: str, session: AsyncSession) -> None:
        # order_items go with ON DELETE CASCADE
        stmt = delete(Order).where(Order.user_id == user_id)
        await session_execute(stmt, session)
