from sqlalchemy.ext.asyncio import AsyncSession

from db import session_flush
from models.order_item import OrderItem, OrderItemDTO


class OrderItemRepository:
    @staticmethod
    async def create_many(order_item_dtos: list[OrderItemDTO], session: AsyncSession) -> None:
        if not order_item_dtos:
            return
        rows = [OrderItem(**dto.model_dump(exclude_none=True)) for dto in order_item_dtos]
        session.add_all(rows)
        await session_flush(session)

