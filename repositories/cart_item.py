from sqlalchemy import select, update, delete
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.cart_item import CartItem, CartItemDTO


class CartItemRepository:
    @staticmethod
    async def get_by_user_id(user_id: str, session: AsyncSession) -> list[CartItemDTO]:
        stmt = select(CartItem).where(CartItem.user_id == user_id).order_by(CartItem.created_at)
        cart_items = await session_execute(stmt, session)
        return [CartItemDTO.model_validate(cart_item, from_attributes=True)
                for cart_item in cart_items.scalars().all()]

    @staticmethod
    async def get_by_product(user_id: str, product_id: str, session: AsyncSession) -> CartItemDTO | None:
        stmt = select(CartItem).where(CartItem.user_id == user_id, CartItem.product_id == product_id)
        cart_item = await session_execute(stmt, session)
        cart_item = cart_item.scalar()
        if cart_item is None:
            return None
        return CartItemDTO.model_validate(cart_item, from_attributes=True)

    @staticmethod
    async def create(cart_item_dto: CartItemDTO, session: AsyncSession) -> str:
        cart_item = CartItem(**cart_item_dto.model_dump(exclude_none=True))
        session.add(cart_item)
        await session_flush(session)
        return cart_item.id

    @staticmethod
    async def update_quantity(user_id: str, product_id: str, quantity: int, session: AsyncSession) -> None:
        stmt = (update(CartItem)
                .where(CartItem.user_id == user_id, CartItem.product_id == product_id)
                .values(quantity=quantity))
        await session_execute(stmt, session)

    @staticmethod
    async def delete(user_id: str, product_id: str, session: AsyncSession) -> None:
        stmt = delete(CartItem).where(CartItem.user_id == user_id, CartItem.product_id == product_id)
        await session_execute(stmt, session)

    @staticmethod
    async def delete_by_user_id(user_id: str, session: AsyncSession) -> None:
        stmt = delete(CartItem).where(CartItem.user_id == user_id)
        await session_execute(stmt, session)

    @staticmethod
    async def delete_by_product_id(product_id: str, session: AsyncSession) -> None:
        stmt = delete(CartItem).where(CartItem.product_id == product_id)
        await session_execute(stmt, session)
