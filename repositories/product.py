from sqlalchemy import select, update, delete, exists
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.order_item import OrderItem
from models.product import Product, ProductDTO


class ProductRepository:

    @staticmethod
    async def get_by_id(product_id: str, session: AsyncSession) -> ProductDTO | None:
        stmt = select(Product).where(Product.id == product_id)
        product = await session_execute(stmt, session)
        product = product.scalar()
        if product is None:
            return None
        return ProductDTO.model_validate(product, from_attributes=True)

    @staticmethod
    async def get_by_ids(product_ids: list[str], session: AsyncSession) -> dict[str, ProductDTO]:
        """
        Batch load products for multiple ids (eliminates N+1 queries).

        Returns:
            Dict mapping product_id -> ProductDTO
        """
        if not product_ids:
            return {}

        stmt = select(Product).where(Product.id.in_(product_ids))
        result = await session_execute(stmt, session)
        return {product.id: ProductDTO.model_validate(product, from_attributes=True)
                for product in result.scalars().all()}

    @staticmethod
    async def get_active(session: AsyncSession, category: str | None = None) -> list[ProductDTO]:
        stmt = select(Product).where(Product.is_active == True)
        if category is not None:
            stmt = stmt.where(Product.category == category)
        stmt = stmt.order_by(Product.created_at.desc())
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True) for product in products.scalars().all()]

    @staticmethod
    async def get_by_seller(seller_id: str, session: AsyncSession) -> list[ProductDTO]:
        stmt = (select(Product)
                .where(Product.seller_id == seller_id)
                .order_by(Product.created_at.desc()))
        products = await session_execute(stmt, session)
        return [ProductDTO.model_validate(product, from_attributes=True) for product in products.scalars().all()]

    @staticmethod
    async def create(product_dto: ProductDTO, session: AsyncSession) -> str:
        product = Product(**product_dto.model_dump(exclude_none=True))
        session.add(product)
        await session_flush(session)
        return product.id

    @staticmethod
    async def update(product_id: str, values: dict, session: AsyncSession) -> None:
        stmt = update(Product).where(Product.id == product_id).values(**values)
        await session_execute(stmt, session)

    @staticmethod
    async def decrement_stock(product_id: str, quantity: int, session: AsyncSession) -> bool:
        """
        Decrement stock only if enough units are left.

        The check and the write happen in a single UPDATE so two concurrent
        checkouts cannot both take the last unit.

        Returns:
            True if the row was updated, False if stock was insufficient
        """
        stmt = (update(Product)
                .where(Product.id == product_id, Product.stock >= quantity)
                .values(stock=Product.stock - quantity))
        result = await session_execute(stmt, session)
        return result.rowcount == 1

    @staticmethod
    async def delete(product_id: str, session: AsyncSession) -> None:
        stmt = delete(Product).where(Product.id == product_id)
        await session_execute(stmt, session)

    @staticmethod
    async def is_referenced_by_orders(product_id: str, session: AsyncSession) -> bool:
        stmt = select(exists().where(OrderItem.product_id == product_id))
        result = await session_execute(stmt, session)
        return bool(result.scalar())
