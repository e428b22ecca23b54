from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from db import session_execute, session_flush
from models.category import Category, CategoryDTO


class CategoryRepository:
    @staticmethod
    async def get_all(session: AsyncSession) -> list[CategoryDTO]:
        stmt = select(Category).order_by(Category.name)
        categories = await session_execute(stmt, session)
        return [CategoryDTO.model_validate(category, from_attributes=True)
                for category in categories.scalars().all()]

    @staticmethod
    async def get_by_name(name: str, session: AsyncSession) -> CategoryDTO | None:
        stmt = select(Category).where(Category.name == name)
        category = await session_execute(stmt, session)
        category = category.scalar()
        if category is None:
            return None
        return CategoryDTO.model_validate(category, from_attributes=True)

    @staticmethod
    async def create(name: str, session: AsyncSession) -> str:
        category = Category(name=name)
        session.add(category)
        await session_flush(session)
        return category.id
