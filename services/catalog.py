from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from exceptions.product import ProductNotFoundException, InvalidProductDataException
from models.category import CategoryDTO
from models.product import ProductDTO
from repositories.category import CategoryRepository
from repositories.product import ProductRepository


class CatalogService:

    @staticmethod
    async def list_categories(session: AsyncSession) -> list[CategoryDTO]:
        return await CategoryRepository.get_all(session)

    @staticmethod
    async def create_category(name: str, session: AsyncSession) -> CategoryDTO:
        name = (name or "").strip()
        if not name:
            raise InvalidProductDataException("category", "name is required")
        category = await CategoryRepository.get_by_name(name, session)
        if category is None:
            await CategoryRepository.create(name, session)
            await session_commit(session)
            category = await CategoryRepository.get_by_name(name, session)
        return category

    @staticmethod
    async def list_active_products(session: AsyncSession, category: str | None = None) -> list[ProductDTO]:
        # "all" is the listing's unfiltered tab
        if category in (None, "", "all"):
            category = None
        return await ProductRepository.get_active(session, category)

    @staticmethod
    async def get_product(product_id: str, session: AsyncSession) -> ProductDTO:
        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        return product
