import logging
from decimal import Decimal, InvalidOperation

from sqlalchemy.ext.asyncio import AsyncSession

from db import session_commit
from enums.user_role import UserRole
from exceptions.product import (
    ProductNotFoundException,
    InvalidProductDataException,
    ImageRequiredException,
    CategoryNotFoundException,
    ProductOwnershipException,
)
from exceptions.profile import SellerAccessDeniedException
from models.product import ProductDTO, ProductFormDTO
from models.profile import ProfileDTO
from repositories.cart_item import CartItemRepository
from repositories.category import CategoryRepository
from repositories.product import ProductRepository
from services.profile import ProfileService

logger = logging.getLogger(__name__)


# products.price is NUMERIC(12, 2)
MAX_PRICE = Decimal("9999999999.99")


def parse_price(value: str | Decimal | None) -> Decimal:
    try:
        price = Decimal(str(value).strip().replace(",", "."))
    except (InvalidOperation, AttributeError):
        raise InvalidProductDataException("price", f"'{value}' is not a number")
    if not price.is_finite() or price <= 0:
        raise InvalidProductDataException("price", "must be greater than 0")
    if price > MAX_PRICE:
        raise InvalidProductDataException("price", f"must not exceed {MAX_PRICE}")
    price = price.quantize(Decimal("0.01"))
    if price <= 0:
        raise InvalidProductDataException("price", "must be at least 0.01")
    return price


def parse_stock(value: str | int | None) -> int:
    try:
        stock = int(str(value).strip())
    except ValueError:
        raise InvalidProductDataException("stock", f"'{value}' is not a whole number")
    if stock < 0:
        raise InvalidProductDataException("stock", "must not be negative")
    return stock


class SellerService:

    @staticmethod
    async def require_seller(user_id: str, session: AsyncSession) -> ProfileDTO:
        profile = await ProfileService.get(user_id, session)
        if not UserRole(profile.role).can_sell():
            raise SellerAccessDeniedException(user_id, profile.role)
        return profile

    @staticmethod
    async def _get_owned_product(profile: ProfileDTO, product_id: str, session: AsyncSession) -> ProductDTO:
        product = await ProductRepository.get_by_id(product_id, session)
        if product is None:
            raise ProductNotFoundException(product_id)
        if product.seller_id != profile.user_id and UserRole(profile.role) != UserRole.ADMIN:
            raise ProductOwnershipException(product_id, profile.user_id)
        return product

    @staticmethod
    async def _validate_category(category: str | None, session: AsyncSession) -> str:
        if not category:
            raise InvalidProductDataException("category", "is required")
        if await CategoryRepository.get_by_name(category, session) is None:
            raise CategoryNotFoundException(category)
        return category

    @staticmethod
    async def list_products(user_id: str, session: AsyncSession) -> list[ProductDTO]:
        await SellerService.require_seller(user_id, session)
        return await ProductRepository.get_by_seller(user_id, session)

    @staticmethod
    async def add_product(user_id: str, form: ProductFormDTO, session: AsyncSession) -> ProductDTO:
        await SellerService.require_seller(user_id, session)

        if not form.image_url:
            raise ImageRequiredException()
        title = (form.title or "").strip()
        if not title:
            raise InvalidProductDataException("title", "is required")
        category = await SellerService._validate_category(form.category, session)

        product_id = await ProductRepository.create(ProductDTO(
            title=title,
            description=form.description or None,
            price=parse_price(form.price),
            category=category,
            image_url=form.image_url,
            stock=parse_stock(form.stock),
            is_active=True,
            seller_id=user_id,
        ), session)
        await session_commit(session)
        logger.info(f"Seller {user_id} added product {product_id}")
        return await ProductRepository.get_by_id(product_id, session)

    @staticmethod
    async def update_product(user_id: str, product_id: str, changes: ProductFormDTO,
                             session: AsyncSession) -> ProductDTO:
        """Applies the fields set in the edit dialog, unset fields stay unchanged."""
        profile = await SellerService.require_seller(user_id, session)
        await SellerService._get_owned_product(profile, product_id, session)

        values = {}
        if changes.title is not None:
            title = changes.title.strip()
            if not title:
                raise InvalidProductDataException("title", "is required")
            values["title"] = title
        if changes.description is not None:
            values["description"] = changes.description or None
        if changes.price is not None:
            values["price"] = parse_price(changes.price)
        if changes.stock is not None:
            values["stock"] = parse_stock(changes.stock)
        if changes.category is not None:
            values["category"] = await SellerService._validate_category(changes.category, session)
        if changes.image_url is not None:
            if not changes.image_url:
                raise ImageRequiredException()
            values["image_url"] = changes.image_url

        if values:
            await ProductRepository.update(product_id, values, session)
            await session_commit(session)
        return await ProductRepository.get_by_id(product_id, session)

    @staticmethod
    async def toggle_status(user_id: str, product_id: str, session: AsyncSession) -> ProductDTO:
        profile = await SellerService.require_seller(user_id, session)
        product = await SellerService._get_owned_product(profile, product_id, session)
        await ProductRepository.update(product_id, {"is_active": not product.is_active}, session)
        await session_commit(session)
        logger.info(f"Product {product_id} {'deactivated' if product.is_active else 'activated'} by {user_id}")
        return await ProductRepository.get_by_id(product_id, session)

    @staticmethod
    async def delete_product(user_id: str, product_id: str, session: AsyncSession) -> bool:
        """
        Deletes the product and removes it from all carts.

        Products that already appear in orders are deactivated instead, order
        history keeps pointing at them.

        Returns:
            True if the row was deleted, False if it was only deactivated
        """
        profile = await SellerService.require_seller(user_id, session)
        await SellerService._get_owned_product(profile, product_id, session)

        await CartItemRepository.delete_by_product_id(product_id, session)
        if await ProductRepository.is_referenced_by_orders(product_id, session):
            await ProductRepository.update(product_id, {"is_active": False}, session)
            deleted = False
        else:
            await ProductRepository.delete(product_id, session)
            deleted = True
        await session_commit(session)
        logger.info(f"Product {product_id} {'deleted' if deleted else 'deactivated (ordered before)'} by {user_id}")
        return deleted
