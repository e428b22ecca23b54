"""
JSON API for the marketplace front end.

Routes:
- Catalog: categories, active products
- Cart, wallet, payment options and checkout
- Seller dashboard (seller/admin role)
- Settings: theme, account deletion
- Privacy warning

Security:
- Bearer token (HMAC signed, max age) on every user route
- Service exceptions are rendered by the app as localized toast notices
"""

import logging
import uuid
from datetime import datetime
from decimal import Decimal

from fastapi import APIRouter, Depends, Request, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.ext.asyncio import AsyncSession

from enums.cryptocurrency import Cryptocurrency
from enums.message_entity import MessageEntity
from enums.theme import Theme
from models.bitcoin_address import BitcoinAddressDTO
from models.cart_item import CartItemDTO, CartSummaryDTO
from models.category import CategoryDTO
from models.payment import PaymentOptionsDTO
from models.privacy import PrivacyWarningDTO
from models.product import ProductDTO, ProductFormDTO
from models.profile import ProfileDTO
from models.wallet_balance import WalletBalanceDTO
from services.bitcoin_address import BitcoinAddressService
from services.cart import CartService
from services.catalog import CatalogService
from services.checkout import CheckoutService
from services.payment import PaymentService
from services.privacy import PrivacyService
from services.profile import ProfileService
from services.seller import SellerService
from services.settings import SettingsService
from services.wallet import WalletService
from utils.localizator import Localizator
from web.dependencies import get_session, get_lang, get_current_user_id, get_client_id

logger = logging.getLogger(__name__)

api_router = APIRouter(prefix="/api", tags=["api"])


def generate_correlation_id() -> str:
    """Generate unique correlation ID for request tracing."""
    return f"{datetime.now().strftime('%Y%m%d-%H%M%S')}-{uuid.uuid4().hex[:8]}"


def notice(entity: MessageEntity, title_key: str, description_key: str, lang: str, **kwargs) -> dict:
    return {
        "title": Localizator.get_text(entity, title_key, lang),
        "description": Localizator.get_text(entity, description_key, lang).format(**kwargs),
        "variant": "default",
    }


class ProfilePayload(BaseModel):
    username: str = Field(..., min_length=1, max_length=64)


class CartItemPayload(BaseModel):
    product_id: str = Field(..., min_length=1)
    quantity: int = Field(1, ge=1, le=1000)


class CartQuantityPayload(BaseModel):
    # Negative values are floored to 0, which removes the line
    quantity: int


class CheckoutPayload(BaseModel):
    payment_method: Cryptocurrency | None = None


class ThemePayload(BaseModel):
    theme: Theme


class BitcoinAddressPayload(BaseModel):
    address: str = Field(..., min_length=26, max_length=90)
    private_key: str = Field(..., min_length=1, max_length=256)


class CheckoutResponse(BaseModel):
    order_id: str
    order_reference: str
    total_eur: Decimal
    payment_method: Cryptocurrency
    item_count: int
    new_balance_eur: Decimal
    notice: dict


# ---------------------------------------------------------------- catalog

@api_router.get("/categories", response_model=list[CategoryDTO])
async def list_categories(session: AsyncSession = Depends(get_session)):
    return await CatalogService.list_categories(session)


@api_router.get("/products", response_model=list[ProductDTO])
async def list_products(category: str | None = Query(None), session: AsyncSession = Depends(get_session)):
    return await CatalogService.list_active_products(session, category)


@api_router.get("/products/{product_id}", response_model=ProductDTO)
async def get_product(product_id: str, session: AsyncSession = Depends(get_session)):
    return await CatalogService.get_product(product_id, session)


# ---------------------------------------------------------------- profile

@api_router.post("/profile", response_model=ProfileDTO)
async def create_profile(payload: ProfilePayload,
                         user_id: str = Depends(get_current_user_id),
                         session: AsyncSession = Depends(get_session)):
    return await ProfileService.create_if_not_exist(user_id, payload.username.strip(), session)


@api_router.get("/profile", response_model=ProfileDTO)
async def get_profile(user_id: str = Depends(get_current_user_id),
                      session: AsyncSession = Depends(get_session)):
    return await ProfileService.get(user_id, session)


# ---------------------------------------------------------------- cart

@api_router.get("/cart", response_model=CartSummaryDTO)
async def get_cart(user_id: str = Depends(get_current_user_id),
                   session: AsyncSession = Depends(get_session)):
    return await CartService.get_summary(user_id, session)


@api_router.post("/cart/items", response_model=CartItemDTO, status_code=status.HTTP_201_CREATED)
async def add_cart_item(payload: CartItemPayload,
                        user_id: str = Depends(get_current_user_id),
                        session: AsyncSession = Depends(get_session)):
    return await CartService.add_product(user_id, payload.product_id, session, payload.quantity)


@api_router.patch("/cart/items/{product_id}", response_model=CartItemDTO | None)
async def update_cart_item(product_id: str, payload: CartQuantityPayload,
                           user_id: str = Depends(get_current_user_id),
                           session: AsyncSession = Depends(get_session)):
    return await CartService.update_quantity(user_id, product_id, payload.quantity, session)


@api_router.delete("/cart/items/{product_id}", status_code=status.HTTP_204_NO_CONTENT)
async def remove_cart_item(product_id: str,
                           user_id: str = Depends(get_current_user_id),
                           session: AsyncSession = Depends(get_session)):
    await CartService.remove_item(user_id, product_id, session)


@api_router.delete("/cart", status_code=status.HTTP_204_NO_CONTENT)
async def clear_cart(user_id: str = Depends(get_current_user_id),
                     session: AsyncSession = Depends(get_session)):
    await CartService.clear(user_id, session)


# ---------------------------------------------------------------- wallet & checkout

@api_router.get("/wallet", response_model=WalletBalanceDTO)
async def get_wallet(user_id: str = Depends(get_current_user_id),
                     session: AsyncSession = Depends(get_session)):
    return await WalletService.get_balance(user_id, session)


@api_router.get("/checkout/payment-options", response_model=PaymentOptionsDTO)
async def get_payment_options(user_id: str = Depends(get_current_user_id),
                              session: AsyncSession = Depends(get_session)):
    return await PaymentService.start_checkout(user_id, session)


@api_router.post("/checkout", response_model=CheckoutResponse)
async def checkout(payload: CheckoutPayload,
                   user_id: str = Depends(get_current_user_id),
                   session: AsyncSession = Depends(get_session),
                   lang: str = Depends(get_lang)):
    correlation_id = generate_correlation_id()
    logger.info(f"[{correlation_id}] Checkout requested by user {user_id}")
    receipt = await CheckoutService.checkout(user_id, payload.payment_method, session)
    logger.info(f"[{correlation_id}] Checkout completed, order {receipt.order_id}")
    return CheckoutResponse(
        **receipt.model_dump(),
        notice=notice(MessageEntity.USER, "order_success_title", "order_success", lang),
    )


@api_router.get("/bitcoin-addresses", response_model=list[BitcoinAddressDTO])
async def list_bitcoin_addresses(user_id: str = Depends(get_current_user_id),
                                 session: AsyncSession = Depends(get_session)):
    return await BitcoinAddressService.get_active(user_id, session)


@api_router.post("/bitcoin-addresses", response_model=BitcoinAddressDTO, status_code=status.HTTP_201_CREATED)
async def register_bitcoin_address(payload: BitcoinAddressPayload,
                                   user_id: str = Depends(get_current_user_id),
                                   session: AsyncSession = Depends(get_session)):
    return await BitcoinAddressService.register(user_id, payload.address, payload.private_key, session)


# ---------------------------------------------------------------- seller dashboard

@api_router.get("/seller/products", response_model=list[ProductDTO])
async def list_seller_products(user_id: str = Depends(get_current_user_id),
                               session: AsyncSession = Depends(get_session)):
    return await SellerService.list_products(user_id, session)


@api_router.post("/seller/products", status_code=status.HTTP_201_CREATED)
async def add_seller_product(form: ProductFormDTO,
                             user_id: str = Depends(get_current_user_id),
                             session: AsyncSession = Depends(get_session),
                             lang: str = Depends(get_lang)):
    product = await SellerService.add_product(user_id, form, session)
    return {
        "product": product,
        "notice": notice(MessageEntity.SELLER, "product_added_title", "product_added", lang),
    }


@api_router.patch("/seller/products/{product_id}")
async def update_seller_product(product_id: str, changes: ProductFormDTO,
                                user_id: str = Depends(get_current_user_id),
                                session: AsyncSession = Depends(get_session),
                                lang: str = Depends(get_lang)):
    product = await SellerService.update_product(user_id, product_id, changes, session)
    return {
        "product": product,
        "notice": notice(MessageEntity.SELLER, "product_updated_title", "product_updated", lang),
    }


@api_router.post("/seller/products/{product_id}/toggle")
async def toggle_seller_product(product_id: str,
                                user_id: str = Depends(get_current_user_id),
                                session: AsyncSession = Depends(get_session),
                                lang: str = Depends(get_lang)):
    product = await SellerService.toggle_status(user_id, product_id, session)
    return {
        "product": product,
        "notice": notice(MessageEntity.SELLER, "product_status_changed_title", "product_status_changed", lang),
    }


@api_router.delete("/seller/products/{product_id}")
async def delete_seller_product(product_id: str,
                                user_id: str = Depends(get_current_user_id),
                                session: AsyncSession = Depends(get_session),
                                lang: str = Depends(get_lang)):
    deleted = await SellerService.delete_product(user_id, product_id, session)
    return {
        "deleted": deleted,
        "notice": notice(MessageEntity.SELLER, "product_deleted_title", "product_deleted", lang),
    }


# ---------------------------------------------------------------- settings

@api_router.get("/settings/theme")
async def get_theme(user_id: str = Depends(get_current_user_id),
                    session: AsyncSession = Depends(get_session)):
    return {"theme": await SettingsService.get_theme(user_id, session)}


@api_router.put("/settings/theme")
async def set_theme(payload: ThemePayload,
                    user_id: str = Depends(get_current_user_id),
                    session: AsyncSession = Depends(get_session)):
    return {"theme": await SettingsService.set_theme(user_id, payload.theme, session)}


@api_router.post("/settings/theme/toggle")
async def toggle_theme(user_id: str = Depends(get_current_user_id),
                       session: AsyncSession = Depends(get_session)):
    return {"theme": await SettingsService.toggle_theme(user_id, session)}


@api_router.delete("/settings/account")
async def delete_account(user_id: str = Depends(get_current_user_id),
                         session: AsyncSession = Depends(get_session),
                         lang: str = Depends(get_lang)):
    correlation_id = generate_correlation_id()
    logger.info(f"[{correlation_id}] Account deletion requested by user {user_id}")
    await SettingsService.delete_account(user_id, session)
    return {"notice": notice(MessageEntity.USER, "account_deleted_title", "account_deleted", lang)}


# ---------------------------------------------------------------- privacy warning

@api_router.get("/privacy-warning", response_model=PrivacyWarningDTO)
async def get_privacy_warning(request: Request,
                              client_id: str = Depends(get_client_id),
                              session: AsyncSession = Depends(get_session),
                              lang: str = Depends(get_lang)):
    return await PrivacyService.evaluate(client_id, request.headers.get("User-Agent"), session, lang)


@api_router.post("/privacy-warning/acknowledge", status_code=status.HTTP_204_NO_CONTENT)
async def acknowledge_privacy_warning(client_id: str = Depends(get_client_id),
                                      session: AsyncSession = Depends(get_session)):
    await PrivacyService.acknowledge(client_id, session)
