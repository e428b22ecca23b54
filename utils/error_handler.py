"""
Error Handler Utility for API Routes

Provides centralized error handling for the API with:
- Localized error messages
- Consistent toast-shaped notices ({title, description, variant})
- Automatic exception to message mapping
- Logging for debugging

Usage in routes:
    from utils.error_handler import handle_service_error

    try:
        receipt = await CheckoutService.checkout(user_id, method, session)
    except MarketplaceException as e:
        message = handle_service_error(e, lang)

The app registers build_error_notice() and get_http_status() as the
MarketplaceException handler, so routes normally let exceptions propagate.
"""

import logging
from typing import Optional

from enums.message_entity import MessageEntity
from exceptions import (
    MarketplaceException,
    EmptyCartException,
    CartItemNotFoundException,
    ProductNotFoundException,
    ProductInactiveException,
    InvalidProductDataException,
    ImageRequiredException,
    CategoryNotFoundException,
    ProductOwnershipException,
    InsufficientStockException,
    PaymentMethodNotSelectedException,
    PriceQuoteUnavailableException,
    InsufficientBalanceException,
    WalletAddressNotFoundException,
    ProfileNotFoundException,
    SellerAccessDeniedException,
)
from utils.localizator import Localizator

# Map exception types to (localization section, key)
ERROR_MAPPING = {
    # Cart exceptions
    EmptyCartException: (MessageEntity.USER, "error_empty_cart"),
    CartItemNotFoundException: (MessageEntity.USER, "cart_item_not_found"),

    # Product exceptions
    ProductNotFoundException: (MessageEntity.COMMON, "error_product_not_found"),
    ProductInactiveException: (MessageEntity.COMMON, "error_product_inactive"),
    ImageRequiredException: (MessageEntity.SELLER, "image_required"),
    InvalidProductDataException: (MessageEntity.COMMON, "error_invalid_product_data"),
    CategoryNotFoundException: (MessageEntity.COMMON, "error_category_not_found"),
    ProductOwnershipException: (MessageEntity.COMMON, "error_product_ownership"),

    # Order exceptions
    InsufficientStockException: (MessageEntity.COMMON, "error_insufficient_stock"),

    # Payment exceptions
    PaymentMethodNotSelectedException: (MessageEntity.COMMON, "error_payment_method_not_selected"),
    PriceQuoteUnavailableException: (MessageEntity.COMMON, "error_price_quote_unavailable"),

    # Wallet exceptions
    InsufficientBalanceException: (MessageEntity.USER, "error_insufficient_balance"),
    WalletAddressNotFoundException: (MessageEntity.COMMON, "error_wallet_address_not_found"),

    # Profile exceptions
    ProfileNotFoundException: (MessageEntity.COMMON, "error_profile_not_found"),
    SellerAccessDeniedException: (MessageEntity.SELLER, "error_seller_access_denied"),
}

# Some notices carry their own title instead of the generic "Error"
TITLE_MAPPING = {
    InsufficientBalanceException: (MessageEntity.USER, "insufficient_balance_title"),
    ImageRequiredException: (MessageEntity.SELLER, "image_required_title"),
}


def handle_service_error(exception: MarketplaceException, lang: Optional[str] = None) -> str:
    """
    Convert service exception to localized user-friendly error message.

    Args:
        exception: The custom exception raised by a service
        lang: Request language, falls back to the DEFAULT_LANGUAGE setting

    Returns:
        Localized error message string

    Example:
        try:
            product = await CatalogService.get_product(product_id, session)
        except ProductNotFoundException as e:
            message = handle_service_error(e, lang)
    """
    logging.warning(f"Service error handled: {type(exception).__name__} - {str(exception)}")

    mapping = ERROR_MAPPING.get(type(exception))

    if not mapping:
        logging.error(f"Unmapped exception type: {type(exception).__name__}")
        return Localizator.get_text(MessageEntity.COMMON, "error_unexpected", lang)

    entity, localization_key = mapping

    # Exception attributes available to the message template
    exception_data = {}
    for attribute in ('field', 'reason', 'category', 'cryptocurrency',
                      'available', 'requested', 'required', 'product_id'):
        if hasattr(exception, attribute):
            exception_data[attribute] = getattr(exception, attribute)

    try:
        return Localizator.get_text(entity, localization_key, lang).format(**exception_data)
    except KeyError as e:
        # Missing formatting parameter - log and return without formatting
        logging.error(f"Missing format parameter in error message: {e}")
        return Localizator.get_text(entity, localization_key, lang)


def handle_unexpected_error(exception: Exception, lang: Optional[str] = None) -> str:
    """
    Handle unexpected exceptions (non-MarketplaceException).

    Note:
        Also logs the full exception for debugging
    """
    logging.error(f"Unexpected error: {type(exception).__name__} - {str(exception)}", exc_info=True)
    return Localizator.get_text(MessageEntity.COMMON, "error_unexpected", lang)


def build_error_notice(exception: Exception, lang: Optional[str] = None) -> dict:
    """
    Build the toast notice the front end shows for a failed request.

    Returns:
        {"title": ..., "description": ..., "variant": "destructive"}
    """
    if isinstance(exception, MarketplaceException):
        description = handle_service_error(exception, lang)
    else:
        description = handle_unexpected_error(exception, lang)

    title_mapping = TITLE_MAPPING.get(type(exception))
    if title_mapping:
        title = Localizator.get_text(title_mapping[0], title_mapping[1], lang)
    else:
        title = Localizator.get_text(MessageEntity.COMMON, "error_title", lang)

    return {"title": title, "description": description, "variant": "destructive"}


def get_http_status(exception: Exception) -> int:
    """
    HTTP status code for a service exception raised inside an API route.
    """
    if isinstance(exception, (ProfileNotFoundException, ProductNotFoundException,
                              CartItemNotFoundException, CategoryNotFoundException,
                              WalletAddressNotFoundException)):
        return 404
    if isinstance(exception, (SellerAccessDeniedException, ProductOwnershipException)):
        return 403
    if isinstance(exception, (InsufficientStockException, InsufficientBalanceException,
                              ProductInactiveException)):
        return 409
    if isinstance(exception, PriceQuoteUnavailableException):
        return 503
    if isinstance(exception, MarketplaceException):
        return 400
    return 500
