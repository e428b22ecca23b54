from decimal import Decimal

from pydantic import BaseModel

from enums.cryptocurrency import Cryptocurrency


class PaymentOptionDTO(BaseModel):
    cryptocurrency: Cryptocurrency
    price_eur: Decimal | None = None
    amount: Decimal | None = None
    amount_display: str = "-"
    # Quote unavailable options are still listed but cannot be selected
    available: bool = False


class PaymentOptionsDTO(BaseModel):
    total_eur: Decimal
    balance_eur: Decimal
    sufficient_balance: bool
    options: list[PaymentOptionDTO] = []


class CheckoutReceiptDTO(BaseModel):
    order_id: str
    order_reference: str
    total_eur: Decimal
    payment_method: Cryptocurrency
    item_count: int
    new_balance_eur: Decimal
