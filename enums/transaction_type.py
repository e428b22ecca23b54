from enum import Enum


class TransactionType(str, Enum):
    DEPOSIT = "deposit"      # Wallet top-up
    PURCHASE = "purchase"    # Checkout debit (negative amount)
    REFUND = "refund"
