from enum import Enum


class Currency(str, Enum):
    EUR = "EUR"
