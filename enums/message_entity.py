from enum import Enum


class MessageEntity(Enum):
    USER = 1
    SELLER = 2
    COMMON = 3
