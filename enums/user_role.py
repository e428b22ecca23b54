from enum import Enum


class UserRole(str, Enum):
    USER = "user"
    SELLER = "seller"
    ADMIN = "admin"

    def can_sell(self) -> bool:
        return self in (UserRole.SELLER, UserRole.ADMIN)
