from enum import Enum


class OrderStatus(str, Enum):
    PENDING = "pending"        # Created at checkout, waiting for fulfilment by the seller
    COMPLETED = "completed"    # Delivered
    CANCELLED = "cancelled"    # Cancelled by admin
