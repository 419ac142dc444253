from enum import Enum


class Role(str, Enum):
    PLAYER = "player"
    VENDOR = "vendor"
    ADMIN = "admin"


class BookingStatus(str, Enum):
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"          # player-confirmed, never verified
    FAILED = "failed"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    QR_CODE = "qr_code"


# Allowed forward moves of payment_status
PAYMENT_TRANSITIONS = {
    PaymentStatus.PENDING: {PaymentStatus.PAID, PaymentStatus.FAILED, PaymentStatus.CANCELLED},
    PaymentStatus.PAID: set(),
    PaymentStatus.FAILED: set(),
    PaymentStatus.CANCELLED: set(),
}
