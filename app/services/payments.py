"""Manual QR payment flow.

The player scans a UPI payment request with any UPI app and then presses
"I've paid". Nothing checks that money arrived: ``paid`` means
"player says paid" and ``payment_verified`` stays False.
"""
from dataclasses import dataclass
from urllib.parse import urlencode, quote

from app.core.config import settings
from app.core.errors import PermissionDeniedError, ValidationError
from app.core.logging_config import get_logger
from app.core.policy import Capability, Identity, require_capability
from app.models.booking import Booking
from app.models.enums import BookingStatus, PaymentStatus, PAYMENT_TRANSITIONS
from app.services.store import DirectoryStore
from app.utils.qr import qr_data_uri

logger = get_logger()


@dataclass(frozen=True)
class PaymentRequest:
    booking_id: int
    payee_id: str
    payee_name: str
    amount: float
    currency: str
    note: str
    payment_uri: str
    qr_code: str


def format_amount(amount: float) -> str:
    return str(int(amount)) if float(amount).is_integer() else f"{amount:.2f}"


def build_payment_request(booking: Booking, venue_name: str) -> PaymentRequest:
    note = f"Turf Booking Payment - {venue_name}"
    params = {
        "pa": settings.UPI_PAYEE_ID,
        "pn": settings.UPI_PAYEE_NAME,
        "am": format_amount(booking.total_amount),
        "cu": settings.PAYMENT_CURRENCY,
        "tn": note,
    }
    payment_uri = "upi://pay?" + urlencode(params, quote_via=quote, safe="@")

    return PaymentRequest(
        booking_id=booking.id,
        payee_id=settings.UPI_PAYEE_ID,
        payee_name=settings.UPI_PAYEE_NAME,
        amount=booking.total_amount,
        currency=settings.PAYMENT_CURRENCY,
        note=note,
        payment_uri=payment_uri,
        qr_code=qr_data_uri(payment_uri),
    )


def _owned_booking(store: DirectoryStore, identity: Identity, booking_id: int) -> Booking:
    booking = store.get_booking(booking_id)
    if booking.user_id != identity.id:
        raise PermissionDeniedError("This booking belongs to another player")
    return booking


def present_payment(store: DirectoryStore, identity: Identity | None, booking_id: int) -> PaymentRequest:
    require_capability(identity, Capability.PAYMENT_CONFIRM, redirect="/auth/player")
    booking = _owned_booking(store, identity, booking_id)

    if booking.payment_status != PaymentStatus.PENDING.value:
        raise ValidationError(f"Payment is already {booking.payment_status}")

    return build_payment_request(booking, booking.venue.name)


# =====================================================================
# "I'VE PAID"
# =====================================================================
def confirm_payment(store: DirectoryStore, identity: Identity | None, booking_id: int) -> Booking:
    require_capability(identity, Capability.PAYMENT_CONFIRM, redirect="/auth/player")
    booking = _owned_booking(store, identity, booking_id)

    # IDEMPOTENCY CHECK
    if booking.payment_status == PaymentStatus.PAID.value:
        return booking

    if booking.booking_status == BookingStatus.CANCELLED.value:
        raise ValidationError("Booking has been cancelled")

    current = PaymentStatus(booking.payment_status)
    if PaymentStatus.PAID not in PAYMENT_TRANSITIONS[current]:
        raise ValidationError(f"Cannot mark a {current.value} payment as paid")

    booking = store.update_booking_payment_status(booking.id, PaymentStatus.PAID)

    # Another request moved the payment first (e.g. the booking was cancelled)
    if booking.payment_status != PaymentStatus.PAID.value:
        raise ValidationError(f"Payment is already {booking.payment_status}")

    logger.bind(log_type="payment").info(
        f"Payment Self-Confirmed (unverified) | User={identity.email} | "
        f"Booking={booking.id} | Amount={booking.total_amount}"
    )

    return booking
