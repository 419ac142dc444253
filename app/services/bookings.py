from datetime import date, time

from app.core.errors import ConflictError, PermissionDeniedError, ValidationError
from app.core.logging_config import get_logger
from app.core.policy import Capability, Identity, require_capability
from app.models.booking import Booking
from app.models.enums import BookingStatus, PaymentMethod, PaymentStatus, Role
from app.services.availability import is_slot_bookable
from app.services.store import DirectoryStore

logger = get_logger()


def login_redirect(venue_id: int) -> str:
    return f"/auth/player?returnTo=/venues/{venue_id}"


def _resolve_slot(store: DirectoryStore, venue_id: int, slot_id: int | None, start_time: time | None):
    if slot_id is None and start_time is None:
        raise ValidationError("Please select a time slot")

    templates = store.list_slot_templates(venue_id)
    for template in templates:
        if slot_id is not None and template.id == slot_id:
            return template
        if slot_id is None and template.start_time == start_time:
            return template

    raise ValidationError("Selected slot does not belong to this venue")


# =====================================================================
# CREATE BOOKING
# =====================================================================
def create_booking(
    store: DirectoryStore,
    identity: Identity | None,
    venue_id: int,
    booking_date: date,
    slot_id: int | None = None,
    start_time: time | None = None,
    today: date | None = None,
) -> Booking:
    """Claim one slot for the calling player.

    The availability re-check narrows the race window; the partial unique
    index on confirmed bookings closes it, so a lost race surfaces as
    ``ConflictError`` from the store.
    """
    require_capability(identity, Capability.BOOKING_CREATE, redirect=login_redirect(venue_id))

    venue = store.get_venue(venue_id)
    if not venue.active:
        raise ValidationError("This venue is not accepting bookings")

    if booking_date is None:
        raise ValidationError("Please select a date")
    if booking_date < (today or date.today()):
        raise ValidationError("Cannot book past dates")

    slot = _resolve_slot(store, venue_id, slot_id, start_time)

    # ---- DOUBLE BOOKING CHECK ----
    if not is_slot_bookable(store, venue_id, booking_date, slot.start_time):
        raise ConflictError("Slot already booked for this date")

    booking = store.create_booking({
        "venue_id": venue.id,
        "user_id": identity.id,
        "booking_date": booking_date,
        "start_time": slot.start_time,
        "end_time": slot.end_time,
        "total_amount": venue.price_per_hour,
        "booking_status": BookingStatus.CONFIRMED.value,
        "payment_status": PaymentStatus.PENDING.value,
        "payment_method": PaymentMethod.QR_CODE.value,
    })

    logger.bind(log_type="booking").info(
        f"Booking Created | User={identity.email} | Venue={venue.id} | "
        f"Date={booking_date} | Start={slot.start_time:%H:%M}"
    )

    return booking


# =====================================================================
# CANCEL BOOKING (vendor of the venue, or admin)
# =====================================================================
def cancel_booking(store: DirectoryStore, identity: Identity | None, booking_id: int) -> Booking:
    require_capability(identity, Capability.BOOKING_CANCEL)

    booking = store.get_booking(booking_id)

    if identity.role == Role.VENDOR:
        vendor = store.find_vendor_for_user(identity.id)
        if vendor is None or booking.venue.vendor_id != vendor.id:
            raise PermissionDeniedError("You do not own this venue")

    if booking.booking_status == BookingStatus.CANCELLED.value:
        return booking

    booking = store.cancel_booking(booking)

    logger.bind(log_type="booking").info(
        f"Booking Cancelled | By={identity.email} | Booking={booking.id}"
    )

    return booking


def list_my_bookings(store: DirectoryStore, identity: Identity | None):
    require_capability(identity, Capability.BOOKING_READ_OWN, redirect="/auth/player")
    return store.list_bookings_for_user(identity.id)
