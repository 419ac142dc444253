from dataclasses import asdict

from fastapi import APIRouter, Depends

from app.core.dependencies import get_store, get_current_identity
from app.core.policy import Identity
from app.schemas.booking import (
    BookingCreate,
    BookingCreated,
    BookingOut,
    MyBookingOut,
    PaymentRequestOut,
)
from app.services import bookings as booking_service
from app.services import payments as payment_service
from app.services.store import DirectoryStore

router = APIRouter(prefix="/bookings", tags=["Bookings"])

PAYMENT_INSTRUCTIONS = [
    "Open any UPI app (Google Pay, PhonePe, Paytm, etc.)",
    "Scan the QR code",
    "Verify the amount",
    "Complete the payment",
    "Press \"I've Paid\"",
]


# ---------------------------------------------------------------------
# CREATE BOOKING
# ---------------------------------------------------------------------
@router.post("/", response_model=BookingCreated, status_code=201)
def create_booking(
    data: BookingCreate,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    booking = booking_service.create_booking(
        store,
        identity,
        venue_id=data.venue_id,
        booking_date=data.booking_date,
        slot_id=data.slot_id,
        start_time=data.start_time,
    )

    return {
        "message": "Booking confirmed! Payment pending.",
        "booking": booking,
        "redirect": "/my-bookings",
    }


# ---------------------------------------------------------------------
# PLAYER: MY BOOKINGS
# ---------------------------------------------------------------------
@router.get("/my", response_model=list[MyBookingOut])
def my_bookings(
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    return booking_service.list_my_bookings(store, identity)


# ---------------------------------------------------------------------
# PAYMENT REQUEST (QR)
# ---------------------------------------------------------------------
@router.get("/{booking_id}/payment-request", response_model=PaymentRequestOut)
def payment_request(
    booking_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    request = payment_service.present_payment(store, identity, booking_id)
    return {**asdict(request), "instructions": PAYMENT_INSTRUCTIONS}


# ---------------------------------------------------------------------
# "I'VE PAID" (unverified)
# ---------------------------------------------------------------------
@router.post("/{booking_id}/confirm-payment", response_model=BookingOut)
def confirm_payment(
    booking_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    return payment_service.confirm_payment(store, identity, booking_id)


# ---------------------------------------------------------------------
# CANCEL BOOKING (vendor / admin)
# ---------------------------------------------------------------------
@router.post("/{booking_id}/cancel", response_model=BookingOut)
def cancel_booking(
    booking_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    return booking_service.cancel_booking(store, identity, booking_id)
