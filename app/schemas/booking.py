from pydantic import BaseModel
from datetime import date, time, datetime


class BookingCreate(BaseModel):
    venue_id: int
    booking_date: date
    slot_id: int | None = None
    start_time: time | None = None


class BookingVenue(BaseModel):
    name: str
    address: str
    game_type: str

    model_config = {"from_attributes": True}


class BookingOut(BaseModel):
    id: int
    venue_id: int
    user_id: int
    booking_date: date
    start_time: time
    end_time: time
    total_amount: float
    booking_status: str
    payment_method: str
    payment_status: str
    payment_verified: bool
    paid_at: datetime | None = None

    model_config = {"from_attributes": True}


class MyBookingOut(BookingOut):
    venue: BookingVenue


class VendorBookingOut(BookingOut):
    venue_name: str
    booked_by_name: str


class BookingCreated(BaseModel):
    message: str
    booking: BookingOut
    redirect: str


class PaymentRequestOut(BaseModel):
    booking_id: int
    payee_id: str
    payee_name: str
    amount: float
    currency: str
    note: str
    payment_uri: str
    qr_code: str
    instructions: list[str]
