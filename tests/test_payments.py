from datetime import time

import pytest
from sqlalchemy.exc import OperationalError

from app.core.errors import PermissionDeniedError, StoreError, UpdateError, ValidationError
from app.models.enums import BookingStatus, PaymentStatus
from app.services import bookings as booking_service
from app.services import payments as payment_service


@pytest.fixture()
def player(make_player):
    return make_player()


@pytest.fixture()
def booking(store, venue, player, future_date):
    return booking_service.create_booking(store, player, venue.id, future_date, start_time=time(18))


def test_payment_request_encodes_payee_amount_currency_and_note(booking):
    request = payment_service.build_payment_request(booking, "Arena1")

    assert request.payment_uri.startswith("upi://pay?")
    assert "pa=9479719961-ga25@axl" in request.payment_uri
    assert "am=500" in request.payment_uri
    assert "cu=INR" in request.payment_uri
    assert "tn=Turf%20Booking%20Payment%20-%20Arena1" in request.payment_uri
    assert request.note == "Turf Booking Payment - Arena1"
    assert request.qr_code.startswith("data:image/png;base64,")


def test_fractional_amount_keeps_two_decimals():
    assert payment_service.format_amount(499.5) == "499.50"
    assert payment_service.format_amount(1500.0) == "1500"


def test_present_payment_for_owner(store, booking, player):
    request = payment_service.present_payment(store, player, booking.id)

    assert request.booking_id == booking.id
    assert request.amount == 500


def test_present_payment_rejects_other_player(store, booking, make_player):
    stranger = make_player(email="stranger@example.com")

    with pytest.raises(PermissionDeniedError):
        payment_service.present_payment(store, stranger, booking.id)


def test_confirm_moves_pending_to_paid_without_verification(store, booking, player):
    confirmed = payment_service.confirm_payment(store, player, booking.id)

    assert confirmed.payment_status == PaymentStatus.PAID.value
    assert confirmed.payment_verified is False
    assert confirmed.paid_at is not None


def test_confirm_twice_is_a_no_op(store, booking, player):
    first = payment_service.confirm_payment(store, player, booking.id)
    paid_at = first.paid_at

    second = payment_service.confirm_payment(store, player, booking.id)

    assert second.payment_status == PaymentStatus.PAID.value
    assert second.paid_at == paid_at


def test_paid_booking_no_longer_presents_payment_request(store, booking, player):
    payment_service.confirm_payment(store, player, booking.id)

    with pytest.raises(ValidationError):
        payment_service.present_payment(store, player, booking.id)


def test_cancelled_booking_cannot_be_paid(store, booking, player, make_admin):
    booking_service.cancel_booking(store, make_admin(), booking.id)

    with pytest.raises(ValidationError):
        payment_service.confirm_payment(store, player, booking.id)


def test_failed_payment_never_moves_to_paid(store, booking, player):
    store.update_booking_payment_status(booking.id, PaymentStatus.FAILED)

    with pytest.raises(ValidationError):
        payment_service.confirm_payment(store, player, booking.id)


def test_store_write_failure_surfaces_update_error(store, db_session, booking, player, monkeypatch):
    def broken_commit():
        raise OperationalError("UPDATE bookings", {}, Exception("database is locked"))

    monkeypatch.setattr(db_session, "commit", broken_commit)

    with pytest.raises(UpdateError) as exc:
        payment_service.confirm_payment(store, player, booking.id)

    assert isinstance(exc.value, StoreError)
    monkeypatch.undo()
    assert store.get_booking(booking.id).payment_status == PaymentStatus.PENDING.value


def test_paid_update_does_not_overwrite_a_cancellation(store, booking, make_admin):
    booking_service.cancel_booking(store, make_admin(), booking.id)

    result = store.update_booking_payment_status(booking.id, PaymentStatus.PAID)

    assert result.payment_status == PaymentStatus.CANCELLED.value
    assert result.paid_at is None


def test_cancel_landing_between_check_and_write_fails_confirmation(store, booking, player, make_admin, monkeypatch):
    admin = make_admin()
    write_paid = store.update_booking_payment_status

    def cancel_then_write(booking_id, status):
        booking_service.cancel_booking(store, admin, booking_id)
        return write_paid(booking_id, status)

    monkeypatch.setattr(store, "update_booking_payment_status", cancel_then_write)

    with pytest.raises(ValidationError):
        payment_service.confirm_payment(store, player, booking.id)

    current = store.get_booking(booking.id)
    assert current.booking_status == BookingStatus.CANCELLED.value
    assert current.payment_status == PaymentStatus.CANCELLED.value


def test_cancelling_a_paid_booking_keeps_payment_paid(store, booking, player, make_admin):
    payment_service.confirm_payment(store, player, booking.id)

    cancelled = booking_service.cancel_booking(store, make_admin(), booking.id)

    assert cancelled.booking_status == BookingStatus.CANCELLED.value
    assert cancelled.payment_status == PaymentStatus.PAID.value


def test_store_read_failure_surfaces_store_error(store, db_session, booking, monkeypatch):
    def broken_query(*args, **kwargs):
        raise OperationalError("SELECT bookings", {}, Exception("connection reset"))

    monkeypatch.setattr(db_session, "query", broken_query)

    with pytest.raises(StoreError):
        store.get_booking(booking.id)
    with pytest.raises(StoreError):
        store.list_bookings_for_user(booking.user_id)
