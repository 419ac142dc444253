import threading
from datetime import date, time, timedelta

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from app.core.errors import (
    AuthError,
    BookingAppError,
    ConflictError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)
from app.core.policy import Identity
from app.db.session import Base
from app.models.booking import Booking
from app.models.enums import BookingStatus, PaymentStatus, Role
from app.services import bookings as booking_service
from app.services.availability import resolve_availability
from app.services.store import DirectoryStore
from app.utils.slots import hourly_windows


def test_booking_amount_and_initial_statuses(store, venue, make_player, future_date):
    player = make_player()

    booking = booking_service.create_booking(store, player, venue.id, future_date, start_time=time(18))

    assert booking.total_amount == 500
    assert booking.booking_status == BookingStatus.CONFIRMED.value
    assert booking.payment_status == PaymentStatus.PENDING.value
    assert booking.payment_method == "qr_code"
    assert booking.payment_verified is False
    assert (booking.start_time, booking.end_time) == (time(18), time(19))


def test_booking_by_slot_id(store, venue, make_player, future_date):
    player = make_player()
    slot = store.list_slot_templates(venue.id)[2]

    booking = booking_service.create_booking(store, player, venue.id, future_date, slot_id=slot.id)

    assert booking.start_time == slot.start_time


def test_amount_follows_price_at_creation_time(store, venue, make_player, future_date):
    player = make_player()
    store.update_venue(venue, {"price_per_hour": 800.0})

    booking = booking_service.create_booking(store, player, venue.id, future_date, start_time=time(9))
    store.update_venue(venue, {"price_per_hour": 1200.0})

    assert store.get_booking(booking.id).total_amount == 800


def test_anonymous_caller_gets_login_redirect(store, venue, future_date):
    with pytest.raises(AuthError) as exc:
        booking_service.create_booking(store, None, venue.id, future_date, start_time=time(9))

    assert not isinstance(exc.value, PermissionDeniedError)
    assert exc.value.redirect == f"/auth/player?returnTo=/venues/{venue.id}"


def test_vendor_and_admin_cannot_book(store, venue, make_admin, make_vendor, future_date):
    admin = make_admin()
    vendor_identity, _ = make_vendor(email="other-vendor@example.com")

    for identity in (admin, vendor_identity):
        with pytest.raises(PermissionDeniedError):
            booking_service.create_booking(store, identity, venue.id, future_date, start_time=time(9))


def test_missing_slot_is_validation_error(store, venue, make_player, future_date):
    with pytest.raises(ValidationError):
        booking_service.create_booking(store, make_player(), venue.id, future_date)


def test_slot_outside_venue_templates_is_validation_error(store, venue, make_player, future_date):
    with pytest.raises(ValidationError):
        booking_service.create_booking(store, make_player(), venue.id, future_date, start_time=time(6))


def test_inactive_venue_is_validation_error(store, venue, make_player, future_date):
    store.set_venue_active(venue, False)

    with pytest.raises(ValidationError):
        booking_service.create_booking(store, make_player(), venue.id, future_date, start_time=time(9))


def test_past_date_is_validation_error(store, venue, make_player):
    yesterday = date.today() - timedelta(days=1)

    with pytest.raises(ValidationError):
        booking_service.create_booking(store, make_player(), venue.id, yesterday, start_time=time(9))


def test_unknown_venue_is_not_found(store, make_player, future_date):
    with pytest.raises(NotFoundError):
        booking_service.create_booking(store, make_player(), 4242, future_date, start_time=time(9))


def test_unapproved_vendor_venue_still_bookable(store, venue, make_player, future_date):
    assert venue.vendor.approved is False

    booking = booking_service.create_booking(store, make_player(), venue.id, future_date, start_time=time(9))
    assert booking.id is not None


def test_already_booked_slot_is_conflict(store, venue, make_player, future_date):
    first = make_player()
    second = make_player(email="second@example.com")
    booking_service.create_booking(store, first, venue.id, future_date, start_time=time(14))

    with pytest.raises(ConflictError):
        booking_service.create_booking(store, second, venue.id, future_date, start_time=time(14))


def test_lost_race_is_conflict_and_leaves_one_confirmed_booking(
    store, db_session, venue, make_player, future_date, monkeypatch
):
    first = make_player()
    second = make_player(email="second@example.com")

    # Both callers read the slot as free before either writes
    monkeypatch.setattr(booking_service, "is_slot_bookable", lambda *args: True)

    booking_service.create_booking(store, first, venue.id, future_date, start_time=time(20))
    with pytest.raises(ConflictError):
        booking_service.create_booking(store, second, venue.id, future_date, start_time=time(20))

    confirmed = db_session.query(Booking).filter(
        Booking.venue_id == venue.id,
        Booking.booking_date == future_date,
        Booking.start_time == time(20),
        Booking.booking_status == BookingStatus.CONFIRMED.value,
    ).all()
    assert len(confirmed) == 1
    assert confirmed[0].user_id == first.id


def test_threaded_claims_on_one_slot_confirm_exactly_one(tmp_path, future_date):
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    SessionFactory = sessionmaker(bind=engine, autoflush=False)
    contenders = 8

    try:
        with SessionFactory() as setup:
            store = DirectoryStore(setup)
            owner = store.create_user("vendor@example.com", "hash", "Arena Sports", Role.VENDOR)
            vendor = store.create_vendor(owner, "Arena Sports")
            venue_id = store.create_venue(vendor.id, {
                "name": "Arena1",
                "address": "12 Stadium Road",
                "city": "Indore",
                "game_type": "Football",
                "price_per_hour": 500.0,
            }, hourly_windows()).id
            players = []
            for i in range(contenders):
                user = store.create_user(f"p{i}@example.com", "hash", None, Role.PLAYER)
                players.append(Identity(id=user.id, email=user.email, role=Role.PLAYER))

        barrier = threading.Barrier(contenders)
        outcomes = []

        def claim(identity):
            with SessionFactory() as session:
                barrier.wait()
                try:
                    booking_service.create_booking(
                        DirectoryStore(session), identity, venue_id, future_date, start_time=time(18)
                    )
                    outcomes.append("confirmed")
                except BookingAppError as e:
                    outcomes.append(e.__class__.__name__)

        threads = [threading.Thread(target=claim, args=(p,)) for p in players]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert sorted(outcomes) == ["ConflictError"] * (contenders - 1) + ["confirmed"]

        with SessionFactory() as check:
            confirmed = check.query(Booking).filter(
                Booking.venue_id == venue_id,
                Booking.booking_status == BookingStatus.CONFIRMED.value,
            ).count()
        assert confirmed == 1
    finally:
        engine.dispose()


def test_availability_reflects_new_booking(store, venue, make_player, future_date):
    booking_service.create_booking(store, make_player(), venue.id, future_date, start_time=time(11))

    slots = {s.start_time: s.is_available for s in resolve_availability(store, venue.id, future_date)}
    assert slots[time(11)] is False
    assert slots[time(12)] is True


def test_vendor_cancel_frees_slot(store, make_vendor, make_venue, make_player, future_date):
    vendor_identity, vendor = make_vendor()
    venue = make_venue(vendor)
    player = make_player()
    second = make_player(email="second@example.com")
    booking = booking_service.create_booking(store, player, venue.id, future_date, start_time=time(15))

    cancelled = booking_service.cancel_booking(store, vendor_identity, booking.id)

    assert cancelled.booking_status == BookingStatus.CANCELLED.value
    assert cancelled.payment_status == PaymentStatus.CANCELLED.value
    rebooked = booking_service.create_booking(store, second, venue.id, future_date, start_time=time(15))
    assert rebooked.user_id == second.id


def test_vendor_cannot_cancel_other_vendors_booking(store, venue, make_vendor, make_player, future_date):
    other_identity, _ = make_vendor(email="rival@example.com", business_name="Rival")
    booking = booking_service.create_booking(store, make_player(), venue.id, future_date, start_time=time(15))

    with pytest.raises(PermissionDeniedError):
        booking_service.cancel_booking(store, other_identity, booking.id)


def test_player_cannot_cancel(store, venue, make_player, future_date):
    player = make_player()
    booking = booking_service.create_booking(store, player, venue.id, future_date, start_time=time(15))

    with pytest.raises(PermissionDeniedError):
        booking_service.cancel_booking(store, player, booking.id)


def test_my_bookings_only_lists_own(store, venue, make_player, future_date):
    mine = make_player()
    theirs = make_player(email="theirs@example.com")
    booking_service.create_booking(store, mine, venue.id, future_date, start_time=time(9))
    booking_service.create_booking(store, theirs, venue.id, future_date, start_time=time(10))

    bookings = booking_service.list_my_bookings(store, mine)

    assert [b.user_id for b in bookings] == [mine.id]
