"""SQLAlchemy-backed venue directory store.

Every database failure leaves this module as a ``StoreError`` (or one of its
more specific siblings); callers never see SQLAlchemy exceptions.
"""
from contextlib import contextmanager
from datetime import date, time, datetime

from sqlalchemy import case, func, or_
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, joinedload

from app.core.errors import ConflictError, NotFoundError, StoreError, UpdateError
from app.models.booking import Booking
from app.models.enums import BookingStatus, PaymentStatus, Role
from app.models.slot_template import SlotTemplate
from app.models.user import User
from app.models.vendor import Vendor
from app.models.venue import Venue

VENUE_FIELDS = (
    "name", "description", "address", "city", "game_type",
    "price_per_hour", "facilities", "images",
)


class DirectoryStore:

    def __init__(self, db: Session):
        self.db = db

    def _commit(self, error_cls=StoreError, message="Store write failed"):
        try:
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise error_cls(f"{message}: {e.__class__.__name__}")

    @contextmanager
    def _reading(self, message):
        try:
            yield
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"{message}: {e.__class__.__name__}")

    # =====================================================================
    # VENUES
    # =====================================================================
    def list_venues(self, active: bool | None = None, search: str | None = None,
                    city: str | None = None, game_type: str | None = None):
        with self._reading("Failed to list venues"):
            query = self.db.query(Venue)
            if active is not None:
                query = query.filter(Venue.active == active)
            if search:
                pattern = f"%{search}%"
                query = query.filter(or_(Venue.name.ilike(pattern), Venue.description.ilike(pattern)))
            if city:
                query = query.filter(Venue.city == city)
            if game_type:
                query = query.filter(Venue.game_type == game_type)
            return query.order_by(Venue.rating.desc(), Venue.id.asc()).all()

    def list_recent_venues(self, limit: int = 10):
        with self._reading("Failed to list venues"):
            return (
                self.db.query(Venue)
                .options(joinedload(Venue.vendor))
                .order_by(Venue.created_at.desc(), Venue.id.desc())
                .limit(limit)
                .all()
            )

    def list_venues_for_vendor(self, vendor_id: int):
        with self._reading("Failed to list venues"):
            return self.db.query(Venue).filter(Venue.vendor_id == vendor_id).order_by(Venue.id).all()

    def distinct_venue_values(self, column):
        with self._reading("Failed to load filters"):
            rows = (
                self.db.query(column)
                .filter(Venue.active == True)
                .distinct()
                .order_by(column)
                .all()
            )
        return [r[0] for r in rows]

    def get_venue(self, venue_id: int) -> Venue:
        with self._reading("Failed to load venue"):
            venue = self.db.query(Venue).filter(Venue.id == venue_id).first()
        if not venue:
            raise NotFoundError("Venue not found")
        return venue

    def create_venue(self, vendor_id: int, fields: dict, slot_windows: list[tuple[time, time]] | None = None) -> Venue:
        """Insert a venue together with its recurring slot templates in one commit."""
        venue = Venue(vendor_id=vendor_id, active=True, **{k: fields[k] for k in VENUE_FIELDS if k in fields})
        venue.slot_templates = [
            SlotTemplate(start_time=start, end_time=end, is_available=True)
            for start, end in (slot_windows or [])
        ]
        self.db.add(venue)
        self._commit(message="Failed to create venue")
        self.db.refresh(venue)
        return venue

    def update_venue(self, venue: Venue, fields: dict) -> Venue:
        for key in VENUE_FIELDS:
            if key in fields and fields[key] is not None:
                setattr(venue, key, fields[key])
        self._commit(UpdateError, "Failed to update venue")
        self.db.refresh(venue)
        return venue

    def set_venue_active(self, venue: Venue, active: bool) -> Venue:
        venue.active = active
        self._commit(UpdateError, "Failed to update venue")
        return venue

    def delete_venue(self, venue: Venue):
        self.db.delete(venue)
        self._commit(message="Failed to delete venue")

    # =====================================================================
    # SLOT TEMPLATES
    # =====================================================================
    def list_slot_templates(self, venue_id: int):
        with self._reading("Failed to load slots"):
            return (
                self.db.query(SlotTemplate)
                .filter(SlotTemplate.venue_id == venue_id)
                .order_by(SlotTemplate.start_time.asc())
                .all()
            )

    # =====================================================================
    # BOOKINGS
    # =====================================================================
    def list_confirmed_bookings(self, venue_id: int, booking_date: date):
        with self._reading("Failed to load bookings"):
            return self.db.query(Booking).filter(
                Booking.venue_id == venue_id,
                Booking.booking_date == booking_date,
                Booking.booking_status == BookingStatus.CONFIRMED.value,
            ).all()

    def create_booking(self, fields: dict) -> Booking:
        """Single-row insert; the partial unique index rejects a second confirmed claim."""
        booking = Booking(**fields)
        self.db.add(booking)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("This slot has just been booked by someone else")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Booking failed: {e.__class__.__name__}")
        self.db.refresh(booking)
        return booking

    def get_booking(self, booking_id: int) -> Booking:
        with self._reading("Failed to load booking"):
            booking = (
                self.db.query(Booking)
                .options(joinedload(Booking.venue))
                .filter(Booking.id == booking_id)
                .first()
            )
        if not booking:
            raise NotFoundError("Booking not found")
        return booking

    def update_booking_payment_status(self, booking_id: int, status: PaymentStatus,
                                      expected: PaymentStatus = PaymentStatus.PENDING) -> Booking:
        """Move the payment from ``expected`` to ``status`` in one conditional UPDATE.

        When the row no longer holds ``expected`` nothing is written; the
        returned booking shows whatever status won.
        """
        values = {Booking.payment_status: status.value}
        if status == PaymentStatus.PAID:
            values[Booking.paid_at] = datetime.utcnow()

        try:
            self.db.query(Booking).filter(
                Booking.id == booking_id,
                Booking.payment_status == expected.value,
            ).update(values, synchronize_session=False)
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UpdateError(f"Failed to update payment status: {e.__class__.__name__}")

        return self.get_booking(booking_id)

    def cancel_booking(self, booking: Booking) -> Booking:
        # A pending payment is cancelled with the booking; a settled one is left alone
        try:
            self.db.query(Booking).filter(Booking.id == booking.id).update(
                {
                    Booking.booking_status: BookingStatus.CANCELLED.value,
                    Booking.payment_status: case(
                        (Booking.payment_status == PaymentStatus.PENDING.value, PaymentStatus.CANCELLED.value),
                        else_=Booking.payment_status,
                    ),
                },
                synchronize_session=False,
            )
            self.db.commit()
        except SQLAlchemyError as e:
            self.db.rollback()
            raise UpdateError(f"Failed to cancel booking: {e.__class__.__name__}")

        return self.get_booking(booking.id)

    def list_bookings_for_user(self, user_id: int):
        with self._reading("Failed to load bookings"):
            return (
                self.db.query(Booking)
                .options(joinedload(Booking.venue))
                .filter(Booking.user_id == user_id)
                .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
                .all()
            )

    def list_bookings_for_vendor(self, venue_ids: list[int]):
        if not venue_ids:
            return []
        with self._reading("Failed to load bookings"):
            return (
                self.db.query(Booking)
                .options(joinedload(Booking.venue))
                .filter(Booking.venue_id.in_(venue_ids))
                .order_by(Booking.booking_date.desc(), Booking.start_time.desc())
                .all()
            )

    # =====================================================================
    # USERS & VENDORS
    # =====================================================================
    def find_user(self, user_id: int):
        with self._reading("Failed to load account"):
            return self.db.query(User).filter(User.id == user_id).first()

    def find_user_by_email(self, email: str):
        with self._reading("Failed to load account"):
            return self.db.query(User).filter(User.email == email).first()

    def display_names(self, user_ids: list[int]) -> dict:
        if not user_ids:
            return {}
        with self._reading("Failed to load profiles"):
            rows = self.db.query(User.id, User.full_name).filter(User.id.in_(set(user_ids))).all()
        return {r.id: r.full_name for r in rows}

    def create_user(self, email: str, password_hash: str, full_name: str | None, role: Role) -> User:
        user = User(email=email, password_hash=password_hash, full_name=full_name, role=role.value)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            raise ConflictError("Account already exists")
        except SQLAlchemyError as e:
            self.db.rollback()
            raise StoreError(f"Sign up failed: {e.__class__.__name__}")
        self.db.refresh(user)
        return user

    def create_vendor(self, user: User, business_name: str, business_address: str | None = None) -> Vendor:
        vendor = Vendor(
            user_id=user.id,
            business_name=business_name,
            business_address=business_address,
            approved=False,
        )
        self.db.add(vendor)
        self._commit(message="Failed to create vendor profile")
        self.db.refresh(vendor)
        return vendor

    def get_vendor(self, vendor_id: int) -> Vendor:
        with self._reading("Failed to load vendor"):
            vendor = self.db.query(Vendor).filter(Vendor.id == vendor_id).first()
        if not vendor:
            raise NotFoundError("Vendor not found")
        return vendor

    def find_vendor_for_user(self, user_id: int):
        with self._reading("Failed to load vendor"):
            return self.db.query(Vendor).filter(Vendor.user_id == user_id).first()

    def list_vendors(self):
        with self._reading("Failed to list vendors"):
            return self.db.query(Vendor).order_by(Vendor.created_at.desc(), Vendor.id.desc()).all()

    def set_vendor_approval(self, vendor: Vendor, approved: bool) -> Vendor:
        vendor.approved = approved
        self._commit(UpdateError, "Failed to update vendor")
        return vendor

    def remove_vendor(self, vendor: Vendor):
        """Delete the vendor (and, by cascade, its venues) and demote the account."""
        user = vendor.user
        self.db.delete(vendor)
        if user is not None and user.role == Role.VENDOR.value:
            user.role = Role.PLAYER.value
        self._commit(message="Failed to remove vendor")

    # =====================================================================
    # AGGREGATES
    # =====================================================================
    def counts(self) -> dict:
        with self._reading("Failed to load stats"):
            return {
                "total_users": self.db.query(User).count(),
                "total_vendors": self.db.query(Vendor).count(),
                "total_venues": self.db.query(Venue).count(),
                "total_bookings": self.db.query(Booking).count(),
            }

    def paid_revenue(self, venue_ids: list[int] | None = None) -> float:
        if venue_ids is not None and not venue_ids:
            return 0.0
        with self._reading("Failed to load revenue"):
            query = self.db.query(func.sum(Booking.total_amount)).filter(
                Booking.payment_status == PaymentStatus.PAID.value
            )
            if venue_ids is not None:
                query = query.filter(Booking.venue_id.in_(venue_ids))
            total = query.scalar()
        return float(total or 0)
