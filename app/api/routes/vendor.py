from fastapi import APIRouter, Depends

from app.core.dependencies import get_store, get_current_identity
from app.core.errors import PermissionDeniedError, StoreError
from app.core.logging_config import get_logger
from app.core.policy import Capability, Identity, require_capability
from app.core.redis import invalidate_directory_cache
from app.models.enums import Role
from app.schemas.booking import BookingOut, VendorBookingOut
from app.schemas.venue import VenueCreate, VenueUpdate, VenueOut
from app.services.store import DirectoryStore
from app.utils.slots import hourly_windows

router = APIRouter(prefix="/vendor", tags=["Vendor"])
logger = get_logger()

UNKNOWN_PLAYER = "Unknown"


# --------------------------------------------------
# Vendor profile for the caller (created on first visit)
# --------------------------------------------------
def current_vendor(store: DirectoryStore, identity: Identity | None):
    require_capability(identity, Capability.VENDOR_DASHBOARD, redirect="/auth/vendor")

    vendor = store.find_vendor_for_user(identity.id)
    if vendor is None:
        user = store.find_user(identity.id)
        business_name = (user.full_name if user else None) or "New Vendor"
        vendor = store.create_vendor(user, business_name)
        logger.bind(log_type="admin").info(f"Vendor profile created | {identity.email}")

    return vendor


def with_player_names(store: DirectoryStore, bookings):
    """Attach venue and player display names; a failed lookup degrades to a placeholder."""
    try:
        names = store.display_names([b.user_id for b in bookings])
    except StoreError as e:
        logger.warning(f"Player name lookup failed: {e.message}")
        names = {}

    return [
        VendorBookingOut(
            **BookingOut.model_validate(b).model_dump(),
            venue_name=b.venue.name,
            booked_by_name=names.get(b.user_id) or UNKNOWN_PLAYER,
        )
        for b in bookings
    ]


# =====================================================================
# DASHBOARD
# =====================================================================
@router.get("/dashboard")
def dashboard(
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    vendor = current_vendor(store, identity)

    venues = store.list_venues_for_vendor(vendor.id)
    venue_ids = [v.id for v in venues]

    all_bookings = store.list_bookings_for_vendor(venue_ids)
    recent = all_bookings[:10]

    return {
        "vendor": {
            "id": vendor.id,
            "business_name": vendor.business_name,
            "approved": vendor.approved,
        },
        "venues": [VenueOut.model_validate(v) for v in venues],
        "recent_bookings": with_player_names(store, recent),
        "stats": {
            "total_venues": len(venues),
            "total_bookings": len(all_bookings),
            "total_revenue": store.paid_revenue(venue_ids),
        },
    }


# =====================================================================
# CREATE VENUE (+ hourly slot templates)
# =====================================================================
@router.post("/venues", response_model=VenueOut, status_code=201)
def create_venue(
    data: VenueCreate,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENUE_MANAGE_OWN, redirect="/auth/vendor")
    if identity.role != Role.VENDOR:
        raise PermissionDeniedError("Only vendors can add venues")

    vendor = current_vendor(store, identity)

    venue = store.create_venue(vendor.id, data.model_dump(), hourly_windows())
    invalidate_directory_cache()

    logger.bind(log_type="admin").info(
        f"Venue Created | Vendor={vendor.id} | Venue={venue.id} | Slots={len(venue.slot_templates)}"
    )

    return venue


# =====================================================================
# EDIT VENUE (owner or admin)
# =====================================================================
@router.put("/venues/{venue_id}", response_model=VenueOut)
def update_venue(
    venue_id: int,
    data: VenueUpdate,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENUE_MANAGE_OWN, redirect="/auth/vendor")

    venue = store.get_venue(venue_id)

    # Ownership check
    if identity.role == Role.VENDOR:
        vendor = store.find_vendor_for_user(identity.id)
        if vendor is None or venue.vendor_id != vendor.id:
            raise PermissionDeniedError("You do not own this venue")

    venue = store.update_venue(venue, data.model_dump(exclude_unset=True))
    invalidate_directory_cache()

    return venue


# =====================================================================
# ALL BOOKINGS FOR OWN VENUES
# =====================================================================
@router.get("/bookings", response_model=list[VendorBookingOut])
def vendor_bookings(
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    vendor = current_vendor(store, identity)
    venue_ids = [v.id for v in store.list_venues_for_vendor(vendor.id)]
    return with_player_names(store, store.list_bookings_for_vendor(venue_ids))
