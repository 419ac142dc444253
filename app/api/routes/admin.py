from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_store, get_current_identity
from app.core.logging_config import get_logger
from app.core.policy import Capability, Identity, require_capability
from app.core.redis import invalidate_directory_cache
from app.schemas.admin import AdminStats, VendorOut, VendorApproval
from app.schemas.venue import AdminVenueOut, VenueOut
from app.services.store import DirectoryStore

router = APIRouter(prefix="/admin", tags=["Admin"])
logger = get_logger()


# ==================================================
# STATS
# ==================================================
@router.get("/stats", response_model=AdminStats)
def admin_stats(
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.ADMIN_STATS, redirect="/auth/admin")

    stats = store.counts()
    stats["total_revenue"] = store.paid_revenue()

    logger.bind(log_type="admin").info(f"Admin checked stats | revenue={stats['total_revenue']}")

    return stats


# ==================================================
# VENUE MODERATION
# ==================================================
@router.get("/venues", response_model=list[AdminVenueOut])
def recent_venues(
    limit: int = Query(10, ge=1, le=100),
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENUE_MODERATE, redirect="/auth/admin")

    return [
        AdminVenueOut(
            **VenueOut.model_validate(v).model_dump(),
            vendor_business_name=v.vendor.business_name if v.vendor else None,
            created_at=v.created_at,
        )
        for v in store.list_recent_venues(limit)
    ]


@router.delete("/venues/{venue_id}")
def delete_venue(
    venue_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENUE_MODERATE, redirect="/auth/admin")

    venue = store.get_venue(venue_id)
    store.delete_venue(venue)
    invalidate_directory_cache()

    logger.bind(log_type="admin").info(f"Venue Deleted | By={identity.email} | Venue={venue_id}")

    return {"message": "Venue deleted successfully"}


@router.post("/venues/{venue_id}/deactivate", response_model=VenueOut)
def deactivate_venue(
    venue_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENUE_MODERATE, redirect="/auth/admin")

    venue = store.set_venue_active(store.get_venue(venue_id), False)
    invalidate_directory_cache()

    logger.bind(log_type="admin").info(f"Venue Deactivated | By={identity.email} | Venue={venue_id}")
    return venue


@router.post("/venues/{venue_id}/activate", response_model=VenueOut)
def activate_venue(
    venue_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENUE_MODERATE, redirect="/auth/admin")

    venue = store.set_venue_active(store.get_venue(venue_id), True)
    invalidate_directory_cache()

    logger.bind(log_type="admin").info(f"Venue Activated | By={identity.email} | Venue={venue_id}")
    return venue


# ==================================================
# VENDORS
# ==================================================
@router.get("/vendors", response_model=list[VendorOut])
def list_vendors(
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENDOR_APPROVE, redirect="/auth/admin")
    return store.list_vendors()


@router.post("/vendors/{vendor_id}/approve", response_model=VendorOut)
def approve_vendor(
    vendor_id: int,
    data: VendorApproval,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENDOR_APPROVE, redirect="/auth/admin")

    vendor = store.set_vendor_approval(store.get_vendor(vendor_id), data.approved)

    logger.bind(log_type="admin").info(
        f"Vendor Approval | By={identity.email} | Vendor={vendor_id} | approved={data.approved}"
    )
    return vendor


@router.delete("/vendors/{vendor_id}")
def remove_vendor(
    vendor_id: int,
    identity: Identity | None = Depends(get_current_identity),
    store: DirectoryStore = Depends(get_store),
):
    require_capability(identity, Capability.VENDOR_APPROVE, redirect="/auth/admin")

    store.remove_vendor(store.get_vendor(vendor_id))
    invalidate_directory_cache()

    logger.bind(log_type="admin").info(f"Vendor Removed | By={identity.email} | Vendor={vendor_id}")

    return {"message": "Vendor removed successfully"}
