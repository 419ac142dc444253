from datetime import date

from fastapi import APIRouter, Depends, Query

from app.core.config import settings
from app.core.dependencies import get_store
from app.core.redis import get_cache, set_cache, directory_cache_key
from app.models.venue import Venue
from app.schemas.venue import VenueOut, VenueFilters, AvailabilityOut, SlotOut
from app.services.availability import resolve_availability
from app.services.store import DirectoryStore

router = APIRouter(prefix="/venues", tags=["Venues"])


def _normalize(value: str | None):
    if value is None or value.strip() == "" or value == "all":
        return None
    return value.strip()


def browse_directory(store: DirectoryStore, search: str | None = None,
                     city: str | None = None, game_type: str | None = None):
    """Active venues, best rated first, as JSON-ready dicts (cached when Redis is configured)."""
    search, city, game_type = _normalize(search), _normalize(city), _normalize(game_type)

    key = directory_cache_key(search, city, game_type)
    cached = get_cache(key)
    if cached is not None:
        return cached

    venues = store.list_venues(active=True, search=search, city=city, game_type=game_type)
    data = [VenueOut.model_validate(v).model_dump(mode="json") for v in venues]

    set_cache(key, data, ttl=settings.DIRECTORY_CACHE_TTL)
    return data


# =====================================================================
# LIST / SEARCH / FILTER (public)
# =====================================================================
@router.get("/", response_model=list[VenueOut])
def list_venues(
    search: str | None = None,
    city: str | None = None,
    game_type: str | None = None,
    store: DirectoryStore = Depends(get_store),
):
    return browse_directory(store, search, city, game_type)


@router.get("/filters", response_model=VenueFilters)
def venue_filters(store: DirectoryStore = Depends(get_store)):
    return {
        "cities": store.distinct_venue_values(Venue.city),
        "game_types": store.distinct_venue_values(Venue.game_type),
    }


# =====================================================================
# VENUE DETAILS
# =====================================================================
@router.get("/{venue_id}", response_model=VenueOut)
def get_venue(venue_id: int, store: DirectoryStore = Depends(get_store)):
    return store.get_venue(venue_id)


# =====================================================================
# AVAILABLE TIME SLOTS (never cached)
# =====================================================================
@router.get("/{venue_id}/availability", response_model=AvailabilityOut)
def venue_availability(
    venue_id: int,
    target_date: date = Query(..., alias="date"),
    store: DirectoryStore = Depends(get_store),
):
    slots = resolve_availability(store, venue_id, target_date)
    return AvailabilityOut(
        venue_id=venue_id,
        date=target_date,
        slots=[SlotOut.model_validate(s) for s in slots],
    )
