from dataclasses import dataclass
from datetime import date, time

from app.services.store import DirectoryStore


@dataclass(frozen=True)
class SlotAvailability:
    slot_id: int
    start_time: time
    end_time: time
    is_available: bool


def resolve_availability(store: DirectoryStore, venue_id: int, target_date: date) -> list[SlotAvailability]:
    """Tag each of the venue's slot templates as bookable on ``target_date``.

    A slot is bookable exactly when no confirmed booking on that date starts
    at the slot's start time. The template's own ``is_available`` flag plays
    no part. Always computed from live data; never cache the result.
    """
    store.get_venue(venue_id)

    templates = store.list_slot_templates(venue_id)
    if not templates:
        return []

    booked_starts = {
        b.start_time for b in store.list_confirmed_bookings(venue_id, target_date)
    }

    return [
        SlotAvailability(
            slot_id=t.id,
            start_time=t.start_time,
            end_time=t.end_time,
            is_available=t.start_time not in booked_starts,
        )
        for t in sorted(templates, key=lambda t: t.start_time)
    ]


def is_slot_bookable(store: DirectoryStore, venue_id: int, target_date: date, start_time: time) -> bool:
    booked = store.list_confirmed_bookings(venue_id, target_date)
    return all(b.start_time != start_time for b in booked)
