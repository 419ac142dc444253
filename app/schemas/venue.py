from datetime import date, time, datetime
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


def clean_facilities(value):
    """Trim, drop blanks and de-duplicate while keeping the first-seen order."""
    if value is None:
        return None
    cleaned = []
    for item in value:
        item = item.strip()
        if item and item not in cleaned:
            cleaned.append(item)
    return cleaned


class VenueBase(BaseModel):
    name: str = Field(min_length=1)
    description: Optional[str] = None
    address: str = Field(min_length=1)
    city: str = Field(min_length=1)
    game_type: str = Field(min_length=1)
    price_per_hour: float = Field(gt=0)
    facilities: List[str] = []
    images: List[str] = []

    tidy_facilities = field_validator("facilities")(clean_facilities)


class VenueCreate(VenueBase):
    pass


class VenueUpdate(BaseModel):
    name: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = None
    address: Optional[str] = Field(default=None, min_length=1)
    city: Optional[str] = Field(default=None, min_length=1)
    game_type: Optional[str] = Field(default=None, min_length=1)
    price_per_hour: Optional[float] = Field(default=None, gt=0)
    facilities: Optional[List[str]] = None
    images: Optional[List[str]] = None

    tidy_facilities = field_validator("facilities")(clean_facilities)


class VenueOut(VenueBase):
    id: int
    vendor_id: int
    rating: float
    total_reviews: int
    active: bool

    model_config = {"from_attributes": True}


class AdminVenueOut(VenueOut):
    vendor_business_name: Optional[str] = None
    created_at: datetime


class VenueFilters(BaseModel):
    cities: List[str]
    game_types: List[str]


class SlotOut(BaseModel):
    slot_id: int
    start_time: time
    end_time: time
    is_available: bool

    model_config = {"from_attributes": True}


class AvailabilityOut(BaseModel):
    venue_id: int
    date: date
    slots: List[SlotOut]
