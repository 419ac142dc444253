from datetime import datetime
from pydantic import BaseModel


class AdminStats(BaseModel):
    total_users: int
    total_vendors: int
    total_venues: int
    total_bookings: int
    total_revenue: float


class VendorOut(BaseModel):
    id: int
    user_id: int
    business_name: str
    business_address: str | None = None
    approved: bool
    created_at: datetime

    model_config = {"from_attributes": True}


class VendorApproval(BaseModel):
    approved: bool = True
