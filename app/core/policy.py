"""Central access policy: one role per identity, one capability table.

Every route and service asks ``require_capability`` instead of comparing
role strings on its own.
"""
from dataclasses import dataclass
from enum import Enum

from app.core.errors import AuthError, PermissionDeniedError
from app.models.enums import Role


@dataclass(frozen=True)
class Identity:
    id: int
    email: str
    role: Role


class Capability(str, Enum):
    BROWSE_VENUES = "venues:browse"
    BOOKING_CREATE = "booking:create"
    BOOKING_READ_OWN = "booking:read_own"
    PAYMENT_CONFIRM = "payment:confirm"
    BOOKING_CANCEL = "booking:cancel"
    VENUE_MANAGE_OWN = "venue:manage_own"
    VENDOR_DASHBOARD = "vendor:dashboard"
    VENUE_MODERATE = "venue:moderate"
    VENDOR_APPROVE = "vendor:approve"
    ADMIN_STATS = "admin:stats"


ROLE_CAPABILITIES = {
    Role.PLAYER: frozenset({
        Capability.BROWSE_VENUES,
        Capability.BOOKING_CREATE,
        Capability.BOOKING_READ_OWN,
        Capability.PAYMENT_CONFIRM,
    }),
    Role.VENDOR: frozenset({
        Capability.BROWSE_VENUES,
        Capability.BOOKING_CANCEL,
        Capability.VENUE_MANAGE_OWN,
        Capability.VENDOR_DASHBOARD,
    }),
    Role.ADMIN: frozenset({
        Capability.BROWSE_VENUES,
        Capability.BOOKING_CANCEL,
        Capability.VENUE_MANAGE_OWN,
        Capability.VENUE_MODERATE,
        Capability.VENDOR_APPROVE,
        Capability.ADMIN_STATS,
    }),
}


class HomeView(str, Enum):
    LANDING = "landing"
    ADMIN_DASHBOARD = "admin_dashboard"
    VENDOR_DASHBOARD = "vendor_dashboard"
    VENUE_DIRECTORY = "venue_directory"


HOME_PATHS = {
    HomeView.LANDING: "/",
    HomeView.ADMIN_DASHBOARD: "/admin/dashboard",
    HomeView.VENDOR_DASHBOARD: "/vendor/dashboard",
    HomeView.VENUE_DIRECTORY: "/",
}


def has_capability(identity: Identity | None, capability: Capability) -> bool:
    if identity is None:
        return False
    return capability in ROLE_CAPABILITIES[identity.role]


def require_capability(identity: Identity | None, capability: Capability, redirect: str | None = None) -> Identity:
    if identity is None:
        raise AuthError("Please sign in to continue", redirect=redirect)
    if not has_capability(identity, capability):
        raise PermissionDeniedError(f"Role '{identity.role.value}' cannot perform '{capability.value}'")
    return identity


def resolve_home_view(identity: Identity | None) -> HomeView:
    """Pick the top-level view for an identity (anonymous gets the landing page)."""
    if identity is None:
        return HomeView.LANDING
    if identity.role == Role.ADMIN:
        return HomeView.ADMIN_DASHBOARD
    if identity.role == Role.VENDOR:
        return HomeView.VENDOR_DASHBOARD
    return HomeView.VENUE_DIRECTORY
