import pytest

from app.core.errors import AuthError, PermissionDeniedError
from app.core.policy import (
    Capability,
    HomeView,
    Identity,
    ROLE_CAPABILITIES,
    has_capability,
    require_capability,
    resolve_home_view,
)
from app.models.enums import Role

PLAYER = Identity(id=1, email="p@example.com", role=Role.PLAYER)
VENDOR = Identity(id=2, email="v@example.com", role=Role.VENDOR)
ADMIN = Identity(id=3, email="a@example.com", role=Role.ADMIN)


def test_every_role_has_an_entry():
    assert set(ROLE_CAPABILITIES) == set(Role)


@pytest.mark.parametrize("identity, view", [
    (None, HomeView.LANDING),
    (ADMIN, HomeView.ADMIN_DASHBOARD),
    (VENDOR, HomeView.VENDOR_DASHBOARD),
    (PLAYER, HomeView.VENUE_DIRECTORY),
])
def test_home_view_by_role(identity, view):
    assert resolve_home_view(identity) == view


def test_only_players_create_bookings_and_confirm_payment():
    for capability in (Capability.BOOKING_CREATE, Capability.PAYMENT_CONFIRM):
        assert has_capability(PLAYER, capability)
        assert not has_capability(VENDOR, capability)
        assert not has_capability(ADMIN, capability)


def test_admin_only_capabilities():
    for capability in (Capability.ADMIN_STATS, Capability.VENDOR_APPROVE, Capability.VENUE_MODERATE):
        assert has_capability(ADMIN, capability)
        assert not has_capability(VENDOR, capability)
        assert not has_capability(PLAYER, capability)


def test_anonymous_has_no_capabilities():
    assert not any(has_capability(None, c) for c in Capability)


def test_require_capability_errors():
    with pytest.raises(AuthError) as exc:
        require_capability(None, Capability.BOOKING_CREATE, redirect="/auth/player")
    assert exc.value.redirect == "/auth/player"
    assert exc.value.status_code == 401

    with pytest.raises(PermissionDeniedError) as exc:
        require_capability(VENDOR, Capability.BOOKING_CREATE)
    assert exc.value.status_code == 403

    assert require_capability(PLAYER, Capability.BOOKING_CREATE) is PLAYER
