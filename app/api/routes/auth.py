from fastapi import APIRouter, Depends

from app.core.auth_utils import issue_token
from app.core.dependencies import get_store, get_current_identity
from app.core.errors import AuthError, PermissionDeniedError
from app.core.logging_config import get_logger
from app.core.policy import HOME_PATHS, Identity, resolve_home_view
from app.core.security import hash_password, verify_password
from app.models.enums import Role
from app.schemas.user import UserCreate, UserLogin, UserOut, VendorSignUp, TokenOut
from app.services.store import DirectoryStore

router = APIRouter(prefix="/auth", tags=["Authentication"])
logger = get_logger()


def _login(store: DirectoryStore, data: UserLogin, role: Role) -> TokenOut:
    user = store.find_user_by_email(data.email)

    if not user or not verify_password(data.password, user.password_hash):
        raise AuthError("Invalid credentials")

    # Each sign-in page only admits its own role
    if user.role != role.value:
        raise PermissionDeniedError(f"Access denied. {role.value.capitalize()} credentials required.")

    identity = Identity(id=user.id, email=user.email, role=Role(user.role))

    return TokenOut(
        access_token=issue_token(user),
        role=user.role,
        redirect=HOME_PATHS[resolve_home_view(identity)],
    )


# =====================================================================
#                           PLAYER
# =====================================================================
@router.post("/player/register", response_model=UserOut, status_code=201)
def player_register(data: UserCreate, store: DirectoryStore = Depends(get_store)):
    user = store.create_user(data.email, hash_password(data.password), data.full_name, Role.PLAYER)
    logger.info(f"Player registered | {user.email}")
    return user


@router.post("/player/login", response_model=TokenOut)
def player_login(data: UserLogin, store: DirectoryStore = Depends(get_store)):
    return _login(store, data, Role.PLAYER)


# =====================================================================
#                           VENDOR
# =====================================================================
@router.post("/vendor/register", response_model=UserOut, status_code=201)
def vendor_register(data: VendorSignUp, store: DirectoryStore = Depends(get_store)):
    user = store.create_user(
        data.email,
        hash_password(data.password),
        data.full_name or data.business_name,
        Role.VENDOR,
    )
    store.create_vendor(user, data.business_name, data.business_address)

    logger.bind(log_type="admin").info(f"Vendor registered, awaiting approval | {user.email}")
    return user


@router.post("/vendor/login", response_model=TokenOut)
def vendor_login(data: UserLogin, store: DirectoryStore = Depends(get_store)):
    return _login(store, data, Role.VENDOR)


# =====================================================================
#                           ADMIN
# =====================================================================
@router.post("/admin/register", response_model=UserOut, status_code=201)
def admin_register(data: UserCreate, store: DirectoryStore = Depends(get_store)):
    user = store.create_user(data.email, hash_password(data.password), data.full_name, Role.ADMIN)
    logger.bind(log_type="admin").info(f"Admin registered | {user.email}")
    return user


@router.post("/admin/login", response_model=TokenOut)
def admin_login(data: UserLogin, store: DirectoryStore = Depends(get_store)):
    return _login(store, data, Role.ADMIN)


# =====================================================================
#                           CURRENT IDENTITY
# =====================================================================
@router.get("/me")
def me(identity: Identity | None = Depends(get_current_identity)):
    if identity is None:
        return {"id": None, "email": None, "role": None}
    return {"id": identity.id, "email": identity.email, "role": identity.role.value}
