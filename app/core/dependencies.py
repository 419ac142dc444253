from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy.orm import Session

from app.db.session import SessionLocal
from app.core.auth_utils import decode_token
from app.core.errors import AuthError, PermissionDeniedError
from app.core.policy import Identity
from app.services.store import DirectoryStore

# Anonymous callers are allowed through; routes decide what they need
security = HTTPBearer(auto_error=False)


def get_db():
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def get_store(db: Session = Depends(get_db)) -> DirectoryStore:
    return DirectoryStore(db)


def get_current_identity(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    store: DirectoryStore = Depends(get_store),
) -> Identity | None:
    if credentials is None:
        return None

    identity = decode_token(credentials.credentials)

    # Role comes from the account row; a stale token cannot keep a revoked role
    user = store.find_user(identity.id)
    if not user:
        raise AuthError("Account no longer exists")

    if user.role != identity.role.value:
        raise PermissionDeniedError("Role changed, please sign in again")

    return identity
