from app.core.errors import AuthError
from app.core.jwt import create_access_token, decode_access_token
from app.core.policy import Identity
from app.models.enums import Role


def issue_token(user):
    return create_access_token({
        "sub": str(user.id),
        "email": user.email,
        "role": user.role,
    })


def decode_token(token: str) -> Identity:
    payload = decode_access_token(token)
    if payload is None:
        raise AuthError("Invalid or expired token")

    if "sub" not in payload or "role" not in payload:
        raise AuthError("Invalid token payload")

    try:
        role = Role(payload["role"])
        user_id = int(payload["sub"])
    except ValueError:
        raise AuthError("Invalid token payload")

    return Identity(id=user_id, email=payload.get("email", ""), role=role)
