from fastapi import Depends, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from app.core.security import decode_jwt

bearer = HTTPBearer(auto_error=False)

ENTITLEMENTS = ("Create", "Read", "Update", "Delete")
FULL_ACCESS_ROLES = {"ADMIN"}

def get_current_user(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> dict:
    if not creds:
        raise HTTPException(status_code=401, detail="Missing authorization token")
    try:
        return decode_jwt(creds.credentials)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")

def has_entitlement(user: dict, entity: str, action: str) -> bool:
    if str(user.get("role") or "").upper() in FULL_ACCESS_ROLES:
        return True
    granted = user.get("entitlements") or {}
    if not isinstance(granted, dict):
        return False
    return action in (granted.get(entity) or [])

def require_entitlement(entity: str, action: str):
    if action not in ENTITLEMENTS:
        raise ValueError(f"Unknown entitlement {action!r}")

    def _inner(user: dict = Depends(get_current_user)) -> dict:
        if not has_entitlement(user, entity, action):
            raise HTTPException(status_code=403, detail="Insufficient permissions")
        return user
    return _inner
