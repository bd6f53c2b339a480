from typing import Optional
from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError, jwt
from pydantic import BaseModel, ConfigDict
from supabase import Client

from core.config import settings
from core.errors import StoreError
from core.logging_config import logger
from core.row_store import RowStore
from core.supabase_client import get_supabase_client


bearer_scheme = HTTPBearer()

PROFILES_TABLE = "user_profiles"

# Role given to an authenticated user who has no profile row yet.
# It is not in ROLE_PERMISSIONS, so it resolves to the minimal capability set.
UNASSIGNED_ROLE = "unassigned"


# ============================================================
# Session Context (resolved once per request, immutable)
# ============================================================
class SessionContext(BaseModel):
    model_config = ConfigDict(frozen=True)

    user_id: str                    # user_profiles.id (owner/author/requester column)
    auth_user_id: str               # Supabase Auth UID
    role: str
    tenant_id: Optional[str] = None  # school id; None = not yet assigned
    display_name: str
    email: Optional[str] = None
    phone: Optional[str] = None


def context_from_profile(profile: dict, auth_user_id: str, email: Optional[str]) -> SessionContext:
    first = (profile.get("first_name") or "").strip()
    last = (profile.get("last_name") or "").strip()
    display_name = f"{first} {last}".strip() or profile.get("email") or email or auth_user_id

    return SessionContext(
        user_id=str(profile["id"]),
        auth_user_id=auth_user_id,
        role=profile.get("role") or UNASSIGNED_ROLE,
        tenant_id=profile.get("tenant_id"),
        display_name=display_name,
        email=profile.get("email") or email,
        phone=profile.get("phone"),
    )


def resolve_session(store: RowStore, auth_user_id: str, email: Optional[str] = None) -> SessionContext:
    """
    Map an authenticated principal to its profile.
    A principal without a profile row gets the unassigned role and no tenant.
    """
    rows = store.select(
        PROFILES_TABLE,
        {"auth_user_id": auth_user_id},
        order=None,
        limit=1,
    )

    if not rows:
        logger.warning(f"No profile for auth user {auth_user_id}; using minimal session")
        return SessionContext(
            user_id=auth_user_id,
            auth_user_id=auth_user_id,
            role=UNASSIGNED_ROLE,
            tenant_id=None,
            display_name=email or auth_user_id,
            email=email,
        )

    return context_from_profile(rows[0], auth_user_id, email)


# ============================================================
# TOKEN VERIFICATION
# ============================================================
def verify_access_token(token: str, client: Client) -> tuple[str, Optional[str]]:
    """
    Returns (auth_user_id, email).
    Local HS256 verification when the project JWT secret is configured,
    otherwise a round trip to Supabase GoTrue.
    """
    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired authentication token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    if settings.SUPABASE_JWT_SECRET:
        try:
            payload = jwt.decode(
                token,
                settings.SUPABASE_JWT_SECRET,
                algorithms=["HS256"],
                audience="authenticated",
            )
        except JWTError:
            raise unauthorized

        sub = payload.get("sub")
        if not sub:
            raise unauthorized
        return sub, payload.get("email")

    try:
        auth_resp = client.auth.get_user(token)
    except Exception:
        raise unauthorized

    if not auth_resp or not auth_resp.user:
        raise unauthorized

    return auth_resp.user.id, auth_resp.user.email


# ============================================================
# AUTH DEPENDENCY
# ============================================================
def get_current_user(
    credentials: HTTPAuthorizationCredentials = Depends(bearer_scheme),
) -> SessionContext:
    client = get_supabase_client()
    if not client:
        raise StoreError()

    auth_user_id, email = verify_access_token(credentials.credentials, client)
    return resolve_session(RowStore(client), auth_user_id, email)
