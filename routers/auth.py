from fastapi import APIRouter, HTTPException, Depends, Request

from core.supabase_client import get_supabase_client
from core.rate_limiter import require_rate_limit, get_rate_limit_identifier
from core.logging_config import logger
from dependencies.auth import get_current_user, SessionContext
from models.auth import LoginRequest, RegisterRequest, TokenResponse
from models.profile import ProfileRead
from services.dashboard_service import profile_payload


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (SUPABASE AUTH)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Authenticate user")
def login(payload: LoginRequest, request: Request):

    email = payload.email.strip().lower()

    # 10 attempts per 5 minutes per email/IP
    identifier = get_rate_limit_identifier(request, user_id=f"login:{email}")
    require_rate_limit(request, identifier=identifier, max_requests=10, window_seconds=300)

    client = get_supabase_client()
    if not client:
        raise HTTPException(503, "Service temporarily unavailable")

    try:
        response = client.auth.sign_in_with_password(
            {"email": email, "password": payload.password}
        )
    except Exception as e:
        # Log the error for debugging but don't expose details to user
        logger.warning(f"Login attempt failed for {email}: {type(e).__name__}")
        raise HTTPException(
            status_code=401,
            detail="Invalid email or password"
        )

    if not response.session or not response.session.access_token:
        raise HTTPException(401, "Invalid email or password")

    return TokenResponse(access_token=response.session.access_token)


# ============================================================
# REGISTER (SUPABASE AUTH SIGN-UP)
# ============================================================
@router.post("/register", summary="Create an account")
def register(payload: RegisterRequest, request: Request):
    """
    Creates the Supabase Auth account with the full name in user metadata.
    The school profile (role, school) is attached afterwards by the school;
    until then the account gets the minimal capability set.
    """
    email = payload.email.strip().lower()

    identifier = get_rate_limit_identifier(request, user_id=f"register:{email}")
    require_rate_limit(request, identifier=identifier, max_requests=5, window_seconds=900)

    client = get_supabase_client()
    if not client:
        raise HTTPException(503, "Service temporarily unavailable")

    try:
        client.auth.sign_up({
            "email": email,
            "password": payload.password,
            "options": {"data": {"full_name": payload.full_name.strip()}},
        })
    except Exception as e:
        logger.warning(f"Registration failed for {email}: {type(e).__name__}: {e}")
        raise HTTPException(400, "Registration failed")

    logger.info(f"Account created: email={email}")
    return {
        "success": True,
        "message": "Account created. Check your email to confirm it.",
    }


# ============================================================
# CURRENT USER
# ============================================================
@router.get("/me", response_model=ProfileRead, summary="Current authenticated user")
def read_me(current_user: SessionContext = Depends(get_current_user)):
    return profile_payload(current_user)
