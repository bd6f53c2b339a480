# routers/health.py

from fastapi import APIRouter
from core.supabase_client import ping_supabase

router = APIRouter(
    prefix="/health",
    tags=["Health"],
)


# -----------------------------------------------------
# GET /health/db
# Checks Supabase connection + table queries
# No auth required
# -----------------------------------------------------
@router.get("/db", summary="Supabase / DB health check")
async def health_db():
    """
    Verifies Supabase connectivity.
    - Checks if URL + key are configured
    - Attempts to query each portal table
    - Returns row-count + error details per table
    """
    try:
        status = ping_supabase()
        return {
            "service": "Supabase",
            "status": status.get("status", "unknown"),
            "details": status,
        }

    except Exception as e:
        return {
            "service": "Supabase",
            "status": "error",
            "error": str(e),
        }


# -----------------------------------------------------
# GET /health/app
# -----------------------------------------------------
@router.get("/app", summary="App health check")
async def health_app():
    """
    Lightweight health check for uptime monitors.
    """
    return {
        "service": "Ecole Portal API",
        "status": "ok",
    }
