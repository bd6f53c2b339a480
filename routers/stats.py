# routers/stats.py

from fastapi import APIRouter, Depends

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.row_store import RowStore
from models.dashboard import StatsRead
from services.stats_service import get_tenant_stats

router = APIRouter(
    prefix="/stats",
    tags=["Stats"],
)


@router.get("/", response_model=StatsRead)
def get_stats(
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """Student, teacher, class, announcement and timetable counts for the caller's school."""
    return get_tenant_stats(store, current_user)
