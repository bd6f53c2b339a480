# routers/dashboard.py

from fastapi import APIRouter, Depends

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.row_store import RowStore
from models.dashboard import DashboardRead
from services.dashboard_service import build_dashboard

router = APIRouter(
    prefix="/dashboard",
    tags=["Dashboard"],
)


@router.get("/", response_model=DashboardRead)
def get_dashboard(
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    Profile, role-conditioned tabs and the stats header.
    Panels are fetched separately from their own endpoints.
    """
    return build_dashboard(store, current_user)
