# routers/announcements.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.permission_helpers import requires_capability
from core.permissions import CREATE
from core.row_store import RowStore
from models.enums import Feature
from models.announcement import AnnouncementCreate, AnnouncementRead
from services.announcements_service import AnnouncementsPanel

router = APIRouter(
    prefix="/announcements",
    tags=["Announcements"],
)


@router.get("/", response_model=List[AnnouncementRead])
def list_announcements(
    limit: Optional[int] = Query(None, ge=1, description="Max rows (default 20, capped at 100)"),
    urgent: bool = Query(False, description="Only urgent announcements"),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """Announcements of the caller's school, newest first."""
    panel = AnnouncementsPanel(store)
    if urgent:
        return panel.list_urgent(current_user, limit=limit)
    return panel.list(current_user, limit=limit)


@router.post(
    "/",
    response_model=AnnouncementRead,
    status_code=201,
    dependencies=[Depends(requires_capability(Feature.announcements, CREATE))],
)
def create_announcement(
    payload: AnnouncementCreate,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    Publish an announcement (secretariat, direction, censeur).
    School and author come from the session.
    """
    return AnnouncementsPanel(store).create(current_user, payload)
