# routers/timetables.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.permission_helpers import requires_capability
from core.permissions import CREATE
from core.row_store import RowStore
from models.enums import Feature
from models.timetable import TimetableCreate, TimetableRead
from services.timetables_service import TimetablesPanel

router = APIRouter(
    prefix="/timetables",
    tags=["Timetables"],
)


@router.get("/", response_model=List[TimetableRead])
def list_timetables(
    limit: Optional[int] = Query(None, ge=1),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return TimetablesPanel(store).list(current_user, limit=limit)


@router.post(
    "/",
    response_model=TimetableRead,
    status_code=201,
    dependencies=[Depends(requires_capability(Feature.timetables, CREATE))],
)
def create_timetable(
    payload: TimetableCreate,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """Create a timetable version in draft."""
    return TimetablesPanel(store).create(current_user, payload)


@router.post(
    "/{timetable_id}/submit",
    response_model=TimetableRead,
    dependencies=[Depends(requires_capability(Feature.timetables, CREATE))],
)
def submit_timetable(
    timetable_id: str,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return TimetablesPanel(store).submit(current_user, timetable_id)


@router.post(
    "/{timetable_id}/validate",
    response_model=TimetableRead,
    dependencies=[Depends(requires_capability(Feature.timetables, CREATE))],
)
def validate_timetable(
    timetable_id: str,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return TimetablesPanel(store).validate(current_user, timetable_id)
