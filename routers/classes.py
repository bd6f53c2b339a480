# routers/classes.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.permission_helpers import requires_capability
from core.permissions import CREATE
from core.row_store import RowStore
from models.enums import Feature
from models.class_roster import ClassMembershipRead, ClassRosterCreate, ClassRosterRead
from services.classes_service import ClassesPanel

router = APIRouter(
    prefix="/classes",
    tags=["Class Management"],
)


@router.get("/", response_model=List[ClassRosterRead])
def list_classes(
    limit: Optional[int] = Query(None, ge=1),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return ClassesPanel(store).list(current_user, limit=limit)


@router.post(
    "/",
    response_model=ClassRosterRead,
    status_code=201,
    dependencies=[Depends(requires_capability(Feature.classes, CREATE))],
)
def create_class(
    payload: ClassRosterCreate,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    Create a class (direction, censeur, secretariat) and enrol the
    selected students.
    """
    return ClassesPanel(store).create(current_user, payload)


@router.get("/{class_id}/students", response_model=List[ClassMembershipRead])
def list_class_students(
    class_id: str,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return ClassesPanel(store).list_members(current_user, class_id)
