# routers/students.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.permission_helpers import requires_any_capability
from core.permissions import CREATE
from core.row_store import RowStore
from models.enums import Feature
from models.profile import StudentRead
from services.directory_service import StudentDirectory

router = APIRouter(
    prefix="/students",
    tags=["Students"],
)

# Only staff who pick students in a form may browse the directory
DIRECTORY_CAPABILITIES = [
    (Feature.receipts, CREATE),
    (Feature.classes, CREATE),
]


@router.get(
    "/",
    response_model=List[StudentRead],
    dependencies=[Depends(requires_any_capability(DIRECTORY_CAPABILITIES))],
)
def list_students(
    search: Optional[str] = Query(None, description="Case-insensitive match on first or last name"),
    limit: Optional[int] = Query(None, ge=1),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return StudentDirectory(store).list_students(current_user, search=search, limit=limit)
