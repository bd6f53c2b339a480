# routers/permissions.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.permission_helpers import requires_capability
from core.permissions import CREATE
from core.row_store import RowStore
from models.enums import Feature, PermissionStatus
from models.permission_request import (
    PermissionDecision,
    PermissionRequestCreate,
    PermissionRequestRead,
)
from services.permissions_service import PermissionsPanel

router = APIRouter(
    prefix="/permissions",
    tags=["Permission Requests"],
)


@router.post(
    "/",
    response_model=PermissionRequestRead,
    status_code=201,
    dependencies=[Depends(requires_capability(Feature.permissions, CREATE))],
)
def create_permission_request(
    payload: PermissionRequestCreate,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    Submit a permission request (eleve, parent, enseignant).
    Always created as pending, owned by the caller.
    """
    return PermissionsPanel(store).create(current_user, payload)


@router.get("/", response_model=List[PermissionRequestRead])
def list_permission_requests(
    status: Optional[PermissionStatus] = Query(None, description="Filter by status (pending, approved, rejected)"),
    limit: Optional[int] = Query(None, ge=1),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    List permission requests.

    - Requesters: only their own requests
    - Approvers (direction, censeur, educateur): every request of the school
    """
    return PermissionsPanel(store).list_by_status(current_user, status=status, limit=limit)


@router.get("/{request_id}", response_model=PermissionRequestRead)
def get_permission_request(
    request_id: str,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return PermissionsPanel(store).get(current_user, request_id)


@router.post("/{request_id}/decision", response_model=PermissionRequestRead)
def decide_permission_request(
    request_id: str,
    payload: PermissionDecision,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    Approve or reject a pending request. A request that was already
    processed returns 409.
    """
    return PermissionsPanel(store).resolve(current_user, request_id, payload)
