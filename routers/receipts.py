# routers/receipts.py

from fastapi import APIRouter, Depends, Query
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_row_store
from core.permission_helpers import requires_capability
from core.permissions import CREATE
from core.row_store import RowStore
from models.enums import Feature, PaymentKind
from models.receipt import ReceiptCreate, ReceiptRead, ReceiptUpdate
from services.receipts_service import ReceiptsPanel

router = APIRouter(
    prefix="/receipts",
    tags=["Financial Receipts"],
)


@router.get("/", response_model=List[ReceiptRead])
def list_receipts(
    payment_kind: Optional[PaymentKind] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """
    - Issuers (econome, rh, direction): all receipts of the school
    - Everyone else: receipts issued to their own profile
    """
    filters = {"payment_kind": payment_kind.value} if payment_kind else None
    return ReceiptsPanel(store).list(current_user, limit=limit, filters=filters)


@router.get("/{receipt_id}", response_model=ReceiptRead)
def get_receipt(
    receipt_id: str,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return ReceiptsPanel(store).get(current_user, receipt_id)


@router.post(
    "/",
    response_model=ReceiptRead,
    status_code=201,
    dependencies=[Depends(requires_capability(Feature.receipts, CREATE))],
)
def create_receipt(
    payload: ReceiptCreate,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    return ReceiptsPanel(store).create(current_user, payload)


@router.put(
    "/{receipt_id}",
    response_model=ReceiptRead,
    dependencies=[Depends(requires_capability(Feature.receipts, CREATE))],
)
def replace_receipt(
    receipt_id: str,
    payload: ReceiptUpdate,
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    """Replace student, amount, payment kind and description in one write."""
    return ReceiptsPanel(store).update(current_user, receipt_id, payload)
