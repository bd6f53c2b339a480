# services/receipts_service.py

from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from dependencies.auth import SessionContext
from core.errors import NotFoundError, ValidationError
from core.logging_config import logger
from core.permissions import CREATE
from core.row_store import RowStore
from core.utils import sanitize
from models.enums import Feature, ReceiptStatus
from models.receipt import ReceiptBase, ReceiptCreate, ReceiptUpdate
from services.directory_service import StudentDirectory
from services.panels import FeaturePanel


CENTS = Decimal("0.01")


def normalize_amount(amount) -> Decimal:
    """Fixed-point, two decimal places. Zero, negative and non-finite amounts are rejected."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, TypeError, ValueError):
        raise ValidationError("Amount must be a number")

    if not value.is_finite():
        raise ValidationError("Amount must be greater than zero")

    # the stored (rounded) amount must be positive
    rounded = value.quantize(CENTS, rounding=ROUND_HALF_UP)
    if rounded <= 0:
        raise ValidationError("Amount must be greater than zero")
    return rounded


class ReceiptsPanel(FeaturePanel):
    """
    Financial receipts.

    Issuer roles (econome, rh, direction) create, edit and read every receipt
    of their school. Students and parents read receipts whose student_id is
    their own profile id. Edits replace the whole mutable field set; previous
    values are not kept.
    """

    feature = Feature.receipts
    entity_name = "Receipt"

    def __init__(self, store: RowStore):
        super().__init__(store)
        self.directory = StudentDirectory(store)

    def _mutable_fields(self, ctx: SessionContext, payload: ReceiptBase) -> dict:
        amount = normalize_amount(payload.amount)
        if not payload.student_id or not payload.student_id.strip():
            raise ValidationError("A student is required")
        self.directory.require_students(ctx, [payload.student_id.strip()])

        return {
            "student_id": payload.student_id.strip(),
            "amount": amount,
            "payment_kind": payload.payment_kind,
            "description": payload.description,
        }

    def create(self, ctx: SessionContext, payload: ReceiptCreate) -> dict:
        self.require(ctx, CREATE)

        row = self._mutable_fields(ctx, payload)
        row["status"] = ReceiptStatus.issued
        return self._insert(ctx, row)

    def update(self, ctx: SessionContext, receipt_id: str, payload: ReceiptUpdate) -> dict:
        self.require(ctx, CREATE)

        # scoped fetch: a receipt of another school is reported as missing
        self.get(ctx, receipt_id)

        patch = self._mutable_fields(ctx, payload)
        patch["updated_at"] = datetime.now(timezone.utc)

        updated = self.store.update(
            self.table,
            receipt_id,
            sanitize(patch),
            expect={"tenant_id": ctx.tenant_id},
        )
        if not updated:
            raise NotFoundError("Receipt not found")

        logger.info(f"User {ctx.user_id} edited receipt {receipt_id}")
        return updated[0]
