# models/receipt.py

from typing import Optional
from datetime import datetime
from decimal import Decimal
from pydantic import BaseModel, Field

from models.enums import PaymentKind, ReceiptStatus


class ReceiptBase(BaseModel):
    student_id: str = Field(..., description="Profile id of the student the receipt belongs to. Get from GET /students.")
    amount: Decimal = Field(..., description="Amount paid, fixed-point (2 decimal places)")
    payment_kind: PaymentKind = PaymentKind.inscription
    description: Optional[str] = None


class ReceiptCreate(ReceiptBase):
    pass


class ReceiptUpdate(ReceiptBase):
    """Full replacement of the mutable fields. No partial patch."""
    pass


class ReceiptRead(ReceiptBase):
    id: str
    tenant_id: Optional[str] = None
    issuer_id: str
    status: ReceiptStatus = ReceiptStatus.issued
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
