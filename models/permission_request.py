# models/permission_request.py

from typing import Optional, Literal
from datetime import date, datetime
from pydantic import BaseModel, Field

from models.enums import PermissionKind, PermissionStatus


Decision = Literal["approved", "rejected"]


class PermissionRequestBase(BaseModel):
    """Leave / absence request submitted by a student, parent or teacher."""
    kind: PermissionKind = Field(PermissionKind.absence_eleve, description="Type of request")
    reason: str = Field(..., description="Why the permission is requested")
    start_date: date
    end_date: Optional[date] = Field(None, description="Optional last day (inclusive)")


class PermissionRequestCreate(PermissionRequestBase):
    pass


class PermissionDecision(BaseModel):
    """Approver input for the pending → approved | rejected transition."""
    decision: Decision
    response_comment: Optional[str] = Field(None, description="Optional note shown to the requester")


class PermissionRequestRead(PermissionRequestBase):
    id: str
    requester_id: str
    tenant_id: Optional[str] = None
    status: PermissionStatus
    resolver_id: Optional[str] = None
    resolved_at: Optional[datetime] = None
    response_comment: Optional[str] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
