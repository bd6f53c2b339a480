# services/permissions_service.py

from datetime import datetime, timezone
from typing import Optional

from dependencies.auth import SessionContext
from core.errors import InvalidTransition, ValidationError
from core.permissions import APPROVE, CREATE
from models.enums import Feature, PermissionStatus
from models.permission_request import PermissionDecision, PermissionRequestCreate
from services.panels import FeaturePanel


TERMINAL_STATUSES = frozenset({PermissionStatus.approved.value, PermissionStatus.rejected.value})


class PermissionsPanel(FeaturePanel):
    """
    Leave / absence requests.

    Requesters see their own requests only; approvers see the whole tenant.
    pending → approved | rejected, once, by an approver of the same tenant.
    """

    feature = Feature.permissions
    entity_name = "Permission request"

    def create(self, ctx: SessionContext, payload: PermissionRequestCreate) -> dict:
        self.require(ctx, CREATE)

        reason = payload.reason.strip()
        if not reason:
            raise ValidationError("A reason is required")
        if not payload.start_date:
            raise ValidationError("A start date is required")
        if payload.end_date and payload.end_date < payload.start_date:
            raise ValidationError("End date cannot be before start date")

        return self._insert(ctx, {
            "kind": payload.kind,
            "reason": reason,
            "start_date": payload.start_date,
            "end_date": payload.end_date,
            "status": PermissionStatus.pending,
        })

    def list_by_status(
        self,
        ctx: SessionContext,
        status: Optional[PermissionStatus] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        filters = {"status": status.value} if status else None
        return self.list(ctx, limit=limit, filters=filters)

    def resolve(self, ctx: SessionContext, request_id: str, decision: PermissionDecision) -> dict:
        # a processed request answers InvalidTransition to anyone who can see it,
        # its own requester included; capability is checked after
        row = self.get(ctx, request_id)
        if row.get("status") in TERMINAL_STATUSES:
            raise InvalidTransition(f"{self.entity_name} was already processed")

        self.require(ctx, APPROVE)

        if decision.decision not in TERMINAL_STATUSES:
            raise InvalidTransition(f"Cannot move a request to '{decision.decision}'")

        return self._transition(
            ctx,
            request_id,
            from_status=PermissionStatus.pending.value,
            patch={
                "status": decision.decision,
                "resolver_id": ctx.user_id,
                "resolved_at": datetime.now(timezone.utc),
                "response_comment": decision.response_comment,
            },
        )

    def approve(self, ctx: SessionContext, request_id: str, comment: Optional[str] = None) -> dict:
        return self.resolve(ctx, request_id, PermissionDecision(decision="approved", response_comment=comment))

    def reject(self, ctx: SessionContext, request_id: str, comment: Optional[str] = None) -> dict:
        return self.resolve(ctx, request_id, PermissionDecision(decision="rejected", response_comment=comment))
