# services/panels.py

"""
Shared query/guard contract for every dashboard panel.

A panel is a CRUD unit over one entity table. Reads always go through
scope_filters(), writes through stamp_creation(), and status changes through
a conditional update on the expected prior status.
"""

from typing import Optional

from dependencies.auth import SessionContext
from core.config import settings
from core.errors import AuthorizationError, InvalidTransition, NotFoundError
from core.logging_config import logger
from core.permissions import Capabilities, capabilities_for
from core.row_store import RowStore
from core.scoping import entity_scope, scope_filters, stamp_creation
from core.utils import sanitize
from models.enums import Feature


def resolve_limit(limit: Optional[int]) -> int:
    """Bounded fetch window shared by every list endpoint."""
    if limit is None:
        return settings.DEFAULT_LIST_LIMIT
    return max(1, min(limit, settings.MAX_LIST_LIMIT))


class FeaturePanel:
    feature: Feature
    entity_name = "Record"

    def __init__(self, store: RowStore):
        self.store = store
        self.scope = entity_scope(self.feature)

    @property
    def table(self) -> str:
        return self.scope.table

    # -----------------------------------------------------
    # Guards
    # -----------------------------------------------------
    def capabilities(self, ctx: SessionContext) -> Capabilities:
        return capabilities_for(ctx.role, self.feature)

    def require(self, ctx: SessionContext, capability: str):
        if not self.capabilities(ctx).allows(capability):
            logger.warning(
                f"User {ctx.user_id} ({ctx.role}) denied {self.feature.value}:{capability}"
            )
            raise AuthorizationError()

    # -----------------------------------------------------
    # Reads
    # -----------------------------------------------------
    def list(
        self,
        ctx: SessionContext,
        limit: Optional[int] = None,
        filters: Optional[dict] = None,
    ) -> list[dict]:
        # scope filters are applied last so caller filters can never widen them
        conditions = {**(filters or {}), **scope_filters(self.feature, ctx)}
        return self.store.select(
            self.table,
            conditions,
            order="created_at",
            desc=True,
            limit=resolve_limit(limit),
        )

    def get(self, ctx: SessionContext, row_id: str) -> dict:
        row = self.store.get(self.table, row_id, scope_filters(self.feature, ctx))
        if not row:
            raise NotFoundError(f"{self.entity_name} not found")
        return row

    # -----------------------------------------------------
    # Writes
    # -----------------------------------------------------
    def _insert(self, ctx: SessionContext, row: dict) -> dict:
        payload = sanitize(stamp_creation(row, self.feature, ctx))
        created = self.store.insert(self.table, payload)
        logger.info(
            f"User {ctx.user_id} created {self.table} row {created.get('id')} "
            f"for tenant {ctx.tenant_id}"
        )
        return created

    def _transition(
        self,
        ctx: SessionContext,
        row_id: str,
        from_status: str,
        patch: dict,
    ) -> dict:
        """
        Move a row out of `from_status`. The update only matches while the row
        is still in `from_status`, so of two concurrent callers exactly one wins;
        the other gets InvalidTransition.
        """
        row = self.get(ctx, row_id)
        if row.get("status") != from_status:
            raise InvalidTransition(
                f"{self.entity_name} is '{row.get('status')}', expected '{from_status}'"
            )

        updated = self.store.update(
            self.table,
            row_id,
            sanitize(patch),
            expect={"status": from_status, **scope_filters(self.feature, ctx)},
        )
        if not updated:
            raise InvalidTransition(f"{self.entity_name} was already processed")

        logger.info(
            f"User {ctx.user_id} moved {self.table} row {row_id} "
            f"from {from_status} to {patch.get('status')}"
        )
        return updated[0]
