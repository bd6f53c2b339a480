# core/scoping.py

"""
Tenant scoping: the row filter applied to every panel read and the
ownership stamp applied to every panel write.

Rules, in order:
  1. a session without a tenant only sees rows whose tenant is also null
  2. personal entities (permission requests, receipts) are filtered by owner
     when the caller lacks view_all for the feature; tenant is ignored
  3. everything else is filtered by tenant
  4. creation stamps tenant and owner from the session, whatever the client sent
"""

from dataclasses import dataclass

from dependencies.auth import SessionContext
from core.permissions import capabilities_for
from models.enums import Feature


TENANT_COLUMN = "tenant_id"


@dataclass(frozen=True)
class EntityScope:
    table: str
    owner_column: str
    personal: bool = False


ENTITY_SCOPES = {
    Feature.announcements: EntityScope("announcements", "author_id"),
    Feature.permissions: EntityScope("permission_requests", "requester_id", personal=True),
    Feature.receipts: EntityScope("receipts", "student_id", personal=True),
    Feature.timetables: EntityScope("timetable_versions", "creator_id"),
    Feature.classes: EntityScope("class_rosters", "creator_id"),
}


# Column stamped with the session user on creation. For receipts the owner
# (student) is chosen by the issuer, so the session user goes to issuer_id.
CREATOR_COLUMNS = {
    Feature.announcements: "author_id",
    Feature.permissions: "requester_id",
    Feature.receipts: "issuer_id",
    Feature.timetables: "creator_id",
    Feature.classes: "creator_id",
}


def entity_scope(feature: Feature | str) -> EntityScope:
    return ENTITY_SCOPES[Feature(feature)]


def owner_only(feature: Feature | str, ctx: SessionContext) -> bool:
    scope = entity_scope(feature)
    return scope.personal and not capabilities_for(ctx.role, feature).can_view_all


def scope_filters(feature: Feature | str, ctx: SessionContext) -> dict:
    """Equality filters (None meaning IS NULL) restricting reads for this session."""
    scope = entity_scope(feature)

    if owner_only(feature, ctx):
        return {scope.owner_column: ctx.user_id}

    return {TENANT_COLUMN: ctx.tenant_id}


def tenant_filters(ctx: SessionContext) -> dict:
    """Tenant filter for tables that are not a panel entity (profiles, documents, memberships)."""
    return {TENANT_COLUMN: ctx.tenant_id}


def stamp_creation(row: dict, feature: Feature | str, ctx: SessionContext) -> dict:
    """Return a copy of `row` with tenant and creator taken from the session."""
    stamped = dict(row)
    stamped[TENANT_COLUMN] = ctx.tenant_id
    stamped[CREATOR_COLUMNS[Feature(feature)]] = ctx.user_id
    return stamped
