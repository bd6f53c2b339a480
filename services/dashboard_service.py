# services/dashboard_service.py

"""
Dashboard shell: which tabs a session sees, plus the stats header.
No business rules live here; everything is read off the role policy.
"""

from dependencies.auth import SessionContext
from core.errors import PortalError
from core.logging_config import logger
from core.permissions import capabilities_for
from core.roles import is_family, is_staff, role_label
from core.row_store import RowStore
from models.enums import Feature
from services.stats_service import get_tenant_stats


STATS_UNAVAILABLE = "Statistics are temporarily unavailable"


def _tab(key: str, label: str, role: str, feature: Feature | None = None) -> dict:
    caps = capabilities_for(role, feature) if feature else None
    return {
        "key": key,
        "label": label,
        "can_create": bool(caps and caps.can_create),
        "can_approve": bool(caps and caps.can_approve),
    }


def build_tabs(role: str) -> list[dict]:
    tabs = []
    family = is_family(role)

    if is_staff(role):
        tabs.append(_tab("overview", "Vue d'ensemble", role))

    if capabilities_for(role, Feature.timetables).can_create:
        tabs.append(_tab("timetable", "Emplois du temps", role, Feature.timetables))
    elif family:
        tabs.append(_tab("timetable", "Mon emploi du temps", role, Feature.timetables))

    if capabilities_for(role, Feature.receipts).can_create:
        tabs.append(_tab("receipts", "Reçus financiers", role, Feature.receipts))
    elif family:
        tabs.append(_tab("receipts", "Mes reçus", role, Feature.receipts))

    if capabilities_for(role, Feature.announcements).can_create or family:
        tabs.append(_tab("announcements", "Communiqués", role, Feature.announcements))

    tabs.append(_tab("permissions", "Permissions", role, Feature.permissions))

    if capabilities_for(role, Feature.classes).can_create:
        tabs.append(_tab("classes", "Gestion des classes", role, Feature.classes))

    return tabs


def profile_payload(ctx: SessionContext) -> dict:
    return {
        "id": ctx.user_id,
        "display_name": ctx.display_name,
        "role": ctx.role,
        "role_label": role_label(ctx.role),
        "tenant_id": ctx.tenant_id,
        "email": ctx.email,
        "phone": ctx.phone,
    }


def build_dashboard(store: RowStore, ctx: SessionContext) -> dict:
    notices = []
    try:
        stats = get_tenant_stats(store, ctx)
    except PortalError as e:
        # one failing panel never takes the shell down
        logger.warning(f"Stats unavailable for tenant {ctx.tenant_id}: {e.message}")
        stats = None
        notices.append(STATS_UNAVAILABLE)

    return {
        "profile": profile_payload(ctx),
        "tabs": build_tabs(ctx.role),
        "stats": stats,
        "notices": notices,
    }
