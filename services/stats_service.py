# services/stats_service.py

from dependencies.auth import PROFILES_TABLE, SessionContext
from core.row_store import RowStore
from core.scoping import entity_scope, tenant_filters
from models.enums import Feature, Role


def get_tenant_stats(store: RowStore, ctx: SessionContext) -> dict:
    """Headline counts for the session's school. No school, no numbers."""
    if not ctx.tenant_id:
        return {
            "students": 0,
            "teachers": 0,
            "classes": 0,
            "announcements": 0,
            "timetables": 0,
        }

    scope = tenant_filters(ctx)
    return {
        "students": store.count(PROFILES_TABLE, {"role": Role.eleve.value, **scope}),
        "teachers": store.count(PROFILES_TABLE, {"role": Role.enseignant.value, **scope}),
        "classes": store.count(entity_scope(Feature.classes).table, scope),
        "announcements": store.count(entity_scope(Feature.announcements).table, scope),
        "timetables": store.count(entity_scope(Feature.timetables).table, scope),
    }
