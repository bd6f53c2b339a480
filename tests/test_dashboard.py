"""
Dashboard shell: role-derived tabs and the stats header.
"""

import pytest

from services.dashboard_service import STATS_UNAVAILABLE, _tab, build_tabs
from services.stats_service import get_tenant_stats


def _keys(role):
    return [t["key"] for t in build_tabs(role)]


def test_direction_tabs():
    assert _keys("direction") == [
        "overview", "timetable", "receipts", "announcements", "permissions", "classes",
    ]


def test_student_tabs():
    tabs = build_tabs("eleve")
    assert [t["key"] for t in tabs] == ["timetable", "receipts", "announcements", "permissions"]
    assert tabs[1]["label"] == "Mes reçus"
    assert not any(t["can_approve"] for t in tabs)


def test_teacher_tabs():
    assert _keys("enseignant") == ["overview", "permissions"]


def test_econome_tabs():
    assert _keys("econome") == ["overview", "receipts", "permissions"]


def test_approver_flag_on_permissions_tab():
    permissions_tab = next(t for t in build_tabs("educateur") if t["key"] == "permissions")
    assert permissions_tab["can_approve"]


def test_unknown_role_still_gets_a_dashboard():
    assert _keys("unassigned") == ["permissions"]


def test_stats_counts(store, ctx_factory):
    store.seed("user_profiles", role="eleve", tenant_id="S1")
    store.seed("user_profiles", role="eleve", tenant_id="S1")
    store.seed("user_profiles", role="enseignant", tenant_id="S1")
    store.seed("user_profiles", role="eleve", tenant_id="S2")
    store.seed("announcements", tenant_id="S1")

    stats = get_tenant_stats(store, ctx_factory(tenant_id="S1"))
    assert stats == {"students": 2, "teachers": 1, "classes": 0, "announcements": 1, "timetables": 0}


def test_stats_without_tenant_are_zero(store, ctx_factory):
    store.seed("user_profiles", role="eleve", tenant_id=None)
    stats = get_tenant_stats(store, ctx_factory(tenant_id=None))
    assert set(stats.values()) == {0}
    assert store.calls == []


def test_http_dashboard(client, login_as, ctx_factory):
    login_as(ctx_factory(role="parent", tenant_id="S1"))
    response = client.get("/dashboard/")

    assert response.status_code == 200
    body = response.json()
    assert body["profile"]["role"] == "parent"
    assert body["stats"]["students"] == 0
    assert body["notices"] == []


def test_http_dashboard_survives_stats_failure(client, login_as, store, ctx_factory):
    store.fail("count", "user_profiles")
    login_as(ctx_factory(role="direction", tenant_id="S1"))

    response = client.get("/dashboard/")

    assert response.status_code == 200
    assert response.json()["stats"] is None
    assert response.json()["notices"] == [STATS_UNAVAILABLE]


def test_http_stats_failure_is_503(client, login_as, store, ctx_factory):
    store.fail("count", "user_profiles")
    login_as(ctx_factory(role="direction", tenant_id="S1"))
    assert client.get("/stats/").status_code == 503


def test_tab_needs_a_role():
    with pytest.raises(TypeError):
        _tab("overview", "Vue d'ensemble")

    overview = _tab("overview", "Vue d'ensemble", "direction")
    assert not overview["can_create"]
    assert not overview["can_approve"]
