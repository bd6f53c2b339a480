"""
RowStore translation onto the Supabase query builder.
"""

from unittest.mock import MagicMock

import pytest

from core.errors import StoreError
from core.row_store import RowStore, column_values


def _client(data=None, count=None):
    client = MagicMock()
    query = MagicMock()
    for method in ("select", "eq", "is_", "in_", "or_", "order", "limit", "range", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    query.execute.return_value = MagicMock(data=data, count=count)
    client.table.return_value = query
    return client, query


def test_missing_client_is_store_error():
    with pytest.raises(StoreError):
        RowStore(None)


def test_filters_translate():
    client, query = _client(data=[{"id": "1"}])

    rows = RowStore(client).select(
        "announcements",
        {"tenant_id": None, "id": ["1", "2"], "urgent": True},
        limit=5,
    )

    assert rows == [{"id": "1"}]
    client.table.assert_called_with("announcements")
    query.is_.assert_called_once_with("tenant_id", "null")
    query.in_.assert_called_once_with("id", ["1", "2"])
    query.eq.assert_called_once_with("urgent", True)
    query.order.assert_called_once_with("created_at", desc=True)
    query.limit.assert_called_once_with(5)


def test_conditional_update_adds_expectations():
    client, query = _client(data=[])

    updated = RowStore(client).update("permission_requests", "r1", {"status": "approved"}, expect={"status": "pending"})

    assert updated == []
    query.update.assert_called_once_with({"status": "approved"})
    assert [c.args for c in query.eq.call_args_list] == [("id", "r1"), ("status", "pending")]


def test_count_uses_exact_count():
    client, query = _client(data=[], count=7)
    assert RowStore(client).count("user_profiles", {"role": "eleve"}) == 7
    query.select.assert_called_once_with("id", count="exact")


def test_remote_failure_becomes_store_error():
    client, query = _client()
    query.execute.side_effect = Exception("connection reset")

    with pytest.raises(StoreError):
        RowStore(client).select("receipts")


def test_insert_without_data_is_store_error():
    client, _ = _client(data=[])
    with pytest.raises(StoreError):
        RowStore(client).insert("receipts", {"amount": "1.00"})


def test_column_values_skips_nulls():
    assert column_values([{"a": 1}, {"a": None}, {"b": 2}], "a") == {1}


def test_offset_uses_range():
    client, query = _client(data=[])
    RowStore(client).select("imported_documents", order="id", limit=100, offset=200)
    query.range.assert_called_once_with(200, 299)
    query.limit.assert_not_called()


def test_select_all_pages_until_empty():
    client, query = _client()
    # the server returns fewer rows than asked for; only the empty page stops paging
    query.execute.side_effect = [
        MagicMock(data=[{"id": "1"}, {"id": "2"}]),
        MagicMock(data=[{"id": "3"}]),
        MagicMock(data=[]),
    ]

    rows = RowStore(client).select_all("imported_documents", page_size=10)

    assert [r["id"] for r in rows] == ["1", "2", "3"]
    assert [c.args for c in query.range.call_args_list] == [(0, 9), (2, 11), (3, 12)]


def test_ilike_any_builds_or_filter():
    client, query = _client(data=[])
    RowStore(client).select("user_profiles", ilike_any={"first_name": "awa", "last_name": "awa"})
    query.or_.assert_called_once_with("first_name.ilike.%awa%,last_name.ilike.%awa%")
