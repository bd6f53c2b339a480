# core/row_store.py

"""
Authenticated row store.

Thin wrapper over the Supabase PostgREST query builder exposing the
operations the panels need. Every remote failure surfaces as StoreError;
nothing is retried here.

Filter values:
    None               -> column IS NULL
    list / tuple / set -> column IN (...)
    anything else      -> column = value
"""

from typing import Any, Iterable, Optional

from supabase import Client

from core.errors import StoreError, store_error
from core.logging_config import logger


def _apply_filters(query, filters: Optional[dict]):
    for column, value in (filters or {}).items():
        if value is None:
            query = query.is_(column, "null")
        elif isinstance(value, (list, tuple, set, frozenset)):
            query = query.in_(column, list(value))
        else:
            query = query.eq(column, value)
    return query


class RowStore:
    def __init__(self, client: Optional[Client]):
        if client is None:
            logger.error("Row store requested but Supabase client is not configured")
            raise StoreError()
        self.client = client

    # -----------------------------------------------------
    # Reads
    # -----------------------------------------------------
    def select(
        self,
        table: str,
        filters: Optional[dict] = None,
        order: Optional[str] = "created_at",
        desc: bool = True,
        limit: Optional[int] = None,
        columns: str = "*",
        offset: Optional[int] = None,
        ilike_any: Optional[dict] = None,
    ) -> list[dict]:
        """
        `ilike_any` maps columns to a substring; a row matches when any of
        those columns contains it (case-insensitive).
        """
        try:
            query = _apply_filters(self.client.table(table).select(columns), filters)
            if ilike_any:
                query = query.or_(",".join(
                    f"{column}.ilike.%{term}%" for column, term in ilike_any.items()
                ))
            if order:
                query = query.order(order, desc=desc)
            if offset is not None and limit is not None:
                query = query.range(offset, offset + limit - 1)
            elif limit is not None:
                query = query.limit(limit)
            result = query.execute()
        except Exception as e:
            raise store_error(e, f"select from {table}") from e
        return result.data or []

    def select_all(
        self,
        table: str,
        filters: Optional[dict] = None,
        columns: str = "*",
        order: str = "id",
        page_size: int = 1000,
    ) -> list[dict]:
        """
        Every matching row, fetched page by page.

        PostgREST caps each response at the project's max_rows, which can be
        lower than page_size, so a short page does not mean the end: only an
        empty page does.
        """
        rows: list[dict] = []
        while True:
            page = self.select(
                table,
                filters,
                order=order,
                desc=False,
                limit=page_size,
                columns=columns,
                offset=len(rows),
            )
            if not page:
                return rows
            rows.extend(page)

    def get(self, table: str, row_id: str, filters: Optional[dict] = None) -> Optional[dict]:
        rows = self.select(table, {"id": row_id, **(filters or {})}, order=None, limit=1)
        return rows[0] if rows else None

    def count(self, table: str, filters: Optional[dict] = None) -> int:
        try:
            query = _apply_filters(
                self.client.table(table).select("id", count="exact"),
                filters,
            )
            result = query.execute()
        except Exception as e:
            raise store_error(e, f"count on {table}") from e
        return result.count or 0

    # -----------------------------------------------------
    # Writes
    # -----------------------------------------------------
    def insert(self, table: str, row: dict) -> dict:
        try:
            result = self.client.table(table).insert(row).execute()
        except Exception as e:
            raise store_error(e, f"insert into {table}") from e

        if not result.data:
            logger.error(f"insert into {table} returned no data")
            raise StoreError()
        return result.data[0]

    def insert_many(self, table: str, rows: Iterable[dict]) -> list[dict]:
        rows = list(rows)
        if not rows:
            return []
        try:
            result = self.client.table(table).insert(rows).execute()
        except Exception as e:
            raise store_error(e, f"bulk insert into {table}") from e
        return result.data or []

    def update(
        self,
        table: str,
        row_id: str,
        patch: dict,
        expect: Optional[dict] = None,
    ) -> list[dict]:
        """
        Update one row by id. `expect` adds extra equality conditions, which
        makes the update conditional: an empty result means no row matched.
        """
        try:
            query = self.client.table(table).update(patch).eq("id", row_id)
            query = _apply_filters(query, expect)
            result = query.execute()
        except Exception as e:
            raise store_error(e, f"update on {table}") from e
        return result.data or []

    def delete(self, table: str, row_id: str) -> None:
        try:
            self.client.table(table).delete().eq("id", row_id).execute()
        except Exception as e:
            raise store_error(e, f"delete from {table}") from e


def column_values(rows: list[dict], column: str) -> set[Any]:
    return {row.get(column) for row in rows if row.get(column) is not None}
