# services/directory_service.py

import re
from typing import Iterable, Optional

from dependencies.auth import PROFILES_TABLE, SessionContext
from core.errors import ValidationError
from core.row_store import RowStore, column_values
from core.scoping import tenant_filters
from models.enums import Role
from services.panels import resolve_limit


STUDENT_COLUMNS = "id, first_name, last_name"


def search_term(search: Optional[str]) -> str:
    """Drop characters that carry meaning in a PostgREST or= filter."""
    return re.sub(r"[,().%*\\:]", " ", search or "").strip()


class StudentDirectory:
    """Students (eleve profiles) of the session's school."""

    def __init__(self, store: RowStore):
        self.store = store

    def list_students(
        self,
        ctx: SessionContext,
        search: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        term = search_term(search)
        return self.store.select(
            PROFILES_TABLE,
            {"role": Role.eleve.value, **tenant_filters(ctx)},
            order="last_name",
            desc=False,
            limit=resolve_limit(limit),
            columns=STUDENT_COLUMNS,
            ilike_any={"first_name": term, "last_name": term} if term else None,
        )

    def require_students(self, ctx: SessionContext, student_ids: Iterable[str]) -> list[str]:
        """Deduplicate ids and check each one is a student of this school."""
        ids = list(dict.fromkeys(i for i in student_ids if i))
        if not ids:
            return []

        rows = self.store.select(
            PROFILES_TABLE,
            {"id": ids, "role": Role.eleve.value, **tenant_filters(ctx)},
            order=None,
            columns="id",
        )
        found = {str(i) for i in column_values(rows, "id")}
        missing = [i for i in ids if i not in found]
        if missing:
            raise ValidationError(f"Unknown students: {', '.join(missing)}")

        return ids
