# jobs/orphan_sweep_job.py

"""
Reconciles uploaded objects with imported_documents rows.

An upload whose metadata insert failed, and whose compensating delete also
failed, leaves an object nothing points to. This job deletes such objects
once they are older than the grace period, so uploads still in flight are
never touched.
"""

from datetime import datetime, timedelta, timezone
from typing import Optional

from core.config import settings
from core.errors import StoreError
from core.logging_config import logger
from core.object_store import ObjectStore
from core.row_store import RowStore, column_values
from core.supabase_client import get_supabase_client
from services.documents_service import DOCUMENTS_TABLE, upload_prefixes


def _as_utc(value: datetime) -> datetime:
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


def referenced_paths(store: RowStore) -> set[str]:
    rows = store.select_all(DOCUMENTS_TABLE, columns="storage_path")
    return column_values(rows, "storage_path")


def sweep_orphaned_uploads(
    store: RowStore,
    objects: ObjectStore,
    now: Optional[datetime] = None,
    grace_minutes: Optional[int] = None,
) -> dict:
    now = _as_utc(now or datetime.now(timezone.utc))
    grace = timedelta(minutes=settings.ORPHAN_GRACE_MINUTES if grace_minutes is None else grace_minutes)
    cutoff = now - grace

    summary = {"scanned": 0, "deleted": 0, "failed": 0, "deleted_paths": []}

    known = referenced_paths(store)

    for prefix in upload_prefixes():
        for obj in objects.list(prefix):
            summary["scanned"] += 1
            if obj.path in known or _as_utc(obj.last_modified) > cutoff:
                continue

            try:
                objects.delete(obj.path)
            except StoreError:
                summary["failed"] += 1
                continue

            summary["deleted"] += 1
            summary["deleted_paths"].append(obj.path)
            logger.info(f"[ORPHAN SWEEP] deleted unreferenced upload {obj.path}")

    logger.info(
        f"[ORPHAN SWEEP] scanned={summary['scanned']} "
        f"deleted={summary['deleted']} failed={summary['failed']}"
    )
    return summary


def run():
    """
    CLI entry point (one-off job / cron): python -m jobs.orphan_sweep_job
    """
    client = get_supabase_client()
    if not client:
        raise RuntimeError("Supabase not configured")

    return sweep_orphaned_uploads(RowStore(client), ObjectStore())


if __name__ == "__main__":
    run()
