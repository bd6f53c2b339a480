# services/documents_service.py

"""
Upload hand-off for imported documents.

Two steps treated as one: the bytes go to the object store, then a metadata
row is recorded. If the row cannot be written the object is deleted again;
if that delete fails as well, the orphan sweep job removes it later.
"""

import time
from pathlib import Path
from typing import Callable, Optional

from dependencies.auth import SessionContext
from core.config import settings
from core.errors import StoreError, ValidationError
from core.logging_config import logger
from core.object_store import ObjectStore
from core.permission_helpers import require_capability
from core.permissions import CREATE
from core.row_store import RowStore
from core.scoping import tenant_filters
from core.utils import safe_filename, sanitize
from models.enums import DocumentKind, DocumentStatus, Feature
from services.panels import resolve_limit


DOCUMENTS_TABLE = "imported_documents"

CSV = "text/csv"
XLSX = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
XLS = "application/vnd.ms-excel"
DOCX = "application/vnd.openxmlformats-officedocument.wordprocessingml.document"
PDF = "application/pdf"

ALLOWED_CONTENT_TYPES = {
    DocumentKind.class_roster: {CSV, XLSX, XLS},
    DocumentKind.timetable: {CSV, XLSX, XLS, DOCX, PDF},
}

ALLOWED_EXTENSIONS = {
    DocumentKind.class_roster: {".csv", ".xlsx", ".xls"},
    DocumentKind.timetable: {".csv", ".xlsx", ".xls", ".docx", ".pdf"},
}

# Uploading a document requires create on the panel it feeds
DOCUMENT_FEATURES = {
    DocumentKind.class_roster: Feature.classes,
    DocumentKind.timetable: Feature.timetables,
}

STORAGE_FOLDERS = {
    DocumentKind.class_roster: "classes",
    DocumentKind.timetable: "timetables",
}

UNASSIGNED_TENANT_FOLDER = "unassigned"


def upload_prefixes() -> list[str]:
    return [f"{folder}/" for folder in STORAGE_FOLDERS.values()]


def storage_path(kind: DocumentKind, tenant_id: Optional[str], filename: str, timestamp_ms: int) -> str:
    tenant_folder = tenant_id or UNASSIGNED_TENANT_FOLDER
    return f"{STORAGE_FOLDERS[kind]}/{tenant_folder}/{timestamp_ms}_{safe_filename(filename)}"


def check_file_type(kind: DocumentKind, filename: str, content_type: Optional[str]):
    extension = Path(filename).suffix.lower()
    if content_type in ALLOWED_CONTENT_TYPES[kind] or extension in ALLOWED_EXTENSIONS[kind]:
        return
    allowed = ", ".join(sorted(e.lstrip(".").upper() for e in ALLOWED_EXTENSIONS[kind]))
    raise ValidationError(f"Unsupported file format. Use {allowed}")


class DocumentImports:
    def __init__(
        self,
        store: RowStore,
        objects: ObjectStore,
        clock: Callable[[], float] = time.time,
    ):
        self.store = store
        self.objects = objects
        self.clock = clock

    def upload(
        self,
        ctx: SessionContext,
        kind: DocumentKind,
        filename: str,
        data: bytes,
        content_type: Optional[str] = None,
    ) -> dict:
        kind = DocumentKind(kind)
        require_capability(ctx, DOCUMENT_FEATURES[kind], CREATE)

        filename = (filename or "").strip()
        if not filename:
            raise ValidationError("A file name is required")
        if not data:
            raise ValidationError("The file is empty")
        if len(data) > settings.UPLOAD_MAX_BYTES:
            raise ValidationError(
                f"File too large (max {settings.UPLOAD_MAX_BYTES // (1024 * 1024)} MB)"
            )
        check_file_type(kind, filename, content_type)

        path = storage_path(kind, ctx.tenant_id, filename, int(self.clock() * 1000))

        # Step 1: bytes
        self.objects.put(path, data, content_type)

        # Step 2: metadata row, with compensating delete
        try:
            document = self.store.insert(DOCUMENTS_TABLE, sanitize({
                "filename": filename,
                "storage_path": path,
                "document_kind": kind,
                "tenant_id": ctx.tenant_id,
                "uploader_id": ctx.user_id,
                "status": DocumentStatus.imported,
                "content_type": content_type,
                "size_bytes": len(data),
            }))
        except StoreError:
            self._discard(path)
            raise

        logger.info(f"User {ctx.user_id} imported {kind.value} document {path}")
        return document

    def _discard(self, path: str):
        try:
            self.objects.delete(path)
            logger.warning(f"Metadata insert failed; removed uploaded object {path}")
        except StoreError:
            logger.error(f"Could not remove orphaned upload {path}; left for the orphan sweep")

    def list(
        self,
        ctx: SessionContext,
        kind: Optional[DocumentKind] = None,
        limit: Optional[int] = None,
    ) -> list[dict]:
        filters = dict(tenant_filters(ctx))
        if kind:
            filters["document_kind"] = DocumentKind(kind).value
        return self.store.select(
            DOCUMENTS_TABLE,
            filters,
            order="created_at",
            desc=True,
            limit=resolve_limit(limit),
        )
