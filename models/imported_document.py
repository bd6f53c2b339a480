# models/imported_document.py

from typing import Optional
from datetime import datetime
from pydantic import BaseModel

from models.enums import DocumentKind, DocumentStatus


class ImportedDocumentRead(BaseModel):
    """
    Opaque uploaded file (class list or timetable). No parsing happens
    against it here; ingestion is a separate batch concern.
    """
    id: str
    filename: str
    storage_path: str
    document_kind: DocumentKind
    tenant_id: Optional[str] = None
    uploader_id: str
    status: DocumentStatus = DocumentStatus.imported
    content_type: Optional[str] = None
    size_bytes: Optional[int] = None
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
