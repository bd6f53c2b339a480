# routers/documents.py

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile
from typing import List, Optional

from dependencies.auth import get_current_user, SessionContext
from dependencies.stores import get_object_store, get_row_store
from core.object_store import ObjectStore
from core.row_store import RowStore
from models.enums import DocumentKind
from models.imported_document import ImportedDocumentRead
from services.documents_service import DocumentImports

router = APIRouter(
    prefix="/documents",
    tags=["Imported Documents"],
)


@router.post("/", response_model=ImportedDocumentRead, status_code=201)
async def upload_document(
    file: UploadFile = File(...),
    document_kind: DocumentKind = Form(..., description="class_roster or timetable"),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
    objects: ObjectStore = Depends(get_object_store),
):
    """
    Store a class list (CSV/XLSX) or timetable (CSV/XLSX/DOCX/PDF) and
    record it. The file is kept as-is; nothing is parsed.
    """
    content = await file.read()
    return DocumentImports(store, objects).upload(
        current_user,
        document_kind,
        file.filename or "",
        content,
        file.content_type,
    )


@router.get("/", response_model=List[ImportedDocumentRead])
def list_documents(
    document_kind: Optional[DocumentKind] = Query(None),
    limit: Optional[int] = Query(None, ge=1),
    current_user: SessionContext = Depends(get_current_user),
    store: RowStore = Depends(get_row_store),
):
    # listing needs no object store access
    return DocumentImports(store, objects=None).list(current_user, kind=document_kind, limit=limit)
