"""
Document import hand-off: object put, metadata insert, compensating delete.
"""

import pytest

from core.config import settings
from core.errors import AuthorizationError, StoreError, ValidationError
from services.documents_service import DOCUMENTS_TABLE, DocumentImports, storage_path

CSV_BYTES = b"nom,prenom\nDiallo,Awa\n"


@pytest.fixture
def secretariat(ctx_factory):
    return ctx_factory(user_id="SEC1", role="secretariat", tenant_id="S1")


@pytest.fixture
def imports(store, objects):
    return DocumentImports(store, objects, clock=lambda: 1700000000.0)


def test_storage_path():
    assert storage_path("class_roster", "S1", "liste élèves.csv", 42) == "classes/S1/42_liste__l_ves.csv"
    assert storage_path("timetable", None, "edt.pdf", 1).startswith("timetables/unassigned/")


def test_upload_records_document(imports, store, objects, secretariat):
    document = imports.upload(secretariat, "class_roster", "6B.csv", CSV_BYTES, "text/csv")

    assert document["storage_path"] == "classes/S1/1700000000000_6B.csv"
    assert document["uploader_id"] == "SEC1"
    assert document["status"] == "imported"
    assert document["size_bytes"] == len(CSV_BYTES)
    assert list(objects.objects) == [document["storage_path"]]


def test_failed_insert_deletes_object(imports, store, objects, secretariat):
    store.fail("insert", DOCUMENTS_TABLE)

    with pytest.raises(StoreError):
        imports.upload(secretariat, "class_roster", "6B.csv", CSV_BYTES, "text/csv")
    assert objects.objects == {}


def test_failed_compensation_leaves_orphan(imports, store, objects, secretariat):
    store.fail("insert", DOCUMENTS_TABLE)
    objects.fail_delete = True

    with pytest.raises(StoreError):
        imports.upload(secretariat, "class_roster", "6B.csv", CSV_BYTES, "text/csv")
    assert len(objects.objects) == 1
    assert store.tables[DOCUMENTS_TABLE] == []


def test_failed_put_writes_no_row(imports, store, objects, secretariat):
    objects.fail_put = True

    with pytest.raises(StoreError):
        imports.upload(secretariat, "class_roster", "6B.csv", CSV_BYTES, "text/csv")
    assert ("insert", DOCUMENTS_TABLE) not in store.calls


def test_unsupported_format(imports, secretariat):
    with pytest.raises(ValidationError):
        imports.upload(secretariat, "class_roster", "photo.png", b"\x89PNG", "image/png")


def test_pdf_allowed_for_timetables_only(imports, secretariat):
    imports.upload(secretariat, "timetable", "edt.pdf", b"%PDF-1.4", "application/pdf")
    with pytest.raises(ValidationError):
        imports.upload(secretariat, "class_roster", "liste.pdf", b"%PDF-1.4", "application/pdf")


def test_empty_file(imports, secretariat):
    with pytest.raises(ValidationError):
        imports.upload(secretariat, "class_roster", "6B.csv", b"", "text/csv")


def test_too_large(imports, secretariat, monkeypatch):
    monkeypatch.setattr(settings, "UPLOAD_MAX_BYTES", 8)
    with pytest.raises(ValidationError):
        imports.upload(secretariat, "class_roster", "6B.csv", CSV_BYTES, "text/csv")


def test_upload_requires_create_on_target_panel(imports, ctx_factory):
    econome = ctx_factory(role="econome", tenant_id="S1")
    with pytest.raises(AuthorizationError):
        imports.upload(econome, "timetable", "edt.csv", CSV_BYTES, "text/csv")

    # educateur manages timetables but not classes
    educateur = ctx_factory(role="educateur", tenant_id="S1")
    imports.upload(educateur, "timetable", "edt.csv", CSV_BYTES, "text/csv")
    with pytest.raises(AuthorizationError):
        imports.upload(educateur, "class_roster", "6B.csv", CSV_BYTES, "text/csv")


def test_list_is_tenant_scoped(imports, secretariat, ctx_factory):
    imports.upload(secretariat, "class_roster", "6B.csv", CSV_BYTES, "text/csv")
    assert len(imports.list(secretariat)) == 1
    assert imports.list(ctx_factory(role="secretariat", tenant_id="S2")) == []
    assert imports.list(secretariat, kind="timetable") == []


def test_http_upload(client, login_as, secretariat, objects):
    login_as(secretariat)
    response = client.post(
        "/documents/",
        files={"file": ("6B.csv", CSV_BYTES, "text/csv")},
        data={"document_kind": "class_roster"},
    )
    assert response.status_code == 201
    assert response.json()["document_kind"] == "class_roster"
    assert response.json()["storage_path"] in objects.objects

    response = client.get("/documents/")
    assert response.status_code == 200
    assert len(response.json()) == 1
