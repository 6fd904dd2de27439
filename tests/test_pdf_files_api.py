from fastapi.testclient import TestClient


def _payload(filename: str) -> dict:
    return {
        "filename": filename,
        "original_name": "Prova 1.pdf",
        "name": "Prova 1",
        "year": 1,
        "type": "exam",
        "file_size": 20480,
        "file_url": f"http://localhost:9000/pdfs/{filename}",
    }


def test_insert_returns_record_with_id() -> None:
    from apps.api.main import app

    client = TestClient(app)
    resp = client.post("/pdf_files", json=_payload("1718000000000-Prova_1.pdf"))

    assert resp.status_code == 201
    body = resp.json()
    assert isinstance(body["id"], int)
    assert body["filename"] == "1718000000000-Prova_1.pdf"
    assert body["year"] == 1
    assert body["file_size"] == 20480
    assert body["created_at"]


def test_ids_are_distinct() -> None:
    from apps.api.main import app

    client = TestClient(app)
    first = client.post("/pdf_files", json=_payload("1718000000001-a.pdf")).json()
    second = client.post("/pdf_files", json=_payload("1718000000002-b.pdf")).json()
    assert first["id"] != second["id"]


def test_duplicate_filename_conflicts() -> None:
    from apps.api.main import app

    client = TestClient(app)
    assert client.post("/pdf_files", json=_payload("1718000000003-dup.pdf")).status_code == 201
    resp = client.post("/pdf_files", json=_payload("1718000000003-dup.pdf"))
    assert resp.status_code == 409
    assert "already exists" in resp.json()["detail"]


def test_year_must_be_integer() -> None:
    from apps.api.main import app

    client = TestClient(app)
    payload = _payload("1718000000004-c.pdf")
    payload["year"] = "first"
    assert client.post("/pdf_files", json=payload).status_code == 422
