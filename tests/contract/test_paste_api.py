from __future__ import annotations

from pathlib import Path
from urllib.parse import quote

import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from pastebin.api.paste_api import build_paste_router
from pastebin.config import load_config
from pastebin.main import create_app

pytestmark = pytest.mark.unit


def build_client(paste_service, limits, *, history_enabled: bool = True) -> TestClient:
    app = FastAPI()
    app.include_router(
        build_paste_router(paste_service, limits=limits, history_enabled=history_enabled)
    )
    return TestClient(app)


@pytest.fixture()
def client(paste_service, limits) -> TestClient:
    return build_client(paste_service, limits)


def test_create_text_and_view(client: TestClient) -> None:
    response = client.post(
        "/api/pastes",
        data={"content": "print('hi')", "title": "script", "author": "bob", "hold_seconds": "120"},
    )

    assert response.status_code == 201
    body = response.json()
    assert body["url"].endswith(f"/api/pastes/{body['id']}")

    view = client.get(f"/api/pastes/{body['id']}")
    assert view.status_code == 200
    payload = view.json()
    assert payload["text"] == "print('hi')"
    assert payload["kind"] == "text"
    assert payload["title"] == "script"
    assert payload["author"] == "bob"
    assert payload["hold_seconds"] == 120


def test_create_file_upload_and_download_raw(client: TestClient) -> None:
    data = b"\x89PNG\r\n\x1a\n" + bytes(range(100))
    response = client.post(
        "/api/pastes",
        data={"title": "logo.png"},
        files={"file": ("logo.png", data, "image/png")},
    )
    assert response.status_code == 201
    paste_id = response.json()["id"]

    view = client.get(f"/api/pastes/{paste_id}").json()
    assert view["text"] is None
    assert view["size_bytes"] == len(data)

    raw = client.get(f"/raw/{paste_id}")
    assert raw.status_code == 200
    assert raw.content == data
    assert raw.headers["content-type"] == "image/png"
    assert raw.headers["content-disposition"] == "inline; filename=\"logo.png\"; filename*=UTF-8''logo.png"


def test_raw_download_of_unknown_type_is_attachment(client: TestClient) -> None:
    response = client.post(
        "/api/pastes",
        data={"title": 'my "archive".zip'},
        files={"file": ("a.zip", b"PK\x03\x04", "application/zip")},
    )
    raw = client.get(f"/raw/{response.json()['id']}")

    assert raw.headers["content-disposition"] == (
        'attachment; filename="my _archive_.zip"; '
        "filename*=UTF-8''my%20%22archive%22.zip"
    )


def test_create_empty_paste_is_rejected(client: TestClient, blob_store) -> None:
    response = client.post("/api/pastes", data={"content": "", "title": "nothing"})

    assert response.status_code == 400
    assert response.json()["detail"]["failure_reason"] == "invalid_paste"
    assert list(blob_store.iter_blobs()) == []


def test_create_oversized_upload_is_rejected(client: TestClient, limits, blob_store, paste_repo) -> None:
    data = b"x" * (limits.max_upload_bytes + 10)
    response = client.post("/api/pastes", files={"file": ("big.bin", data, "application/octet-stream")})

    assert response.status_code == 413
    assert list(blob_store.iter_blobs()) == []
    assert paste_repo.list_all() == []


def test_raw_download_with_non_ascii_title(client: TestClient) -> None:
    title = "Привет мир.txt"
    paste_id = client.post("/api/pastes", data={"content": "hi", "title": title}).json()["id"]

    raw = client.get(f"/raw/{paste_id}")

    assert raw.status_code == 200
    assert raw.content == b"hi"
    assert raw.headers["content-disposition"] == (
        'inline; filename="______ ___.txt"; '
        f"filename*=UTF-8''{quote(title, safe='')}"
    )


@pytest.mark.parametrize("hold_seconds", [str(10**12), str(2**64)])
def test_create_with_hold_beyond_limit_is_rejected(
    client: TestClient, blob_store, paste_repo, hold_seconds: str
) -> None:
    response = client.post("/api/pastes", data={"content": "forever", "hold_seconds": hold_seconds})

    assert response.status_code == 400
    assert response.json()["detail"]["failure_reason"] == "invalid_paste"
    assert list(blob_store.iter_blobs()) == []
    assert paste_repo.list_all() == []


def test_unknown_paste_returns_404(client: TestClient) -> None:
    assert client.get("/api/pastes/doesNotExist0000").status_code == 404
    assert client.get("/raw/doesNotExist0000").status_code == 404


def test_history_lists_recent_pastes(client: TestClient, clock) -> None:
    first = client.post("/api/pastes", data={"content": "one"}).json()["id"]
    clock.advance(1)
    second = client.post("/api/pastes", data={"content": "two"}).json()["id"]

    response = client.get("/api/pastes")

    assert response.status_code == 200
    assert [item["id"] for item in response.json()] == [second, first]


def test_history_can_be_disabled(paste_service, limits) -> None:
    client = build_client(paste_service, limits, history_enabled=False)

    assert client.get("/api/pastes").status_code == 404


def test_delete_endpoint(client: TestClient) -> None:
    paste_id = client.post("/api/pastes", data={"content": "bye"}).json()["id"]

    assert client.delete(f"/api/pastes/{paste_id}").json() == {"id": paste_id, "deleted": True}
    assert client.delete(f"/api/pastes/{paste_id}").json() == {"id": paste_id, "deleted": False}
    assert client.get(f"/api/pastes/{paste_id}").status_code == 404


def test_create_app_serves_health_and_pastes(tmp_path: Path) -> None:
    config = load_config(
        {
            "PASTE_ROOT": str(tmp_path / "blobs"),
            "DATABASE_URL": f"sqlite:///{(tmp_path / 'app.db').as_posix()}",
            "REAP_INTERVAL_SECONDS": "3600",
        }
    )
    app = create_app(config)

    with TestClient(app) as client:
        assert client.get("/healthz").json() == {"status": "ok"}
        paste_id = client.post("/api/pastes", data={"content": "hello"}).json()["id"]
        assert client.get(f"/raw/{paste_id}").content == b"hello"

    assert (tmp_path / "blobs" / paste_id).read_bytes() == b"hello"
