"""End-to-end tests for the HTTP API."""

import logging
from collections.abc import Iterator
from pathlib import Path

import pytest
from fastapi.testclient import TestClient
from starlette.datastructures import UploadFile

from inkcraft.api.app import create_app
from inkcraft.api.errors import GENERIC_SERVER_ERROR
from inkcraft.containers import AppContainer, build_container
from inkcraft.domain.models import ContactRecord
from tests.conftest import PNG_BYTES, TEST_PIN, InMemoryAssetStore


def _files(*names: str) -> list[tuple[str, tuple[str, bytes, str]]]:
    return [("photos", (name, PNG_BYTES, "image/png")) for name in names]


@pytest.fixture
def error_log(caplog: pytest.LogCaptureFixture) -> Iterator[pytest.LogCaptureFixture]:
    logger = logging.getLogger("inkcraft.api.errors")
    logger.addHandler(caplog.handler)
    yield caplog
    logger.removeHandler(caplog.handler)


def test_health(client: TestClient) -> None:
    assert client.get("/health").json() == {"status": "ok"}


def test_login_flow_sets_cookie_and_status(client: TestClient) -> None:
    assert client.get("/api/auth/status").json() == {"authenticated": False}

    response = client.post("/api/auth/login", json={"pin": TEST_PIN})

    assert response.status_code == 200
    assert response.json() == {"ok": True}
    cookie = response.headers["set-cookie"].lower()
    assert cookie.startswith("admin_token=")
    assert "httponly" in cookie
    assert "samesite=lax" in cookie
    assert "max-age=604800" in cookie
    assert "; secure" not in cookie
    assert client.get("/api/auth/status").json() == {"authenticated": True}


def test_login_accepts_numeric_pin(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={"pin": int(TEST_PIN)})

    assert response.status_code == 200


def test_login_with_wrong_pin_returns_401(client: TestClient) -> None:
    response = client.post("/api/auth/login", json={"pin": "0000"})

    assert response.status_code == 401
    assert response.json() == {"error": "Invalid PIN"}
    assert "set-cookie" not in response.headers


def test_login_without_readable_body_returns_401(client: TestClient) -> None:
    responses = [
        client.post("/api/auth/login"),
        client.post(
            "/api/auth/login",
            content=f"pin={TEST_PIN}",
            headers={"content-type": "application/x-www-form-urlencoded"},
        ),
        client.post("/api/auth/login", json=[TEST_PIN]),
    ]

    for response in responses:
        assert response.status_code == 401
        assert response.json() == {"error": "Invalid PIN"}


def test_logout_clears_session(admin_client: TestClient) -> None:
    response = admin_client.post("/api/auth/logout")

    assert response.json() == {"ok": True}
    assert admin_client.get("/api/auth/status").json() == {"authenticated": False}


def test_forged_cookie_is_rejected(client: TestClient) -> None:
    client.cookies.set("admin_token", "MTIz.deadbeef")

    assert client.get("/api/auth/status").json() == {"authenticated": False}
    response = client.put("/api/contact", json={"name": "X"})
    assert response.status_code == 401


def test_secure_cookie_in_production(container: AppContainer) -> None:
    settings = container.settings.model_copy(update={"environment": "production"})
    client = TestClient(create_app(build_container(settings)))

    response = client.post("/api/auth/login", json={"pin": TEST_PIN})

    assert "; secure" in response.headers["set-cookie"].lower()


def test_mutating_routes_require_auth(client: TestClient) -> None:
    calls = [
        client.post("/api/photos", files=_files("a.png")),
        client.request("DELETE", "/api/photos", json={"publicId": "a.png"}),
        client.delete("/api/photos/a.png"),
        client.post("/api/avatar", files=[("avatar", ("a.png", PNG_BYTES, "image/png"))]),
        client.delete("/api/avatar"),
        client.put("/api/contact", json={"name": "X"}),
    ]

    for response in calls:
        assert response.status_code == 401
        assert response.json() == {"error": "Authentication required"}


def test_update_contact_then_read_back(admin_client: TestClient) -> None:
    defaults = ContactRecord()

    put = admin_client.put("/api/contact", json={"name": "X", "avatar": "evil.png"})
    got = admin_client.get("/api/contact").json()

    assert put.status_code == 200
    assert put.json()["name"] == "X"
    assert got == {
        "name": "X",
        "phone": defaults.phone,
        "instagram": "",
        "telegram": "",
        "whatsapp": "",
        "avatar": "",
        "avatarPublicId": "",
        "avatarUrl": "",
    }


def test_photo_upload_list_and_delete(
    admin_client: TestClient, container: AppContainer
) -> None:
    uploads_dir = container.settings.uploads_dir

    response = admin_client.post("/api/photos", files=_files("one.png", "two.jpg"))

    assert response.status_code == 200
    uploaded = response.json()["uploaded"]
    assert len(uploaded) == 2
    refs = [item["publicId"] for item in uploaded]
    assert all((uploads_dir / ref).read_bytes() == PNG_BYTES for ref in refs)
    assert uploaded[0]["url"] == f"/uploads/{refs[0]}"

    listed = admin_client.get("/api/photos").json()["photos"]
    assert sorted(item["publicId"] for item in listed) == sorted(refs)

    by_body = admin_client.request("DELETE", "/api/photos", json={"publicId": refs[0]})
    by_path = admin_client.delete(f"/api/photos/{refs[1]}")

    assert by_body.json() == {"ok": True}
    assert by_path.json() == {"ok": True}
    assert admin_client.get("/api/photos").json() == {"photos": []}


def test_served_upload_matches_stored_bytes(admin_client: TestClient) -> None:
    uploaded = admin_client.post("/api/photos", files=_files("one.png")).json()

    response = admin_client.get(uploaded["uploaded"][0]["url"])

    assert response.status_code == 200
    assert response.content == PNG_BYTES


def test_delete_unknown_photo_is_ok(admin_client: TestClient) -> None:
    response = admin_client.delete("/api/photos/missing.png")

    assert response.status_code == 200
    assert response.json() == {"ok": True}


def test_delete_photo_without_public_id_is_400(admin_client: TestClient) -> None:
    response = admin_client.request("DELETE", "/api/photos", json={})

    assert response.status_code == 400
    assert response.json() == {"error": "publicId is required"}


def test_upload_rejects_disallowed_type_without_writing(
    admin_client: TestClient, container: AppContainer
) -> None:
    response = admin_client.post("/api/photos", files=_files("ok.png", "bad.gif"))

    assert response.status_code == 400
    assert "Unsupported file type" in response.json()["error"]
    assert list(container.settings.uploads_dir.iterdir()) == []


def test_upload_rejects_more_than_twenty_files(admin_client: TestClient) -> None:
    response = admin_client.post(
        "/api/photos", files=_files(*[f"{i}.png" for i in range(21)])
    )

    assert response.status_code == 400


def test_avatar_lifecycle(admin_client: TestClient) -> None:
    admin_client.post("/api/photos", files=_files("work.png"))

    response = admin_client.post(
        "/api/avatar", files=[("avatar", ("me.png", PNG_BYTES, "image/png"))]
    )

    assert response.status_code == 200
    avatar = response.json()["avatar"]
    assert avatar.startswith("/uploads/") and avatar.endswith("-me.png")
    assert admin_client.get("/api/contact").json()["avatarUrl"] == avatar
    photos = admin_client.get("/api/photos").json()["photos"]
    assert [photo["url"] for photo in photos] != []
    assert avatar not in [photo["url"] for photo in photos]

    assert admin_client.delete("/api/avatar").json() == {"ok": True}
    assert admin_client.get("/api/contact").json()["avatarUrl"] == ""
    assert admin_client.get(avatar).content != PNG_BYTES


def test_avatar_without_file_is_400(admin_client: TestClient) -> None:
    response = admin_client.post("/api/avatar")

    assert response.status_code == 400
    assert response.json() == {"error": "No file received"}


def test_unknown_paths_fall_back_to_index(client: TestClient) -> None:
    paths = ("/", "/admin/gallery", "/../../etc/passwd", "/a%00b", "/" + "a" * 300)
    for path in paths:
        response = client.get(path)
        assert response.status_code == 200
        assert "Inkcraft" in response.text


def test_unknown_api_path_is_json_404(client: TestClient) -> None:
    response = client.get("/api/unknown")

    assert response.status_code == 404
    assert response.json() == {"error": "Not found"}


def test_empty_upload_batch_stores_nothing(
    admin_client: TestClient, container: AppContainer
) -> None:
    response = admin_client.post("/api/photos")

    assert response.status_code == 200
    assert response.json() == {"uploaded": []}
    assert list(container.settings.uploads_dir.iterdir()) == []


def test_oversized_upload_is_rejected_without_buffering_it(
    container: AppContainer, monkeypatch: pytest.MonkeyPatch
) -> None:
    settings = container.settings.model_copy(update={"max_upload_bytes": 8})
    client = TestClient(create_app(build_container(settings)))
    client.post("/api/auth/login", json={"pin": TEST_PIN})
    read_sizes: list[int] = []
    original_read = UploadFile.read

    async def recording_read(self: UploadFile, size: int = -1) -> bytes:
        chunk = await original_read(self, size)
        read_sizes.append(len(chunk))
        return chunk

    monkeypatch.setattr(UploadFile, "read", recording_read)

    photos = client.post("/api/photos", files=_files("big.png"))
    avatar = client.post(
        "/api/avatar", files=[("avatar", ("big.png", PNG_BYTES, "image/png"))]
    )

    for response in (photos, avatar):
        assert response.status_code == 400
        assert response.json() == {"error": "File exceeds 8 bytes: big.png"}
    assert all(size <= 9 for size in read_sizes)
    assert list(settings.uploads_dir.iterdir()) == []


def test_record_store_failure_returns_generic_500(
    admin_client: TestClient,
    container: AppContainer,
    tmp_path: Path,
    error_log: pytest.LogCaptureFixture,
) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    container.contact_service.repository.path = blocker / "db.json"

    response = admin_client.put("/api/contact", json={"name": "X"})

    assert response.status_code == 500
    assert response.json() == {"error": GENERIC_SERVER_ERROR}
    assert "Record store failure on PUT /api/contact" in error_log.text
    assert "StoreWriteError" in error_log.text
    assert "blocker" in error_log.text
    assert "blocker" not in response.text


def test_asset_backend_failure_returns_generic_500(
    admin_client: TestClient,
    container: AppContainer,
    error_log: pytest.LogCaptureFixture,
) -> None:
    container.gallery_service.store = InMemoryAssetStore(fail_delete=True)

    response = admin_client.delete("/api/photos/work.png")

    assert response.status_code == 500
    assert response.json() == {"error": GENERIC_SERVER_ERROR}
    assert "Asset storage failure on DELETE /api/photos/work.png" in error_log.text
    assert "Cannot delete work.png" in error_log.text
    assert "work.png" not in response.text
