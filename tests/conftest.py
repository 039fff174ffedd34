"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from inkcraft.api.app import create_app
from inkcraft.config import Settings
from inkcraft.containers import AppContainer, build_container
from inkcraft.domain.errors import AssetStorageError
from inkcraft.domain.models import ContactRecord, PhotoAsset, UploadPayload
from inkcraft.services.assets import AssetStore
from inkcraft.services.contact import ContactRepository

TEST_PIN = "1234"
PNG_BYTES = b"\x89PNG\r\n\x1a\nfake-image-bytes"


@dataclass
class FakeClock:
    """Controllable clock for time-dependent services."""

    now: datetime = field(default_factory=lambda: datetime(2026, 1, 1, tzinfo=UTC))

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


@dataclass
class InMemoryContactRepository(ContactRepository):
    """In-memory contact repository for tests."""

    record: ContactRecord = field(default_factory=ContactRecord)
    saves: int = 0

    def load(self) -> ContactRecord:
        return self.record

    def save(self, record: ContactRecord) -> None:
        self.record = record
        self.saves += 1


@dataclass
class InMemoryAssetStore(AssetStore):
    """In-memory asset store that records every call."""

    url_base: str = "/uploads"
    assets: dict[str, PhotoAsset] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)
    fail_delete: bool = False

    async def list_assets(self, exclude_ref: str | None = None) -> list[PhotoAsset]:
        return [asset for ref, asset in self.assets.items() if ref != exclude_ref]

    async def put(self, payload: UploadPayload) -> PhotoAsset:
        ref = f"{len(self.assets) + len(self.deleted) + 1}-{payload.filename}"
        asset = PhotoAsset(ref=ref, url=f"{self.url_base}/{ref}")
        self.assets[ref] = asset
        return asset

    async def delete(self, ref: str) -> None:
        if self.fail_delete:
            raise AssetStorageError(f"Cannot delete {ref}")
        self.deleted.append(ref)
        self.assets.pop(ref, None)


def image(name: str = "work.png", content: bytes = PNG_BYTES) -> UploadPayload:
    return UploadPayload(filename=name, content=content, content_type="image/png")


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    public_dir = tmp_path / "public"
    public_dir.mkdir()
    (public_dir / "index.html").write_text("<h1>Inkcraft</h1>", encoding="utf-8")
    return Settings(
        admin_pin=TEST_PIN,
        admin_secret="test-secret",
        environment="local",
        public_dir=public_dir,
        data_dir=tmp_path / "data",
        cloudinary_cloud_name=None,
        cloudinary_api_key=None,
        cloudinary_api_secret=None,
    )


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    return build_container(settings)


@pytest.fixture
def client(container: AppContainer) -> TestClient:
    return TestClient(create_app(container))


@pytest.fixture
def admin_client(client: TestClient) -> TestClient:
    response = client.post("/api/auth/login", json={"pin": TEST_PIN})
    assert response.status_code == 200
    return client
