"""Asset store backed by a local directory."""

import logging
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import quote

from inkcraft.domain.errors import AssetStorageError
from inkcraft.domain.models import PhotoAsset, UploadPayload
from inkcraft.services.assets import AssetStore
from inkcraft.services.contact import LOCAL_UPLOADS_PREFIX
from inkcraft.services.uploads import build_stored_name, is_allowed_image, safe_basename

logger = logging.getLogger(__name__)


@dataclass
class LocalAssetStore(AssetStore):
    """Keeps images as files in a single directory served under ``url_prefix``."""

    root: Path
    url_prefix: str = LOCAL_UPLOADS_PREFIX

    async def list_assets(self, exclude_ref: str | None = None) -> list[PhotoAsset]:
        """List image files in directory order."""
        if not self.root.is_dir():
            return []
        try:
            names = [
                entry.name
                for entry in self.root.iterdir()
                if entry.is_file() and is_allowed_image(entry.name)
            ]
        except OSError as exc:
            raise AssetStorageError("Failed to list uploads") from exc
        return [self._asset(name) for name in names if name != exclude_ref]

    async def put(self, payload: UploadPayload) -> PhotoAsset:
        """Write the payload under a timestamp-prefixed name."""
        name = build_stored_name(payload.filename)
        target = self.root / name
        counter = 1
        while target.exists():
            stored = Path(name)
            target = self.root / f"{stored.stem}-{counter}{stored.suffix}"
            counter += 1
        name = target.name
        try:
            self.root.mkdir(parents=True, exist_ok=True)
            target.write_bytes(payload.content)
        except OSError as exc:
            raise AssetStorageError(f"Failed to store {name}") from exc
        logger.info("Stored upload %s (%d bytes)", name, payload.size)
        return self._asset(name)

    async def delete(self, ref: str) -> None:
        """Remove the file named by ``ref`` if it exists."""
        target = self.root / safe_basename(ref)
        try:
            target.unlink(missing_ok=True)
        except OSError as exc:
            raise AssetStorageError(f"Failed to delete {target.name}") from exc

    def _asset(self, name: str) -> PhotoAsset:
        return PhotoAsset(ref=name, url=f"{self.url_prefix}/{quote(name)}")
