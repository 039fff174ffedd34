"""Gallery and avatar management over an asset store."""

import logging
from dataclasses import dataclass
from typing import Protocol

from inkcraft.domain.errors import AssetError, MissingRefError, TooManyFilesError
from inkcraft.domain.models import PhotoAsset, UploadPayload
from inkcraft.services.contact import ContactService, avatar_url, is_absolute_url
from inkcraft.services.uploads import MAX_UPLOAD_BYTES, validate_upload

logger = logging.getLogger(__name__)


class AssetStore(Protocol):
    """Interface for the place uploaded images live."""

    async def list_assets(self, exclude_ref: str | None = None) -> list[PhotoAsset]:
        """Return stored images, leaving out ``exclude_ref`` when given."""

    async def put(self, payload: UploadPayload) -> PhotoAsset:
        """Store an image and return its descriptor."""

    async def delete(self, ref: str) -> None:
        """Delete an image; unknown refs are ignored."""


@dataclass
class GalleryService:
    """Application service for the public photo gallery."""

    store: AssetStore
    contact_service: ContactService
    max_batch_size: int = 20
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    async def list_photos(self) -> list[PhotoAsset]:
        """Return gallery photos without the current avatar."""
        avatar_ref = self.contact_service.get_contact().avatar_asset_ref
        return await self.store.list_assets(exclude_ref=avatar_ref or None)

    async def upload_photos(self, payloads: list[UploadPayload]) -> list[PhotoAsset]:
        """Validate the whole batch, then store each photo in order."""
        if len(payloads) > self.max_batch_size:
            raise TooManyFilesError(
                f"At most {self.max_batch_size} files can be uploaded at once"
            )
        for payload in payloads:
            validate_upload(payload, self.max_upload_bytes)
        uploaded = []
        for payload in payloads:
            uploaded.append(await self.store.put(payload))
        logger.info("Uploaded %d gallery photos", len(uploaded))
        return uploaded

    async def delete_photo(self, ref: str | None) -> None:
        """Delete a gallery photo by ref."""
        if not ref or not ref.strip():
            raise MissingRefError()
        await self.store.delete(ref)


@dataclass
class AvatarService:
    """Application service for the single-slot profile avatar."""

    store: AssetStore
    contact_service: ContactService
    max_upload_bytes: int = MAX_UPLOAD_BYTES

    async def set_avatar(self, payload: UploadPayload) -> str:
        """Store a new avatar, record it, and drop the previous one."""
        validate_upload(payload, self.max_upload_bytes)
        previous_ref = self.contact_service.get_contact().avatar_asset_ref
        asset = await self.store.put(payload)
        if is_absolute_url(asset.url):
            record = self.contact_service.set_avatar(asset.url, asset.ref)
        else:
            record = self.contact_service.set_avatar(asset.ref)
        if previous_ref and previous_ref != asset.ref:
            await self._discard(previous_ref)
        return avatar_url(record)

    async def remove_avatar(self) -> None:
        """Delete the stored avatar and clear it from the contact record."""
        previous_ref = self.contact_service.get_contact().avatar_asset_ref
        if not previous_ref:
            return
        await self._discard(previous_ref)
        self.contact_service.clear_avatar()

    async def _discard(self, ref: str) -> None:
        try:
            await self.store.delete(ref)
        except AssetError:
            logger.warning("Failed to delete previous avatar %s", ref, exc_info=True)
