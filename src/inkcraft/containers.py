"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from inkcraft.adapters.cloudinary_asset_store import CloudinaryAssetStore
from inkcraft.adapters.json_contact_repository import JsonContactRepository
from inkcraft.adapters.local_asset_store import LocalAssetStore
from inkcraft.config import Settings
from inkcraft.services.assets import AvatarService, GalleryService
from inkcraft.services.auth import SessionAuthenticator
from inkcraft.services.contact import ContactService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    authenticator: SessionAuthenticator
    contact_service: ContactService
    gallery_service: GalleryService
    avatar_service: AvatarService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    contact_repository = JsonContactRepository(resolved_settings.db_file)
    contact_repository.ensure_initialized()
    resolved_settings.uploads_dir.mkdir(parents=True, exist_ok=True)

    cloud_stores: list[CloudinaryAssetStore] = []
    if resolved_settings.use_cloud:
        gallery_store = _cloudinary_store(resolved_settings, "gallery")
        avatar_store = _cloudinary_store(resolved_settings, "avatar")
        cloud_stores = [gallery_store, avatar_store]
    else:
        gallery_store = avatar_store = LocalAssetStore(resolved_settings.uploads_dir)

    contact_service = ContactService(contact_repository)
    authenticator = SessionAuthenticator(
        secret=resolved_settings.admin_secret,
        pin=resolved_settings.admin_pin,
        max_age=timedelta(days=resolved_settings.session_max_age_days),
    )
    gallery_service = GalleryService(
        store=gallery_store,
        contact_service=contact_service,
        max_batch_size=resolved_settings.max_batch_size,
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )
    avatar_service = AvatarService(
        store=avatar_store,
        contact_service=contact_service,
        max_upload_bytes=resolved_settings.max_upload_bytes,
    )

    async def close_resources() -> None:
        for store in cloud_stores:
            await store.close()

    return AppContainer(
        settings=resolved_settings,
        authenticator=authenticator,
        contact_service=contact_service,
        gallery_service=gallery_service,
        avatar_service=avatar_service,
        close_resources=close_resources,
    )


def _cloudinary_store(settings: Settings, slot: str) -> CloudinaryAssetStore:
    return CloudinaryAssetStore.create(
        cloud_name=settings.cloudinary_cloud_name or "",
        api_key=settings.cloudinary_api_key or "",
        api_secret=settings.cloudinary_api_secret or "",
        folder=f"{settings.cloudinary_folder}/{slot}",
    )
