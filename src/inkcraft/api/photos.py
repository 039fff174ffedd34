"""Gallery and avatar endpoints."""

from fastapi import APIRouter, Body, Depends, File, UploadFile

from inkcraft.api.dependencies import get_container, require_auth
from inkcraft.api.schemas import DeletePhotoRequest, photo_to_json
from inkcraft.containers import AppContainer
from inkcraft.domain.errors import MissingFileError, TooLargeError
from inkcraft.domain.models import UploadPayload

router = APIRouter(prefix="/api", tags=["photos"])


async def _to_payload(upload: UploadFile, max_bytes: int) -> UploadPayload:
    """Read an upload, stopping one byte past ``max_bytes``."""
    name = upload.filename or ""
    if upload.size is not None and upload.size > max_bytes:
        raise TooLargeError(f"File exceeds {max_bytes} bytes: {name}")
    content = await upload.read(max_bytes + 1)
    if len(content) > max_bytes:
        raise TooLargeError(f"File exceeds {max_bytes} bytes: {name}")
    return UploadPayload(
        filename=name, content=content, content_type=upload.content_type
    )


@router.get("/photos")
async def list_photos(
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return gallery photos, without the avatar."""
    photos = await container.gallery_service.list_photos()
    return {"photos": [photo_to_json(photo) for photo in photos]}


@router.post("/photos", dependencies=[Depends(require_auth)])
async def upload_photos(
    photos: list[UploadFile] | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Store a batch of gallery photos."""
    max_bytes = container.settings.max_upload_bytes
    payloads = [await _to_payload(upload, max_bytes) for upload in photos or []]
    uploaded = await container.gallery_service.upload_photos(payloads)
    return {"uploaded": [photo_to_json(photo) for photo in uploaded]}


@router.delete("/photos", dependencies=[Depends(require_auth)])
async def delete_photo(
    body: DeletePhotoRequest | None = Body(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Delete a gallery photo named in the JSON body."""
    await container.gallery_service.delete_photo(body.public_id if body else None)
    return {"ok": True}


@router.delete("/photos/{name:path}", dependencies=[Depends(require_auth)])
async def delete_photo_by_name(
    name: str, container: AppContainer = Depends(get_container)
) -> dict[str, bool]:
    """Delete a gallery photo named in the path."""
    await container.gallery_service.delete_photo(name)
    return {"ok": True}


@router.post("/avatar", dependencies=[Depends(require_auth)])
async def upload_avatar(
    avatar: UploadFile | None = File(default=None),
    container: AppContainer = Depends(get_container),
) -> dict[str, str]:
    """Replace the profile avatar."""
    if avatar is None:
        raise MissingFileError()
    payload = await _to_payload(avatar, container.settings.max_upload_bytes)
    url = await container.avatar_service.set_avatar(payload)
    return {"avatar": url}


@router.delete("/avatar", dependencies=[Depends(require_auth)])
async def delete_avatar(
    container: AppContainer = Depends(get_container),
) -> dict[str, bool]:
    """Remove the profile avatar."""
    await container.avatar_service.remove_avatar()
    return {"ok": True}
