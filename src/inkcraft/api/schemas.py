"""Request models and response serializers for the HTTP API."""

from pydantic import BaseModel, ConfigDict, Field

from inkcraft.domain.models import ContactRecord, PhotoAsset
from inkcraft.services.contact import avatar_url


class LoginRequest(BaseModel):
    pin: str | int | None = None


class DeletePhotoRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    public_id: str | None = Field(default=None, alias="publicId")


class ContactUpdateRequest(BaseModel):
    """Editable contact fields; anything else in the body is ignored."""

    name: str | None = None
    phone: str | None = None
    instagram: str | None = None
    telegram: str | None = None
    whatsapp: str | None = None


def photo_to_json(asset: PhotoAsset) -> dict[str, str]:
    return {"url": asset.url, "publicId": asset.ref}


def contact_to_json(record: ContactRecord) -> dict[str, str]:
    return {
        "name": record.name,
        "phone": record.phone,
        "instagram": record.instagram,
        "telegram": record.telegram,
        "whatsapp": record.whatsapp,
        "avatar": record.avatar_ref,
        "avatarPublicId": record.avatar_external_id,
    }


def contact_with_avatar_url(record: ContactRecord) -> dict[str, str]:
    return {**contact_to_json(record), "avatarUrl": avatar_url(record)}
