"""Domain models for the portfolio."""

from dataclasses import dataclass


@dataclass(frozen=True)
class ContactRecord:
    """Contact and profile details shown on the public page."""

    name: str = "Тату-мастер"
    phone: str = "+7 000 000-00-00"
    instagram: str = ""
    telegram: str = ""
    whatsapp: str = ""
    avatar_ref: str = ""
    avatar_external_id: str = ""

    @property
    def avatar_asset_ref(self) -> str:
        """Return the ref under which the avatar is held in its asset store."""
        if self.avatar_external_id:
            return self.avatar_external_id
        if not self.avatar_ref:
            return ""
        return self.avatar_ref.replace("\\", "/").rsplit("/", 1)[-1]


EDITABLE_CONTACT_FIELDS = ("name", "phone", "instagram", "telegram", "whatsapp")


@dataclass(frozen=True)
class PhotoAsset:
    """A stored image and the URL it is displayed from."""

    ref: str
    url: str


@dataclass(frozen=True)
class UploadPayload:
    """A single uploaded file as received from a client."""

    filename: str
    content: bytes
    content_type: str | None = None

    @property
    def size(self) -> int:
        return len(self.content)
