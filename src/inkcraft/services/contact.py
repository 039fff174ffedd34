"""Contact details and avatar bookkeeping."""

from dataclasses import dataclass, replace
from typing import Protocol
from urllib.parse import quote

from inkcraft.domain.models import EDITABLE_CONTACT_FIELDS, ContactRecord

LOCAL_UPLOADS_PREFIX = "/uploads"


class ContactRepository(Protocol):
    """Persistence interface for the singleton contact record."""

    def load(self) -> ContactRecord:
        """Return the stored record, or the default record."""

    def save(self, record: ContactRecord) -> None:
        """Persist the full record."""


@dataclass
class ContactService:
    """Application service for reading and editing contact details."""

    repository: ContactRepository

    def get_contact(self) -> ContactRecord:
        """Return the current contact record."""
        return self.repository.load()

    def update_contact(self, changes: dict[str, object]) -> ContactRecord:
        """Merge editable fields into the stored record and persist it.

        Keys that are absent or ``None`` keep their previous value. Avatar
        fields are ignored here; they change only through the avatar flow.
        """
        current = self.repository.load()
        updates = {
            key: str(changes[key])
            for key in EDITABLE_CONTACT_FIELDS
            if changes.get(key) is not None
        }
        updated = replace(current, **updates)
        self.repository.save(updated)
        return updated

    def set_avatar(self, ref: str, external_id: str = "") -> ContactRecord:
        """Point the contact record at a newly stored avatar."""
        updated = replace(
            self.repository.load(), avatar_ref=ref, avatar_external_id=external_id
        )
        self.repository.save(updated)
        return updated

    def clear_avatar(self) -> ContactRecord:
        """Remove the avatar reference from the contact record."""
        return self.set_avatar("", "")


def is_absolute_url(value: str) -> bool:
    return value.startswith(("http://", "https://"))


def avatar_url(record: ContactRecord, prefix: str = LOCAL_UPLOADS_PREFIX) -> str:
    """Return the URL the avatar is displayed from, or an empty string."""
    if not record.avatar_ref:
        return ""
    if is_absolute_url(record.avatar_ref):
        return record.avatar_ref
    return f"{prefix}/{quote(record.avatar_asset_ref)}"
