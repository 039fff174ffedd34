"""JSON file-backed contact repository."""

import json
import logging
import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from inkcraft.domain.errors import StoreReadError, StoreWriteError
from inkcraft.domain.models import ContactRecord
from inkcraft.services.contact import ContactRepository

logger = logging.getLogger(__name__)

_FIELD_KEYS = {
    "name": "name",
    "phone": "phone",
    "instagram": "instagram",
    "telegram": "telegram",
    "whatsapp": "whatsapp",
    "avatar_ref": "avatar",
    "avatar_external_id": "avatarPublicId",
}


@dataclass
class JsonContactRepository(ContactRepository):
    """Stores the contact record under the ``contact`` key of a JSON document.

    The whole document is rewritten on every save. Concurrent writers race and
    the last write wins.
    """

    path: Path

    def ensure_initialized(self) -> None:
        """Create the document with default contents if it does not exist."""
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.save(ContactRecord())
        logger.info("Initialized record store at %s", self.path)

    def load(self) -> ContactRecord:
        """Return the stored record, falling back to defaults on any problem."""
        try:
            document = self._read_document()
        except StoreReadError:
            logger.warning(
                "Using default contact record; could not read %s",
                self.path,
                exc_info=True,
            )
            return ContactRecord()
        contact = document.get("contact")
        if not isinstance(contact, dict):
            return ContactRecord()
        return _record_from_json(contact)

    def save(self, record: ContactRecord) -> None:
        """Atomically replace the document with the given record."""
        document = {"contact": _record_to_json(record)}
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(
                dir=self.path.parent, prefix=f".{self.path.name}.", suffix=".tmp"
            )
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as handle:
                    json.dump(document, handle, ensure_ascii=False, indent=2)
                os.replace(tmp_name, self.path)
            except BaseException:
                Path(tmp_name).unlink(missing_ok=True)
                raise
        except OSError as exc:
            raise StoreWriteError(f"Failed to write {self.path}") from exc

    def _read_document(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            raw = self.path.read_text(encoding="utf-8")
            document = json.loads(raw or "null")
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
            raise StoreReadError(f"Failed to read {self.path}") from exc
        if document is None:
            return {}
        if not isinstance(document, dict):
            raise StoreReadError(f"Unexpected document type in {self.path}")
        return document


def _record_from_json(contact: dict[str, object]) -> ContactRecord:
    defaults = ContactRecord()
    values = {}
    for field_name, key in _FIELD_KEYS.items():
        value = contact.get(key)
        values[field_name] = (
            getattr(defaults, field_name) if value is None else str(value)
        )
    return ContactRecord(**values)


def _record_to_json(record: ContactRecord) -> dict[str, str]:
    return {key: getattr(record, field_name) for field_name, key in _FIELD_KEYS.items()}
