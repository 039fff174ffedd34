"""Stateless signed-cookie session authentication."""

import base64
import binascii
import hashlib
import hmac
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

from inkcraft.domain.errors import InvalidPinError

SESSION_COOKIE_NAME = "admin_token"


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _b64url_encode(raw: bytes) -> str:
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _b64url_decode(encoded: str) -> bytes:
    padding = "=" * (-len(encoded) % 4)
    return base64.urlsafe_b64decode(encoded + padding)


@dataclass
class SessionAuthenticator:
    """Issues and verifies HMAC-signed session credentials.

    A credential is ``base64url(issued_at_ms) + "." + hex(hmac_sha256(secret,
    issued_at_ms))``. Nothing is stored server side: a credential is valid while
    its signature matches and it is younger than ``max_age``.
    """

    secret: str
    pin: str
    max_age: timedelta = timedelta(days=7)
    clock: Callable[[], datetime] = field(default=_utc_now)

    def issue(self) -> str:
        """Return a credential bound to the current time."""
        payload = str(self._now_ms())
        return f"{_b64url_encode(payload.encode())}.{self._sign(payload)}"

    def verify(self, token: object) -> bool:
        """Return True when the credential is authentic and not expired."""
        if not isinstance(token, str) or "." not in token:
            return False
        encoded, signature = token.split(".", 1)
        try:
            payload = _b64url_decode(encoded).decode("ascii")
        except (binascii.Error, ValueError):
            return False
        if not payload.isdigit() or len(payload) > 16:
            return False
        if _b64url_encode(payload.encode()) != encoded:
            return False
        if not hmac.compare_digest(
            signature.encode("utf-8"), self._sign(payload).encode("utf-8")
        ):
            return False
        age_ms = self._now_ms() - int(payload)
        return age_ms <= self.max_age / timedelta(milliseconds=1)

    def login(self, pin: str) -> str:
        """Exchange the operator PIN for a fresh credential."""
        submitted = pin.encode("utf-8", "surrogatepass")
        if not hmac.compare_digest(submitted, self.pin.encode("utf-8")):
            raise InvalidPinError()
        return self.issue()

    def _now_ms(self) -> int:
        return int(self.clock().timestamp() * 1000)

    def _sign(self, payload: str) -> str:
        return hmac.new(
            self.secret.encode("utf-8"), payload.encode("utf-8"), hashlib.sha256
        ).hexdigest()
