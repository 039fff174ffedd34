"""Asset store backed by the Cloudinary image-hosting API."""

import hashlib
import logging
from dataclasses import dataclass
from datetime import UTC, datetime

import httpx

from inkcraft.domain.errors import AssetStorageError
from inkcraft.domain.models import PhotoAsset, UploadPayload
from inkcraft.services.assets import AssetStore

logger = logging.getLogger(__name__)

CLOUDINARY_API_URL = "https://api.cloudinary.com/v1_1"
SEARCH_MAX_RESULTS = 100


def sign_params(params: dict[str, object], api_secret: str) -> str:
    """Return the Cloudinary signature for a set of request parameters."""
    to_sign = "&".join(
        f"{key}={params[key]}" for key in sorted(params) if params[key] not in ("", None)
    )
    return hashlib.sha1(f"{to_sign}{api_secret}".encode()).hexdigest()  # noqa: S324


@dataclass
class CloudinaryAssetStore(AssetStore):
    """Stores images in one Cloudinary folder.

    Refs are Cloudinary public ids. Listings come from the search API and are
    ordered newest first.
    """

    cloud_name: str
    api_key: str
    api_secret: str
    folder: str
    http_client: httpx.AsyncClient
    base_url: str = CLOUDINARY_API_URL

    @classmethod
    def create(
        cls, cloud_name: str, api_key: str, api_secret: str, folder: str
    ) -> "CloudinaryAssetStore":
        """Create a store with a managed httpx session."""
        return cls(
            cloud_name=cloud_name,
            api_key=api_key,
            api_secret=api_secret,
            folder=folder,
            http_client=httpx.AsyncClient(),
        )

    async def list_assets(self, exclude_ref: str | None = None) -> list[PhotoAsset]:
        """Return images in the folder, newest first."""
        payload = await self._request(
            "post",
            f"{self._cloud_url}/resources/search",
            auth=(self.api_key, self.api_secret),
            json={
                "expression": f"folder:{self.folder}",
                "sort_by": [{"created_at": "desc"}],
                "max_results": SEARCH_MAX_RESULTS,
            },
            timeout=15,
        )
        assets = []
        for resource in payload.get("resources") or []:
            public_id = str(resource.get("public_id", ""))
            if not public_id or public_id == exclude_ref:
                continue
            assets.append(PhotoAsset(ref=public_id, url=str(resource["secure_url"])))
        return assets

    async def put(self, payload: UploadPayload) -> PhotoAsset:
        """Upload the payload into the folder."""
        params = self._signed({"folder": self.folder})
        result = await self._request(
            "post",
            f"{self._cloud_url}/image/upload",
            data=params,
            files={
                "file": (
                    payload.filename,
                    payload.content,
                    payload.content_type or "application/octet-stream",
                )
            },
            timeout=60,
        )
        logger.info(
            "Uploaded %s to Cloudinary as %s", payload.filename, result["public_id"]
        )
        return PhotoAsset(ref=str(result["public_id"]), url=str(result["secure_url"]))

    async def delete(self, ref: str) -> None:
        """Destroy an image; a missing public id is not an error."""
        result = await self._request(
            "post",
            f"{self._cloud_url}/image/destroy",
            data=self._signed({"public_id": ref}),
            timeout=15,
        )
        outcome = result.get("result")
        if outcome == "not found":
            logger.info("Cloudinary asset %s was already gone", ref)
        elif outcome != "ok":
            raise AssetStorageError(f"Cloudinary refused to delete {ref}: {outcome}")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    @property
    def _cloud_url(self) -> str:
        return f"{self.base_url}/{self.cloud_name}"

    def _signed(self, params: dict[str, object]) -> dict[str, object]:
        stamped = {**params, "timestamp": str(int(datetime.now(tz=UTC).timestamp()))}
        return {
            **stamped,
            "api_key": self.api_key,
            "signature": sign_params(stamped, self.api_secret),
        }

    async def _request(self, method: str, url: str, **kwargs) -> dict[str, object]:  # type: ignore[no-untyped-def]
        try:
            response = await self.http_client.request(method, url, **kwargs)
            response.raise_for_status()
            return response.json()
        except (httpx.HTTPError, ValueError) as exc:
            raise AssetStorageError(f"Cloudinary request to {url} failed") from exc
