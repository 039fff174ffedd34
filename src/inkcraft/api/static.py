"""Static file serving with a single-page fallback."""

from pathlib import Path

from fastapi import FastAPI, HTTPException
from fastapi.responses import FileResponse

INDEX_FILE = "index.html"


def resolve_under_root(root: Path, relative: str) -> Path | None:
    """Return the file for ``relative`` inside ``root``, or None."""
    try:
        candidate = (root / relative).resolve()
        if not candidate.is_relative_to(root) or not candidate.is_file():
            return None
    except (OSError, ValueError):
        # NUL bytes and over-long segments are never servable files.
        return None
    return candidate


def register_static_routes(app: FastAPI, public_dir: Path) -> None:
    """Serve files from ``public_dir``; unknown paths get the index page.

    Must be registered after every API router so it only sees unmatched paths.
    """
    root = public_dir.resolve()

    @app.get("/{full_path:path}", include_in_schema=False)
    async def public_file(full_path: str) -> FileResponse:
        if full_path == "api" or full_path.startswith("api/"):
            raise HTTPException(status_code=404, detail="Not found")
        target = resolve_under_root(root, full_path) if full_path else None
        if target is None:
            target = resolve_under_root(root, INDEX_FILE)
        if target is None:
            raise HTTPException(status_code=404, detail="Not found")
        return FileResponse(target)
