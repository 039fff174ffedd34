"""One-time data migrations run by the operator."""

import logging
import shutil
from pathlib import Path

from inkcraft.services.uploads import is_allowed_image

logger = logging.getLogger(__name__)


def import_stray_images(source_dir: Path, uploads_dir: Path) -> list[str]:
    """Copy images lying in ``source_dir`` into the uploads directory.

    Files that already exist in the uploads directory are left untouched.
    Returns the names that were copied.
    """
    uploads_dir.mkdir(parents=True, exist_ok=True)
    copied: list[str] = []
    for source in sorted(source_dir.iterdir()):
        if not source.is_file() or not is_allowed_image(source.name):
            continue
        target = uploads_dir / source.name
        if target.exists():
            continue
        shutil.copy2(source, target)
        copied.append(source.name)
    logger.info("Imported %d images from %s", len(copied), source_dir)
    return copied
