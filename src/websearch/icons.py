"""Engine icons: local-file detection, trash-on-discard, storing, caching."""

import logging
import os
from pathlib import Path
from urllib.parse import urlparse
from urllib.request import url2pathname

from PIL import Image, UnidentifiedImageError
from send2trash import send2trash

from src.websearch.constants import ICON_SIZE

logger = logging.getLogger(__name__)


def is_local_icon(reference: str) -> bool:
    """True for file: URLs and absolute paths; False for ':name' resources."""
    if not reference:
        return False
    if reference.startswith("file:"):
        return True
    return Path(reference).is_absolute()


def icon_path(reference: str) -> Path | None:
    if not is_local_icon(reference):
        return None
    if reference.startswith("file:"):
        return Path(url2pathname(urlparse(reference).path))
    return Path(reference)


def discard_icon(reference: str) -> bool:
    """Move a user-supplied icon file to the trash. Returns True if moved."""
    path = icon_path(reference)
    if path is None or not path.exists():
        return False
    try:
        send2trash(path)
    except OSError as e:
        logger.warning("Could not move icon %s to trash: %s", path, e)
        return False
    logger.info("Moved icon %s to trash", path)
    return True


def stage_icon(source: Path, engine_id: str, icons_dir: Path) -> Path | None:
    """Scale `source` to fit the icon box and save it next to the final icon.

    The staged file only becomes the engine icon through commit_icon(), so a
    failed save leaves the current icon untouched.
    """
    icons_dir.mkdir(parents=True, exist_ok=True)
    staged = icons_dir / f"{engine_id}.staged.png"
    try:
        with Image.open(source) as image:
            image.thumbnail(ICON_SIZE, Image.Resampling.LANCZOS)
            image.save(staged, format="PNG")
    except (OSError, UnidentifiedImageError) as e:
        logger.warning("Could not save image to '%s': %s", staged, e)
        staged.unlink(missing_ok=True)
        return None
    return staged


def commit_icon(staged: Path, engine_id: str, icons_dir: Path) -> str | None:
    """Move a staged icon to <id>.png and return its file: URL."""
    dst = icons_dir / f"{engine_id}.png"
    try:
        os.replace(staged, dst)
    except OSError as e:
        logger.warning("Could not move icon to '%s': %s", dst, e)
        staged.unlink(missing_ok=True)
        return None
    return dst.resolve().as_uri()


class IconCache:
    """Memoizes reference -> resolved icon. Cleared whenever engines change."""

    def __init__(self) -> None:
        self._cache: dict[str, str | None] = {}

    def get(self, reference: str) -> str | None:
        try:
            return self._cache[reference]
        except KeyError:
            resolved = self._resolve(reference)
            self._cache[reference] = resolved
            return resolved

    def clear(self, *_args) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)

    @staticmethod
    def _resolve(reference: str) -> str | None:
        path = icon_path(reference)
        if path is None:
            return reference or None
        if not path.exists():
            logger.debug("Icon file missing: %s", path)
            return None
        return str(path)
