"""
Photo blob storage in the cache directory.

Uploaded photos are written flat into the configured directory under a name
made of the upload time (nanoseconds) and the client's original filename. The
registry only keeps that generated name.
"""

import os
import time
from pathlib import Path
from typing import BinaryIO, Optional, Union

from ..core.errors import NotFoundError, StorageError
from ..core.logger import get_logger

_logger = get_logger(__name__)

_FALLBACK_NAME = "photo"


# PUBLIC_INTERFACE
class PhotoStore:
    """Writes uploaded photos to disk and resolves stored names back to paths."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).expanduser().resolve()

    def ensure_directory(self) -> Path:
        """Create the cache directory (and parents) if it does not exist."""
        if not self.root.is_dir():
            self.root.mkdir(parents=True, exist_ok=True)
            _logger.info("Created photo cache directory", extra={"path": str(self.root)})
        return self.root

    def _new_path(self, original_filename: Optional[str]) -> Path:
        # Browsers may send a full client path; keep only the last component.
        base = os.path.basename((original_filename or "").replace("\\", "/")).strip() or _FALLBACK_NAME
        stamp = time.time_ns()
        path = self.root / f"{stamp}_{base}"
        while path.exists():
            stamp += 1
            path = self.root / f"{stamp}_{base}"
        return path

    def store(self, original_filename: Optional[str], content: bytes) -> str:
        """Write ``content`` to a freshly named file and return the name.

        Raises:
            StorageError: if the file cannot be written. A partially written
                file is removed first.
        """
        self.ensure_directory()
        path = self._new_path(original_filename)
        name = path.name
        opened = False
        try:
            with open(path, "xb") as fh:
                opened = True
                fh.write(content)
        except OSError as exc:
            _logger.error("Failed to write photo", exc_info=exc, extra={"path": str(path)})
            if opened and path.exists():
                path.unlink()
            raise StorageError(f"Could not store photo {original_filename!r}") from exc
        _logger.info("Stored photo", extra={"photo_ref": name, "size": len(content)})
        return name

    def path_for(self, photo_ref: str) -> Path:
        """Absolute path a stored name maps to. The file may not exist."""
        return self.root / os.path.basename(photo_ref)

    def exists(self, photo_ref: Optional[str]) -> bool:
        return bool(photo_ref) and self.path_for(photo_ref).is_file()

    def resolve(self, photo_ref: Optional[str]) -> Path:
        """Path of an existing stored photo.

        Raises:
            NotFoundError: if ``photo_ref`` is empty or the file is gone.
        """
        if not photo_ref:
            raise NotFoundError("No photo stored for this item")
        path = self.path_for(photo_ref)
        if not path.is_file():
            _logger.warning("Photo file missing from cache", extra={"photo_ref": photo_ref})
            raise NotFoundError("Photo file not found")
        return path

    def open_photo(self, photo_ref: Optional[str]) -> BinaryIO:
        """Open a stored photo for reading. The caller closes the handle.

        Raises:
            NotFoundError: if there is no photo or the file disappears before it is opened.
        """
        path = self.resolve(photo_ref)
        try:
            return open(path, "rb")
        except FileNotFoundError as exc:
            _logger.warning("Photo file removed before it could be read", extra={"photo_ref": photo_ref})
            raise NotFoundError("Photo file not found") from exc
