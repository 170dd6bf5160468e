"""
Cache downloaded manifests on the file system.
"""

from __future__ import annotations

import logging
import os
from datetime import date
from pathlib import Path
from tempfile import NamedTemporaryFile
from typing import Optional

from .errors import AvailabilityError, LocalIOError
from .manifest import Manifest
from .time_utils import format_date


logger = logging.getLogger(__name__)

CACHE_FILE_FORMAT = "%Y-%m-%d.toml"


class FsCache:
    """A cache that stores manifests as ``YYYY-MM-DD.toml`` files.

    A cache without a storage path is a no-op: every lookup misses and every
    store is ignored.
    """

    def __init__(self, storage_path: Optional[Path] = None) -> None:
        """Initialize a cache rooted at ``storage_path``.

        The directory is created if it doesn't exist.

        Raises:
            LocalIOError: If the directory can't be created.
        """
        if storage_path is not None:
            storage_path = Path(storage_path)
            if storage_path.exists() and not storage_path.is_dir():
                raise LocalIOError(storage_path, "using as cache directory", "not a directory")
            if not storage_path.exists():
                try:
                    storage_path.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    raise LocalIOError(storage_path, "creating path", str(e)) from e
        self.storage_path = storage_path

    @classmethod
    def noop(cls) -> "FsCache":
        return cls(None)

    @property
    def enabled(self) -> bool:
        return self.storage_path is not None

    def make_file_name(self, day: date) -> Path:
        if self.storage_path is None:
            raise ValueError("A no-op cache has no files")
        return self.storage_path / format_date(day, CACHE_FILE_FORMAT)

    def get(self, day: date) -> Optional[Manifest]:
        if self.storage_path is None:
            return None

        file_name = self.make_file_name(day)
        if not file_name.exists():
            logger.debug("File %s doesn't exist", file_name)
            return None
        try:
            return Manifest.load_from_fs(file_name)
        except AvailabilityError as e:
            logger.warning("Can't load manifest: %s", e)
            return None

    def store(self, manifest: Manifest) -> None:
        if self.storage_path is None:
            return

        file_name = self.make_file_name(manifest.date)
        tmp_path: Optional[Path] = None
        try:
            with NamedTemporaryFile(
                dir=self.storage_path,
                prefix=f".{file_name.stem}.",
                suffix=".tmp",
                delete=False,
            ) as f:
                tmp_path = Path(f.name)
            manifest.save_to_file(tmp_path)
            os.replace(tmp_path, file_name)
        except (AvailabilityError, OSError) as e:
            logger.warning("Can't save a manifest to the disk: %s", e)
            if tmp_path is not None:
                tmp_path.unlink(missing_ok=True)
            return
        logger.debug("Manifest stored at %s", file_name)
