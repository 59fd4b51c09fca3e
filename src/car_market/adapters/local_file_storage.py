"""Disk-backed FileStorage for uploaded listing images."""

from __future__ import annotations

import logging
import re
import time
from pathlib import Path, PurePosixPath
from typing import Callable

from car_market.ports.file_storage import FileStorage, StoredFile

logger = logging.getLogger(__name__)

_UNSAFE_CHARS = re.compile(r"[^\w\s.\-]")
_WHITESPACE = re.compile(r"\s+")


def _epoch_millis() -> int:
    return time.time_ns() // 1_000_000


class LocalFileStorage(FileStorage):
    """
    Stores files under ``root`` and exposes them under ``url_prefix``.

    - Names are ``<epoch-ms>_<sanitized stem><extension>`` so uploads never collide
    - Subdirectories are created on demand
    - URLs that resolve outside ``root`` are refused
    """

    def __init__(
        self,
        root: Path,
        url_prefix: str = "/uploads",
        clock: Callable[[], int] = _epoch_millis,
    ) -> None:
        self._root = root
        self._url_prefix = "/" + url_prefix.strip("/")
        self._clock = clock

    @property
    def root(self) -> Path:
        return self._root

    @property
    def url_prefix(self) -> str:
        return self._url_prefix

    def save(
        self,
        filename: str,
        content: bytes,
        subdirectory: str = "",
        content_type: str | None = None,
    ) -> StoredFile:
        original = PurePosixPath(filename.replace("\\", "/")).name
        suffix = PurePosixPath(original).suffix.lower()
        stem = sanitize_file_name(PurePosixPath(original).stem) or "file"
        file_name = f"{self._clock()}_{stem}{suffix}"

        target_dir = self._resolve(subdirectory)
        target_dir.mkdir(parents=True, exist_ok=True)
        (target_dir / file_name).write_bytes(content)

        relative = PurePosixPath(subdirectory.strip("/")) / file_name if subdirectory else PurePosixPath(file_name)
        url = f"{self._url_prefix}/{relative}"

        logger.info("Stored uploaded file", extra={"url": url, "size": len(content)})

        return StoredFile(
            url=url,
            file_name=file_name,
            original_name=original,
            size=len(content),
            content_type=content_type,
        )

    def delete(self, url: str) -> None:
        path = self._path_for_url(url)

        if not path.exists():
            logger.warning("File to delete does not exist", extra={"url": url, "path": str(path)})
            return

        path.unlink()
        logger.info("Deleted stored file", extra={"url": url})

    def _path_for_url(self, url: str) -> Path:
        prefix = self._url_prefix + "/"
        if url.startswith(prefix):
            return self._resolve(url[len(prefix) :])
        # Unknown URL shape: fall back to the bare file name at the root
        return self._resolve(PurePosixPath(url).name)

    def _resolve(self, relative: str) -> Path:
        root = self._root.resolve()
        path = (root / relative.strip("/")).resolve()
        if path != root and root not in path.parents:
            raise ValueError(f"Path escapes storage root: {relative}")
        return path


def sanitize_file_name(name: str) -> str:
    """Drop unsafe characters, collapse whitespace to underscores, lower-case."""
    cleaned = _UNSAFE_CHARS.sub("", name)
    return _WHITESPACE.sub("_", cleaned).lower()
