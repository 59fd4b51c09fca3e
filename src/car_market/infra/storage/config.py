from __future__ import annotations

import os
from pathlib import Path

DEFAULT_UPLOAD_DIR = "uploads"
DEFAULT_MAX_FILE_SIZE = 5 * 1024 * 1024  # 5 MiB


def upload_dir() -> Path:
    return Path(os.getenv("UPLOAD_DIR") or DEFAULT_UPLOAD_DIR)


def max_upload_bytes() -> int:
    raw = os.getenv("MAX_FILE_SIZE")

    if not raw:
        return DEFAULT_MAX_FILE_SIZE

    try:
        size = int(raw)
    except ValueError:
        raise RuntimeError(f"MAX_FILE_SIZE must be an integer number of bytes, got {raw!r}")

    if size <= 0:
        raise RuntimeError("MAX_FILE_SIZE must be greater than 0")

    return size
