from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class StoredFile:
    url: str
    file_name: str
    original_name: str
    size: int
    content_type: str | None = None


class FileStorage(ABC):
    """Port for storing uploaded listing media."""

    @abstractmethod
    def save(
        self,
        filename: str,
        content: bytes,
        subdirectory: str = "",
        content_type: str | None = None,
    ) -> StoredFile:
        """
        Store ``content`` under a unique name derived from ``filename``.

        Returns:
            StoredFile whose ``url`` is the public path of the stored file
        """
        ...

    @abstractmethod
    def delete(self, url: str) -> None:
        """Remove the file behind ``url``. A file that is already gone is not an error."""
        ...
