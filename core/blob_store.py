# core/blob_store.py

"""
Key-value storage for the serialized tracker document.

The tracker only needs two operations from its storage medium: read the text stored
under a key (or learn that nothing is there) and overwrite it. `FileBlobStore`
keeps one file per key inside a directory; `MemoryBlobStore` keeps everything in a
dictionary and is used by tests and throwaway sessions.
"""

from __future__ import annotations

import logging
import os
import re
from abc import ABC, abstractmethod

logger = logging.getLogger(__name__)


class BlobStore(ABC):

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Returns the text stored under `key`, or None if nothing is stored."""

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Overwrites the text stored under `key`."""


class MemoryBlobStore(BlobStore):

    def __init__(self, initial: dict[str, str] | None = None):
        self._blobs: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._blobs.get(key)

    def set(self, key: str, value: str) -> None:
        self._blobs[key] = value

    def __contains__(self, key: str) -> bool:
        return key in self._blobs


class FileBlobStore(BlobStore):
    """
    Stores each blob as `<dir_path>/<key>.json`.

    Writes go to a temporary sibling file that is then renamed over the target, so a
    crash mid-write leaves the previous blob in place rather than a truncated one.
    """

    def __init__(self, dir_path: str):
        self._dir_path = os.path.abspath(os.path.expanduser(dir_path))

    @property
    def dir_path(self) -> str:
        return self._dir_path

    def path_for(self, key: str) -> str:
        return os.path.join(self._dir_path, f"{sanitize_key(key)}.json")

    def get(self, key: str) -> str | None:
        path = self.path_for(key)

        try:
            with open(path, "r", encoding="utf-8") as f:
                return f.read()

        except FileNotFoundError:
            logger.debug(f"No blob stored at {path}")
            return None

    def set(self, key: str, value: str) -> None:
        os.makedirs(self._dir_path, exist_ok=True)

        path = self.path_for(key)
        tmp_path = f"{path}.tmp"

        with open(tmp_path, "w", encoding="utf-8") as f:
            f.write(value)

        os.replace(tmp_path, path)
        logger.debug(f"Wrote {len(value)} characters to {path}")


def sanitize_key(key: str) -> str:
    """
    Reduces a storage key to a safe file name.

    Anything other than letters, digits, dots, dashes, and underscores becomes an
    underscore, so keys can never escape the storage directory.
    """
    cleaned = re.sub(r"[^A-Za-z0-9._-]", "_", key.strip())
    return cleaned.strip(".") or "_"
