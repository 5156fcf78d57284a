"""Flat directory cache holding the last good payload of each data source."""

from __future__ import annotations

import os
import tempfile
from pathlib import Path


class CacheMiss(LookupError):
    """No readable cache entry exists for a key."""


class CacheStore:
    def __init__(self, directory: Path) -> None:
        self.directory = Path(directory)

    def path_for(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in {".", ".."}:
            raise ValueError(f"invalid cache key: {key!r}")
        return self.directory / key

    def read(self, key: str) -> bytes:
        path = self.path_for(key)
        try:
            return path.read_bytes()
        except OSError as err:
            raise CacheMiss(f"no cache entry at {path}: {err}") from err

    def write(self, key: str, payload: bytes) -> bool:
        """Replace the entry for ``key``; returns False instead of raising on I/O errors."""
        path = self.path_for(key)
        tmp_name: str | None = None
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(prefix=f".{key}.", suffix=".tmp", dir=self.directory)
            with os.fdopen(fd, "wb") as f:
                f.write(payload)
            os.replace(tmp_name, path)
            tmp_name = None
            return True
        except OSError:
            return False
        finally:
            if tmp_name is not None:
                try:
                    os.unlink(tmp_name)
                except OSError:
                    pass
