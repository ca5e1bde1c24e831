"""
File Token Storage - One file per key on local disk.

Survives process restarts. Suitable for desktop and CLI consumers.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from storefront_auth.errors import StorageError
from storefront_auth.ports.storage_port import TokenStoragePort


class FileTokenStorage(TokenStoragePort):
    """
    File-backed token storage.

    Each key maps to <directory>/<key>. Writes land in a temporary file
    that is swapped in with os.replace, so readers never see half a token.
    """

    def __init__(self, directory: Union[str, Path]):
        """
        Initialize file storage.

        Args:
            directory: Directory holding the value files (created lazily)
        """
        self._directory = Path(directory).expanduser()

    def _path(self, key: str) -> Path:
        if not key or "/" in key or "\\" in key or key in (".", ".."):
            raise StorageError(f"Invalid storage key: {key!r}")
        return self._directory / key

    def read(self, key: str) -> Optional[str]:
        path = self._path(key)
        try:
            value = path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as e:
            raise StorageError(f"Cannot read {path}: {e}") from e
        return value or None

    def write(self, key: str, value: str) -> None:
        path = self._path(key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=self._directory, prefix=f".{key}.")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    fh.write(value)
                os.chmod(tmp_name, 0o600)
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}") from e

    def delete(self, key: str) -> bool:
        path = self._path(key)
        try:
            path.unlink()
        except FileNotFoundError:
            return False
        except OSError as e:
            raise StorageError(f"Cannot delete {path}: {e}") from e
        return True
