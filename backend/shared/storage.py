"""Storage for ledger export documents.

Exports contain every player name and game result, so files are written
with owner-only permissions (0o600) inside an owner-only directory (0o700).
"""

import contextlib
import os
import tempfile
from pathlib import Path

import structlog

logger = structlog.get_logger()

_EXPORT_DIR_MODE = 0o700

_EXPORT_FILE_MODE = 0o600


class LocalExportStorage:
    """Writes export documents to the local filesystem."""

    def __init__(self, export_dir: str) -> None:
        self._export_dir = Path(export_dir).resolve()

    def save_export(self, filename: str, content: str) -> Path:
        """Save an export document under the configured directory and return its path.

        Creates the directory lazily on first write. Writes atomically via
        temp-file-then-rename, replacing an earlier export with the same name.
        Rejects filenames that would resolve outside the export directory.
        """
        target = (self._export_dir / filename).resolve()
        if not target.is_relative_to(self._export_dir) or target == self._export_dir:
            raise ValueError(f"Path traversal rejected: '{filename}' resolves outside export directory")

        self._export_dir.mkdir(mode=_EXPORT_DIR_MODE, parents=True, exist_ok=True)
        self._export_dir.chmod(_EXPORT_DIR_MODE)

        fd, tmp_path = tempfile.mkstemp(dir=str(self._export_dir), suffix=".tmp", prefix=".export_")
        fd_owned = True
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                fd_owned = False  # os.fdopen took ownership; it will close fd
                f.write(content)
                f.flush()
                os.fsync(f.fileno())
            os.chmod(tmp_path, _EXPORT_FILE_MODE)  # noqa: PTH101
            Path(tmp_path).replace(target)
        except BaseException:
            if fd_owned:
                with contextlib.suppress(OSError):
                    os.close(fd)
            with contextlib.suppress(OSError):
                Path(tmp_path).unlink()
            raise
        logger.info("saved export", path=str(target))
        return target
