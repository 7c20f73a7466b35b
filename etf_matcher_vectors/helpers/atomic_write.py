"""
Atomic file write utilities.

Downloads are written with the temp-file-and-rename pattern so an interrupted
fetch never leaves a truncated collection at the destination path.
"""

from __future__ import annotations

import os
import tempfile
from pathlib import Path

from etf_matcher_vectors.utils.logging import get_logger

logger = get_logger(__name__)


class AtomicWriteError(Exception):
    """Raised when an atomic write operation fails."""


def atomic_write_bytes(
    filepath: Path | str,
    content: bytes,
    *,
    mode: int = 0o644,
) -> None:
    """
    Write binary content atomically.

    Either the complete new content is written, or the original file
    remains unchanged.

    Args:
        filepath: Destination file path.
        content: Bytes to write.
        mode: File permission mode (default 0o644).

    Raises:
        AtomicWriteError: If the write or rename fails.
    """
    filepath = Path(filepath)
    parent_dir = filepath.parent

    try:
        parent_dir.mkdir(parents=True, exist_ok=True)

        # Temp file in the same directory so the rename stays on one filesystem
        fd, temp_path = tempfile.mkstemp(
            dir=parent_dir,
            prefix=f".{filepath.name}.",
            suffix=".tmp",
        )
        temp_path_obj = Path(temp_path)

        try:
            with os.fdopen(fd, "wb") as f:
                f.write(content)

            temp_path_obj.chmod(mode)
            temp_path_obj.replace(filepath)

            logger.debug(f"Atomic write completed: {filepath} ({len(content)} bytes)")

        except BaseException:
            temp_path_obj.unlink(missing_ok=True)
            raise

    except OSError as e:
        raise AtomicWriteError(f"Atomic write failed for {filepath}: {e}") from e
