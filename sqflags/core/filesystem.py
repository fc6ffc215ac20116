"""
Filesystem helpers for sqflags.
"""

import logging
import tempfile
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)


def atomic_write(
    file_path: Union[str, Path], content: str, encoding: str = "utf-8"
) -> None:
    """
    Write a text file atomically using temp file + rename.

    The file is never left partially written. If the write fails, the
    original file (if any) remains unchanged.

    Args:
        file_path: Path to write to
        content: Text content
        encoding: Text encoding
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        with open(temp_fd, "w", encoding=encoding) as f:
            f.write(content)
        temp_path.replace(file_path)
    except Exception:
        temp_path.unlink(missing_ok=True)
        raise

    logger.debug(f"Wrote {file_path}")
