# plant_analyzer/utils/temp_files.py

import logging
import time
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)


def timestamp_ms() -> int:
    """Milliseconds since the epoch, used to name per-request files."""
    return time.time_ns() // 1_000_000


def remove_file(path: Path) -> None:
    """Delete ``path`` if it still exists; failures are logged, not raised."""
    try:
        Path(path).unlink(missing_ok=True)
        logger.debug("Removed %s", path)
    except OSError as e:
        logger.warning(f"Could not remove {path}: {e}")


@contextmanager
def scoped_file(path: Path) -> Iterator[Path]:
    """Yield ``path`` and delete it on every exit path (success or error)."""
    try:
        yield path
    finally:
        remove_file(path)
