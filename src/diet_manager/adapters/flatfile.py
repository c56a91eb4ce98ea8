"""Line-oriented file helpers shared by the flat-file repositories."""

import logging
from collections.abc import Iterable
from pathlib import Path

FIELD_SEPARATOR = "|"
LIST_SEPARATOR = ","

_logger = logging.getLogger(__name__)


def read_records(path: Path) -> list[str]:
    """Return non-blank, non-comment lines; empty when the file is unreadable."""
    if not path.exists():
        return []
    try:
        with path.open(encoding="utf-8") as handle:
            lines = [line.rstrip("\r\n") for line in handle]
    except (OSError, UnicodeDecodeError):
        _logger.exception("Failed to read %s", path)
        return []
    return [line for line in lines if line.strip() and not line.startswith("#")]


def write_records(path: Path, lines: Iterable[str]) -> bool:
    """Replace the file content with the given lines; False on I/O failure."""
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
    except OSError:
        _logger.exception("Failed to write %s", path)
        return False
    return True


def format_number(value: float) -> str:
    """Format a number so it reads back exactly."""
    return repr(float(value))
