"""Line source: reads the build script and the exclusion file as UTF-8 text."""

import logging
from pathlib import Path

from .errors import ExclusionFileError, ParseError

logger = logging.getLogger(__name__)

DEFAULT_BUILD_SCRIPT = "Dockerfile"
EXCLUSION_FILENAME = ".dockerignore"

# utf-8-sig drops a leading byte-order mark so line 1 parses like any other
ENCODING = "utf-8-sig"


def read_lines(path: Path | str) -> list[str]:
    """Read the build script. Missing or unreadable is fatal."""
    path = Path(path)
    if not path.is_file():
        raise ParseError(path, "not found")
    try:
        with path.open(encoding=ENCODING, errors="replace") as handle:
            lines = handle.read().splitlines()
    except OSError as e:
        raise ParseError(path, f"could not be read ({e.strerror or e})") from e
    logger.debug("Read %d lines from %s", len(lines), path)
    return lines


def read_optional_text(path: Path | str) -> str | None:
    """Read the exclusion file. None means absent, "" means present but empty.

    A file that exists but cannot be read raises ExclusionFileError; treating
    it as absent would hide a file the image builder may still apply.
    """
    path = Path(path)
    if not path.is_file():
        logger.debug("No exclusion file at %s", path)
        return None
    try:
        with path.open(encoding=ENCODING, errors="replace") as handle:
            return handle.read()
    except OSError as e:
        raise ExclusionFileError(path, f"could not be read ({e.strerror or e})") from e


def default_exclusion_path(context_dir: Path | str | None = None) -> Path:
    """The exclusion file sits at the build-context root (the working directory by default)."""
    return Path(context_dir if context_dir is not None else Path.cwd()) / EXCLUSION_FILENAME
