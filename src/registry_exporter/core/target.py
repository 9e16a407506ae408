"""
Target directory resolution for exports.

Turns a user-supplied directory (possibly empty, ``~``-prefixed, relative or
containing ``.``/``..`` segments) into a canonical absolute path that exists
and is empty.
"""

import logging
import os
from pathlib import Path

from registry_exporter.core.errors import (
    DirectoryCreateError,
    HomeResolutionError,
    TargetNotEmptyError,
    TargetResolutionError,
)

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_DIR = ".mcpjungle"


def _home_dir() -> str:
    # An empty $HOME is treated as undefined
    if os.environ.get("HOME") == "":
        raise HomeResolutionError("cannot determine home directory: $HOME is empty")
    try:
        home = str(Path.home())
    except (RuntimeError, KeyError) as e:
        raise HomeResolutionError(f"cannot determine home directory: {e}") from e
    if not home:
        raise HomeResolutionError("cannot determine home directory")
    return home


def expand_home(target: str) -> str:
    """
    Expand a leading ``~`` or ``~/`` to the user's home directory.

    The remainder after ``~/`` always stays under the home directory, even
    when it starts with further separators. Other ``~`` forms such as
    ``~alice`` are returned untouched.
    """
    if target == "~":
        return _home_dir()
    if target.startswith("~/"):
        return _home_dir() + "/" + target[2:]
    return target


def normalize_path(target: str) -> str:
    """Make a path absolute against the cwd and clean it lexically (symlinks are kept)."""
    cleaned = os.path.normpath(os.path.abspath(target))
    # POSIX normpath keeps exactly two leading slashes
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def resolve_target_dir(target: str | None = None) -> Path:
    """
    Resolve the directory to export configuration files into.

    The directory is created with any missing ancestors. It must be empty
    afterwards, so an export never merges into an existing tree.

    Args:
        target: User-supplied directory. Falls back to DEFAULT_EXPORT_DIR
            in the current working directory when empty.

    Returns:
        The canonical absolute directory.

    Raises:
        HomeResolutionError: ``~`` expansion requested but no home directory.
        DirectoryCreateError: The directory could not be created.
        TargetNotEmptyError: The directory already contains entries.
    """
    target_dir = normalize_path(expand_home(target or DEFAULT_EXPORT_DIR))

    try:
        os.makedirs(target_dir, mode=0o755, exist_ok=True)
    except OSError as e:
        raise DirectoryCreateError(f"failed to create target directory {target_dir}: {e}") from e

    try:
        with os.scandir(target_dir) as entries:
            not_empty = any(True for _ in entries)
    except OSError as e:
        raise TargetResolutionError(
            f"failed to read contents of target directory {target_dir}: {e}"
        ) from e

    if not_empty:
        raise TargetNotEmptyError(target_dir)

    logger.debug(f"Resolved export target: {target_dir}")
    return Path(target_dir)
