"""
Profiles file handling for DNS Switcher.

This module seeds the user's profiles file from the bundled default,
reads and writes it, and tells the menu when it has been edited on disk.
"""

import importlib.resources
import os
import tempfile
from pathlib import Path
from typing import Optional

from .. import config
from ..logging_config import get_logger
from .model import ConfigFileError, Configuration, load

logger = get_logger(__name__)


def get_config_path(preferences=None):
    """Gets the path to the profiles file, honouring the config_file preference."""
    override = config.get_setting(preferences, "config_file") if preferences else ""
    if override:
        return Path(override).expanduser()
    return Path.home() / config.PROFILES_FILENAME


def default_document() -> bytes:
    """Return the bundled default profiles document."""
    resource = importlib.resources.files("dnsswitcher").joinpath(
        config.DEFAULT_PROFILES_RESOURCE
    )
    try:
        return resource.read_bytes()
    except OSError as e:
        raise ConfigFileError(f"Default profiles resource is missing: {e}") from e


def _write_atomically(path: Path, data: bytes) -> None:
    """Write ``data`` to ``path`` via a temporary file in the same directory."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(prefix=f".{path.name}.", dir=path.parent)
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(data)
        os.replace(tmp_name, path)
    except BaseException:
        try:
            os.unlink(tmp_name)
        except OSError:
            pass
        raise


def ensure_config_file(path: Path) -> bool:
    """
    Create the profiles file from the bundled default if it does not exist.

    Returns:
        True if the file was created, False if it was already there.

    Raises:
        ConfigFileError: If the default could not be copied into place.
    """
    if path.exists():
        return False

    logger.info(f"Creating default profiles file at {path}")
    try:
        _write_atomically(path, default_document())
    except OSError as e:
        raise ConfigFileError(f"Failed to create default profiles file {path}: {e}") from e
    return True


def restore_defaults(path: Path) -> None:
    """
    Overwrite the profiles file with the bundled default.

    Raises:
        ConfigFileError: If the file could not be written.
    """
    logger.info(f"Restoring default profiles to {path}")
    try:
        _write_atomically(path, default_document())
    except OSError as e:
        raise ConfigFileError(f"Failed to restore default profiles to {path}: {e}") from e


def read_configuration(path: Path) -> Configuration:
    """
    Read and parse the profiles file.

    Raises:
        ConfigFileError: If the file cannot be read.
        MalformedDocumentError: If its contents are not a JSON object.
    """
    try:
        data = path.read_bytes()
    except OSError as e:
        raise ConfigFileError(f"Configuration file failed to load: {e}") from e

    logger.debug(f"Read {len(data)} bytes from {path}")
    return load(data)


def save_configuration(configuration: Configuration, path: Path) -> bool:
    """
    Persist the configuration to disk.

    Failures are logged rather than raised; the previous file is left in
    place.

    Returns:
        True if the file was written.
    """
    text = configuration.export()
    if text is None:
        logger.error("Nothing to save: configuration could not be exported")
        return False

    try:
        _write_atomically(path, text.encode("utf-8"))
    except OSError as e:
        logger.error(f"Error saving configuration file {path}: {e}")
        return False

    logger.debug(f"Saved configuration to {path}")
    return True


class ConfigFileMonitor:
    """Tracks the profiles file's modification time between menu refreshes."""

    def __init__(self, path: Path):
        self.path = Path(path)
        self.last_modified: Optional[float] = None

    def _current_mtime(self) -> Optional[float]:
        try:
            return self.path.stat().st_mtime
        except OSError as e:
            logger.debug(f"Could not stat {self.path}: {e}")
            return None

    def has_changed(self) -> bool:
        """
        Check whether the file needs to be reloaded.

        The first call always reports a change, as does a file that cannot
        be stat'ed. Afterwards only a newer modification time counts.
        """
        mtime = self._current_mtime()
        if mtime is None:
            return True

        if self.last_modified is None:
            self.last_modified = mtime
            return True

        changed = mtime > self.last_modified
        self.last_modified = mtime
        if changed:
            logger.info(f"Configuration file {self.path} changed on disk")
        return changed

    def mark_current(self) -> None:
        """Record the file's present mtime so our own writes are not seen as edits."""
        mtime = self._current_mtime()
        if mtime is not None:
            self.last_modified = mtime
