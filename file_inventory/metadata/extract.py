import logging
import os
import stat
from datetime import datetime
from pathlib import Path
from typing import Optional

from .. import config
from ..exceptions import FieldExtractionError

# Owner, group, other: read/write/execute
_PERMISSION_BITS = (
    (stat.S_IRUSR, 'r'), (stat.S_IWUSR, 'w'), (stat.S_IXUSR, 'x'),
    (stat.S_IRGRP, 'r'), (stat.S_IWGRP, 'w'), (stat.S_IXGRP, 'x'),
    (stat.S_IROTH, 'r'), (stat.S_IWOTH, 'w'), (stat.S_IXOTH, 'x'),
)


def get_extension(file_name: str) -> str:
    """
    Text after the last dot, but only if that dot is neither the first nor the
    last character: 'a.tar.gz' -> 'gz', '.gitignore' -> '', 'trailing.' -> ''.
    """
    dot = file_name.rfind('.')
    if 0 < dot < len(file_name) - 1:
        return file_name[dot + 1:]
    return ""


def size_in_kb(size_bytes: int) -> int:
    """Size in KB, rounded up. 0 bytes -> 0, 1..1024 bytes -> 1."""
    return -(-size_bytes // 1024)


def format_timestamp(ts: float) -> str:
    return datetime.fromtimestamp(ts).strftime(config.TIMESTAMP_FORMAT)


def posix_permissions_supported() -> bool:
    return os.name == "posix"


class MetadataExtractor:
    """
    Filesystem metadata for the output columns.

    Strategies:
      - Timestamps come from an existing stat result (no extra syscalls).
      - Owner and permissions are probed; unsupported platforms yield "".
    """

    def get_modified_time(self, st: os.stat_result) -> str:
        return format_timestamp(st.st_mtime)

    def get_creation_time(self, st: os.stat_result) -> str:
        """
        Birth time where the platform records it. On Windows st_ctime is the
        creation time; on Linux it is the inode change time, so it is not used.
        """
        birth: Optional[float] = getattr(st, "st_birthtime", None)
        if birth is None and os.name == "nt":
            birth = st.st_ctime
        if birth is None:
            return ""
        return format_timestamp(birth)

    def get_owner(self, path: Path) -> str:
        """Owner principal name, or "" when it cannot be resolved."""
        try:
            return path.owner()
        except Exception as e:
            # Unknown uid, unsupported platform, ...
            logging.debug(f"Owner lookup failed for {path}: {e}")
            return ""

    def get_permissions(self, path: Path, st: Optional[os.stat_result] = None) -> str:
        """
        Symbolic permission string such as 'rwxr-xr-x'.
        Returns "" where POSIX permissions are not available.
        """
        if not posix_permissions_supported():
            logging.info("POSIX file attributes are not supported on this system.")
            return ""
        try:
            mode = (st or path.stat(follow_symlinks=False)).st_mode
        except OSError as e:
            raise FieldExtractionError(f"Failed to retrieve file permissions for {path}: {e}") from e
        return "".join(ch if mode & bit else '-' for bit, ch in _PERMISSION_BITS)
