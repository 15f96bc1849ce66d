import hashlib
import logging
from contextlib import contextmanager
from pathlib import Path

from .. import config
from ..exceptions import FileAccessError

# Advisory locking is POSIX only; elsewhere files are read unlocked
try:
    import fcntl
except ImportError:
    fcntl = None


@contextmanager
def shared_lock(f):
    """Holds a shared (read) lock on an open file for the duration of the block."""
    if fcntl is None:
        yield
        return
    try:
        fcntl.flock(f.fileno(), fcntl.LOCK_SH)
    except OSError as e:
        # Some filesystems (NFS, FUSE) refuse flock; read without it
        logging.debug(f"Shared lock unavailable for {f.name}: {e}")
        yield
        return
    try:
        yield
    finally:
        fcntl.flock(f.fileno(), fcntl.LOCK_UN)


class FileHasher:
    def compute_checksum(self, path: Path, algorithm: str = config.CHECKSUM_ALGORITHM) -> str:
        """
        Streams the file through the digest and returns a lowercase hex string.

        Memory use is bounded by HASH_CHUNK_SIZE regardless of file size.
        Returns "" if the file disappeared before it could be opened.
        """
        h = hashlib.new(self._normalize_algorithm(algorithm))
        try:
            with path.open('rb') as f, shared_lock(f):
                while chunk := f.read(config.HASH_CHUNK_SIZE):
                    h.update(chunk)
        except FileNotFoundError:
            # File might have been deleted during scan
            return ""
        except OSError as e:
            raise FileAccessError(f"Cannot read {path} for checksum: {e}") from e
        return h.hexdigest()

    @staticmethod
    def _normalize_algorithm(algorithm: str) -> str:
        """'SHA-256' -> 'sha256', as hashlib names it."""
        return algorithm.replace("-", "").lower()
