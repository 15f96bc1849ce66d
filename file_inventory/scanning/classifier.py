import logging
from pathlib import Path

from .. import config
from .hasher import shared_lock


def looks_binary(sample: bytes) -> bool:
    """
    Heuristic: any control byte outside TAB..CR marks the sample as binary.

    DEL (0x7F) and everything >= 0x80 count as text so UTF-8 passes.
    """
    return any(b < 0x09 or 0x0D < b < 0x20 for b in sample)


class BinaryClassifier:
    def __init__(self, sniff_size: int = config.BINARY_SNIFF_SIZE):
        self.sniff_size = sniff_size

    def is_binary(self, path: Path) -> bool:
        """
        Inspects the first `sniff_size` bytes of the file.

        A read failure is logged and reported as text; the preview step that
        follows fails on its own if the file really is unreadable.
        """
        try:
            with path.open('rb') as f, shared_lock(f):
                sample = f.read(self.sniff_size)
        except OSError as e:
            logging.info(f"Failed to read {path} for binary check: {e}")
            return False
        return looks_binary(sample)
