from pathlib import Path
from typing import Optional

from .. import config
from ..encoding import decode_preview, escape_for_csv
from ..exceptions import FileAccessError
from .classifier import BinaryClassifier
from .hasher import shared_lock


class ContentPreviewer:
    """
    Produces the fileContent column: an escaped, quoted UTF-8 preview of the
    first CONTENT_PREVIEW_BYTES of a text file.
    """

    def __init__(self,
                 classifier: Optional[BinaryClassifier] = None,
                 max_bytes: int = config.CONTENT_PREVIEW_BYTES):
        self.classifier = classifier or BinaryClassifier()
        self.max_bytes = max_bytes

    def preview(self, path: Path) -> str:
        """Returns the escaped preview, or "" for missing and binary files."""
        if not path.exists() or self.classifier.is_binary(path):
            return ""
        data = self._read_prefix(path)
        return escape_for_csv(decode_preview(data))

    def _read_prefix(self, path: Path) -> bytes:
        # Only the budget is read; large files are never loaded whole
        try:
            with path.open('rb') as f, shared_lock(f):
                return f.read(self.max_bytes)
        except OSError as e:
            raise FileAccessError(f"Cannot read {path} for preview: {e}") from e
