"""
Custom exception hierarchy for the file inventory scanner.

Recoverable errors (field, file access, record) never leave the scan loop.
Everything deriving from ScanError is fatal for a root or for the whole run.
"""


class FileInventoryError(Exception):
    """Base exception for all file inventory errors."""
    pass


class FieldExtractionError(FileInventoryError):
    """Raised when a single metadata field cannot be computed."""
    pass


class FileAccessError(FileInventoryError):
    """Raised when a file cannot be opened or read for checksum/content."""
    pass


class RecordBuildError(FileInventoryError):
    """Raised when a file's record cannot be built at all."""
    pass


class ScanError(FileInventoryError):
    """Raised when a scan cannot complete."""
    pass


class DirectoryAccessError(ScanError):
    """Raised when a configured root cannot be listed."""

    def __init__(self, root, reason):
        self.root = root
        self.reason = reason
        super().__init__(f"Cannot read directory {root}: {reason}")


class SinkError(ScanError):
    """Raised when the output file cannot be created or written."""
    pass


class RootScanFailures(ScanError):
    """Raised at the end of a run when one or more roots could not be scanned."""

    def __init__(self, failures, bytes_written):
        self.failures = list(failures)
        self.bytes_written = bytes_written
        roots = ", ".join(str(f.root) for f in self.failures)
        super().__init__(f"{len(self.failures)} root(s) could not be scanned: {roots}")


class FileListLoadError(FileInventoryError):
    """Raised when a generated file list does not match the import schema."""
    pass
