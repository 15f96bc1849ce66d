import logging
from pathlib import Path
from typing import Any, BinaryIO, Callable, Optional

from .exceptions import DirectoryAccessError, RootScanFailures, SinkError
from .loading import load_file_list
from .models import ScanOptions
from .scanning.filesystem import DirectoryScanner
from .scanning.records import FileRecordBuilder


class FileListGenerator:
    def __init__(self, options: ScanOptions):
        self.options = options
        self.scanner = DirectoryScanner(
            builder=FileRecordBuilder(include_content=options.include_content),
            max_depth=options.max_depth,
            max_workers=options.max_workers,
            show_progress=options.show_progress,
        )

    def generate_file_list(self, output_path: Path) -> int:
        """
        Scans every root into a single output file.

        A root that cannot be listed does not stop the others; the failures are
        raised together as RootScanFailures once every root has been tried.

        Returns:
            Total bytes written.
        """
        try:
            sink = open(output_path, "wb")
        except OSError as e:
            raise SinkError(f"Cannot create output file {output_path}: {e}") from e

        total = 0
        failures = []
        try:
            for root in self.options.roots:
                try:
                    total += self.scanner.scan(root, sink)
                except DirectoryAccessError as e:
                    logging.error(f"Skipping root {root}: {e.reason}")
                    failures.append(e)
        finally:
            self._close_sink(sink, output_path)

        logging.info(f"File list complete: {output_path} ({total} bytes, {len(self.options.roots)} roots)")
        if failures:
            raise RootScanFailures(failures, total)
        return total

    @staticmethod
    def _close_sink(sink: BinaryIO, output_path: Path):
        # Buffered writes usually fail here (full disk), not in write()
        try:
            sink.close()
        except OSError as e:
            raise SinkError(f"Failed to flush output file {output_path}: {e}") from e

    def run(self,
            output_path: Path,
            importer: Optional[Callable[[Path], Any]] = None) -> Any:
        """
        Generates the file list, then hands the finished file to the importer.
        """
        self.generate_file_list(output_path)
        importer = importer or load_file_list
        return importer(output_path)
