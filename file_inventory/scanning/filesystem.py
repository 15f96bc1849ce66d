import logging
import os
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple

from tqdm import tqdm

from .. import config
from ..exceptions import DirectoryAccessError, SinkError
from .records import FileRecordBuilder


class DirectoryScanner:
    def __init__(self,
                 builder: Optional[FileRecordBuilder] = None,
                 max_depth: int = config.DEFAULT_MAX_DEPTH,
                 max_workers: int = 1,
                 show_progress: bool = False):
        self.builder = builder or FileRecordBuilder()
        self.max_depth = max_depth
        self.max_workers = max_workers
        self.show_progress = show_progress

    def scan(self, root: Path, sink: BinaryIO) -> int:
        """
        Writes one line per regular file under `root` to `sink`.

        Args:
            root: Directory to list. Must be readable, else DirectoryAccessError.
            sink: Binary stream opened by the caller; never closed here.

        Returns:
            Number of bytes written for this root.
        """
        files = list(self._iter_files(root))
        logging.info(f"Scanning {root}: {len(files)} files")

        records = self._build_lines(files)
        lines = records
        if self.show_progress:
            lines = tqdm(records, total=len(files), desc=f"Scanning {root.name or root}", unit="file")

        written = 0
        skipped = 0
        try:
            for path, data in lines:
                if data is None:
                    skipped += 1
                    continue
                try:
                    sink.write(data)
                except OSError as e:
                    raise SinkError(f"Failed to write record for {path}: {e}") from e
                written += len(data)
        finally:
            # Stops pending workers now, not when the traceback is released
            records.close()

        if skipped:
            logging.warning(f"Skipped {skipped} file(s) in {root}")
        return written

    def _build_lines(self, files: List[Tuple[Path, os.stat_result]]) -> Iterator[Tuple[Path, Optional[bytes]]]:
        """Yields (path, encoded line) in enumeration order; None for skipped files."""
        if self.max_workers <= 1:
            for path, st in files:
                yield path, self._process_single_file(path, st)
            return

        # map() preserves input order, so output stays deterministic
        executor = ThreadPoolExecutor(max_workers=self.max_workers)
        finished = False
        try:
            results = executor.map(lambda item: self._process_single_file(*item), files)
            for (path, _), data in zip(files, results):
                yield path, data
            finished = True
        finally:
            # On abort, drop queued files instead of hashing them all first
            executor.shutdown(wait=finished, cancel_futures=not finished)

    def _process_single_file(self, path: Path, st: Optional[os.stat_result]) -> Optional[bytes]:
        """Builds the encoded line for one file, or None on error."""
        try:
            line = self.builder.build(path, st).to_line()
            return line.encode(config.OUTPUT_ENCODING, config.OUTPUT_ENCODING_ERRORS)
        except Exception as e:
            logging.error(f"Error processing file: {path} - {e}")
            return None

    def _iter_files(self, root: Path) -> Iterator[Tuple[Path, Optional[os.stat_result]]]:
        """
        Depth-limited walker using os.scandir for speed.
        Only the root listing is fatal; nested directories that fail are skipped.
        """
        stack = [(root, 1)]
        while stack:
            current, depth = stack.pop()
            try:
                with os.scandir(current) as it:
                    entries = list(it)
            except OSError as e:
                if current == root:
                    logging.error(f"Error reading directory: {root} - {e}")
                    raise DirectoryAccessError(root, e) from e
                logging.warning(f"Cannot read {current}: {e}")
                continue

            # Sort for stable traversal order
            entries.sort(key=lambda e: e.name.lower())

            dirs = []
            for e in entries:
                try:
                    if e.is_dir(follow_symlinks=False):
                        if depth < self.max_depth:
                            dirs.append(Path(e.path))
                    elif e.is_file(follow_symlinks=False):
                        yield Path(e.path), self._entry_stat(e)
                except OSError as err:
                    logging.error(f"Error processing file: {e.path} - {err}")

            # Push dirs to stack (reversed so we process A before Z)
            for d in reversed(dirs):
                stack.append((d, depth + 1))

    @staticmethod
    def _entry_stat(entry: os.DirEntry) -> Optional[os.stat_result]:
        # None lets the record builder retry (and fail per-file if it must)
        try:
            return entry.stat(follow_symlinks=False)
        except OSError:
            return None
