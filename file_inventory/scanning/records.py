import logging
import os
from pathlib import Path
from typing import Callable, Optional

from ..exceptions import RecordBuildError
from ..metadata.extract import MetadataExtractor, get_extension, size_in_kb
from ..models import FileRecord
from .content import ContentPreviewer
from .hasher import FileHasher


class FileRecordBuilder:
    def __init__(self, include_content: bool = True):
        self.include_content = include_content
        self.hasher = FileHasher()
        self.metadata = MetadataExtractor()
        self.previewer = ContentPreviewer()

    def build(self, path: Path, st: Optional[os.stat_result] = None) -> FileRecord:
        """
        Gathers every column for one file.

        Only a missing stat is fatal for the record (size and timestamps come
        from it). Any other field that fails is logged and left empty.
        """
        if st is None:
            try:
                st = path.stat(follow_symlinks=False)
            except OSError as e:
                raise RecordBuildError(f"Cannot stat {path}: {e}") from e

        file_name = path.name
        return FileRecord(
            file_name=file_name,
            file_size_kb=size_in_kb(st.st_size),
            file_extension=get_extension(file_name),
            last_modified=self._field("lastModifiedTime", path, lambda: self.metadata.get_modified_time(st)),
            creation_time=self._field("creationTime", path, lambda: self.metadata.get_creation_time(st)),
            author=self.metadata.get_owner(path),
            file_path=self._field("filePath", path, lambda: str(path.resolve()), default=str(path.absolute())),
            file_permissions=self._field("filePermissions", path, lambda: self.metadata.get_permissions(path, st)),
            file_checksum=self._field("fileChecksum", path, lambda: self.hasher.compute_checksum(path)),
            file_content=self._content(path),
        )

    def _content(self, path: Path) -> str:
        if not self.include_content:
            return ""
        return self._field("fileContent", path, lambda: self.previewer.preview(path))

    @staticmethod
    def _field(name: str, path: Path, extract: Callable[[], str], default: str = "") -> str:
        """Runs one extractor; a failure degrades the field, never the record."""
        try:
            return extract()
        except Exception as e:
            logging.warning(f"Could not compute {name} for {path}: {e}")
            return default
