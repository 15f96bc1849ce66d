from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, List, Mapping

from . import config
from .encoding import encode_field


@dataclass
class ScanOptions:
    """
    What to scan and how. Roots are scanned in the order given.
    """
    roots: List[Path] = field(default_factory=list)
    include_content: bool = True   # False leaves fileContent empty for every file
    max_depth: int = config.DEFAULT_MAX_DEPTH
    max_workers: int = 1
    show_progress: bool = False

    def __post_init__(self):
        self.roots = [Path(r) for r in self.roots]
        if self.max_depth < 1:
            raise ValueError(f"max_depth must be >= 1, got {self.max_depth}")
        if self.max_workers < 1:
            raise ValueError(f"max_workers must be >= 1, got {self.max_workers}")

    @classmethod
    def from_dict(cls, options: Mapping[str, Any]) -> "ScanOptions":
        """
        Builds options from the host's JSON shape:
            {"directoryJsonValue": [{"directory": "/data"}], "fileContentColumn": true}
        """
        roots = [Path(entry["directory"]) for entry in options.get("directoryJsonValue", [])]
        return cls(
            roots=roots,
            include_content=bool(options.get("fileContentColumn", True)),
        )


@dataclass
class FileRecord:
    """
    One output row. Fields are in output column order.
    """
    file_name: str
    file_size_kb: int
    file_extension: str
    last_modified: str
    creation_time: str
    author: str
    file_path: str
    file_permissions: str
    file_checksum: str
    file_content: str  # Already escaped and quoted, or empty

    def to_line(self) -> str:
        """Serializes the record to one newline-terminated output line."""
        fields = [
            encode_field(self.file_name),
            str(self.file_size_kb),
            encode_field(self.file_extension),
            self.last_modified,
            self.creation_time,
            encode_field(self.author),
            encode_field(self.file_path),
            self.file_permissions,
            self.file_checksum,
            self.file_content,
        ]
        return config.FIELD_SEPARATOR.join(fields) + config.LINE_TERMINATOR
