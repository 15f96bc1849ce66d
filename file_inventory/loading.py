"""
Import boundary: how a generated file list is read back into rows.

The tabular importer is configured with `import_options()`; `load_file_list`
parses the stream the same way (comma separated, no header, fixed columns).
"""
import csv
import logging
from pathlib import Path
from typing import Any, Dict, List

from . import config
from .exceptions import FileListLoadError


def import_options() -> Dict[str, Any]:
    """Options the importer needs to read the generated file list."""
    options = dict(config.IMPORT_OPTIONS)
    options["columnNames"] = list(config.COLUMN_NAMES)
    return options


def load_file_list(path: Path) -> List[Dict[str, Any]]:
    """
    Parses a generated file list into dicts keyed by column name.
    Raises FileListLoadError if any row does not have exactly one value per column.
    """
    options = import_options()
    columns = options["columnNames"]
    rows = []
    bad_lines = []

    with open(path, "r", newline="", encoding=config.OUTPUT_ENCODING) as f:
        reader = csv.reader(f, delimiter=options["separator"])
        for values in reader:
            if len(values) != len(columns):
                bad_lines.append(reader.line_num)
                continue
            row: Dict[str, Any] = dict(zip(columns, values))
            row["fileSize(KB)"] = int(row["fileSize(KB)"])
            rows.append(row)

    if bad_lines:
        logging.error(f"Malformed rows in {path} at lines {bad_lines}")
        raise FileListLoadError(f"Failed to process file list {path}: malformed lines {bad_lines}")

    logging.info(f"Loaded {len(rows)} records from {path}")
    return rows
