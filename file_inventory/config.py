"""
Configuration constants for the file inventory scanner.
"""

# --- Output Schema ---
# Column order is fixed: the importer is configured with exactly these names.
COLUMN_NAMES = [
    "fileName",
    "fileSize(KB)",
    "fileExtension",
    "lastModifiedTime",
    "creationTime",
    "author",
    "filePath",
    "filePermissions",
    "fileChecksum",
    "fileContent",
]
FIELD_SEPARATOR = ","
LINE_TERMINATOR = "\n"
OUTPUT_ENCODING = "utf-8"
# Undecodable file names (lone surrogates on POSIX) are written with "?" in place
OUTPUT_ENCODING_ERRORS = "replace"
DEFAULT_OUTPUT_NAME = "file_list.csv"

# Options handed to the tabular importer along with the generated file
IMPORT_OPTIONS = {
    "separator": FIELD_SEPARATOR,
    "includeArchiveFileName": True,
    "includeFileSources": False,
}

# --- Traversal ---
# 1 = immediate entries of each root only
DEFAULT_MAX_DEPTH = 1

# --- Hashing & Performance ---
CHECKSUM_ALGORITHM = "SHA-256"
HASH_CHUNK_SIZE = 8 * 1024  # 8 KB chunks for reading

# --- Content Preview ---
BINARY_SNIFF_SIZE = 1024  # Bytes inspected by the binary heuristic
CONTENT_PREVIEW_BYTES = 1024  # Byte budget for fileContent, cut before decoding

# Trimmed from both ends of an escaped preview (every char <= U+0020)
TRIM_CHARS = "".join(chr(c) for c in range(0x21))

# --- Metadata ---
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S"
