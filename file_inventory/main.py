import argparse
import json
import logging
import sys
from pathlib import Path

from . import config
from .core import FileListGenerator
from .exceptions import FileInventoryError
from .loading import load_file_list
from .models import ScanOptions


def setup_logging(output_path: Path, verbose: bool):
    """Sets up logging to both console and a file next to the output."""
    log_level = logging.DEBUG if verbose else logging.INFO

    output_path.parent.mkdir(parents=True, exist_ok=True)
    log_file = output_path.parent / "file_inventory.log"

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s [%(levelname)s] %(message)s",
        handlers=[
            logging.FileHandler(log_file, encoding='utf-8'),
            logging.StreamHandler(sys.stdout)
        ]
    )


def parse_args(argv=None):
    p = argparse.ArgumentParser(description="File Inventory: list directory contents as CSV for tabular import")

    p.add_argument("roots", type=Path, nargs="*", help="Directories to scan (one level deep)")
    p.add_argument("-o", "--output", type=Path, default=Path(config.DEFAULT_OUTPUT_NAME),
                   help=f"Output file (default: {config.DEFAULT_OUTPUT_NAME})")

    p.add_argument("--options", type=Path, default=None,
                   help="JSON options file ({\"directoryJsonValue\": [...], \"fileContentColumn\": bool})")
    p.add_argument("--no-content", action="store_true", help="Leave the fileContent column empty")
    p.add_argument("--workers", type=int, default=1, help="Parallel workers for per-file extraction")
    p.add_argument("--progress", action="store_true", help="Show a progress bar per root")
    p.add_argument("--load", action="store_true", help="Parse the finished file list and report the row count")
    p.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")

    return p.parse_args(argv)


def build_options(args) -> ScanOptions:
    """Positional roots first, then roots from the JSON options file."""
    roots = list(args.roots)
    include_content = not args.no_content

    if args.options:
        with args.options.open("r", encoding="utf-8") as f:
            file_options = ScanOptions.from_dict(json.load(f))
        roots.extend(file_options.roots)
        include_content = include_content and file_options.include_content

    return ScanOptions(
        roots=roots,
        include_content=include_content,
        max_workers=args.workers,
        show_progress=args.progress,
    )


def main(argv=None):
    args = parse_args(argv)

    output_path = args.output.resolve()
    setup_logging(output_path, args.verbose)

    options = build_options(args)
    if not options.roots:
        logging.error("No directories to scan. Pass roots or --options.")
        sys.exit(1)

    logging.info("=== File Inventory Started ===")
    logging.info(f"Roots:  {', '.join(str(r) for r in options.roots)}")
    logging.info(f"Output: {output_path}")

    generator = FileListGenerator(options)
    try:
        total = generator.generate_file_list(output_path)
        logging.info(f"Wrote {total} bytes.")
        if args.load:
            rows = load_file_list(output_path)
            logging.info(f"Imported {len(rows)} records.")
    except KeyboardInterrupt:
        logging.warning("Operation cancelled by user.")
        sys.exit(1)
    except FileInventoryError:
        logging.exception("File inventory failed.")
        sys.exit(1)


if __name__ == "__main__":
    main()
