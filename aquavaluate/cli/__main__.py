from __future__ import annotations

import argparse
import sys
from pathlib import Path

from dotenv import load_dotenv

from ..config.loader import DEFAULT_CONFIG_PATH, ConfigError, load_config
from ..ingest.reader import CsvReadError, read_csv_table
from ..logging.init import enable_debug, log_summary, setup_logging
from ..services.orchestrator import ProcessingError, process_all, scan_csv_files
from ..services.summary import render_summary_line

"""CLI entrypoint.

Flow:
- Load .env (API keys) and the YAML config
- Scan the source directory for .csv files (non-recursive)
- Score each file (direct path, or AI imputation path with --ai)
- Print the SUMMARY line and exit with the contract exit code
"""

__all__ = [
    "EXIT_SUCCESS_ALL",
    "EXIT_FATAL",
    "EXIT_PARTIAL_FAILURE",
    "main",
]

EXIT_SUCCESS_ALL = 0
EXIT_FATAL = 1
EXIT_PARTIAL_FAILURE = 2


def _load_env_file(path: Path, override: bool = False) -> None:
    """Load .env using python-dotenv; a broken file is reported and ignored."""
    try:
        if path.exists():
            load_dotenv(dotenv_path=path, override=override)
    except (OSError, UnicodeDecodeError) as e:
        print(f"WARNING: failed to load .env via python-dotenv: {e}")


def _parse_args(argv: list[str]) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="aquavaluate",
        description="Groundwater heavy metal pollution index (HMPI) scoring",
    )
    p.add_argument("--config", type=Path, default=DEFAULT_CONFIG_PATH, help="Path to YAML config")
    p.add_argument("--ai", action="store_true", help="Impute missing values with the AI collaborator")
    p.add_argument("--debug", action="store_true", help="Enable debug logging")
    p.add_argument("--inspect-data", action="store_true", help="Print headers & first rows of each CSV then exit")
    return p.parse_args(argv)


def _inspect_data(directory: Path) -> int:
    try:
        csv_files = scan_csv_files(directory)
    except ProcessingError as e:
        print(f"inspect: {e}")
        return EXIT_FATAL
    if not csv_files:
        print("inspect: no .csv files")
        return EXIT_SUCCESS_ALL
    for f in csv_files:
        print(f"FILE: {f.name}")
        try:
            table = read_csv_table(f)
        except CsvReadError as e:
            print(f"  read_error: {e}")
            continue
        print(f"  headers={table[0]} rows={len(table) - 1}")
        for row in table[1:4]:
            print(f"    {row}")
    return EXIT_SUCCESS_ALL


def main(argv: list[str] | None = None) -> int:
    logger = setup_logging()

    # NOTE: [] が渡された場合に sys.argv (pytest の引数) を読まないよう None のときだけ参照
    if argv is None:
        argv = sys.argv[1:]
    args = _parse_args(argv)
    _load_env_file(Path(".env"))

    if args.debug:
        enable_debug(logger)
        logger.debug("debug mode enabled")

    try:
        cfg = load_config(args.config)
    except ConfigError as e:
        logger.error(f"config: {e}")
        return EXIT_FATAL

    directory = Path(cfg.source_directory)
    if not directory.exists():
        logger.error(f"directory not found: {directory}")
        return EXIT_FATAL

    if args.inspect_data:
        return _inspect_data(directory)

    use_ai = args.ai or cfg.imputation.enabled
    logger.info(f"Processing files from: {directory} mode={'ai' if use_ai else 'direct'}")

    try:
        result = process_all(cfg, use_ai=use_ai)
    except ProcessingError as e:
        logger.error(f"processing: {e}")
        return EXIT_FATAL

    # log_summary が "SUMMARY " を付けるので本体部分のみ渡す
    summary_line = render_summary_line(result)
    log_summary(summary_line.removeprefix("SUMMARY "))

    if result.failed_files > 0:
        return EXIT_PARTIAL_FAILURE
    return EXIT_SUCCESS_ALL


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
