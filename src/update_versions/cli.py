# src/update_versions/cli.py

import argparse
import sys
from pathlib import Path
from typing import List, Optional

from update_versions import log_utils
from update_versions.config import Config, load_config_file
from update_versions.constants import (
    CONFIG_KEY_LOG_LEVEL,
    DEFAULT_CACHE_DIR,
    DEFAULT_OUTPUT_FILE,
    DEFAULT_VERSION_COUNT,
)
from update_versions.exceptions import ConfigurationError, UpdateVersionsError
from update_versions.sync.github_source import GitHubReleaseSource
from update_versions.sync.runner import Runner


def _positive_int(value: str) -> int:
    try:
        number = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: {value!r}") from None
    if number <= 0:
        raise argparse.ArgumentTypeError("count must be positive")
    return number


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="update-versions",
        description=(
            "Update the generated golangci-lint versions file with checksums "
            "from the latest GitHub releases"
        ),
    )
    parser.add_argument(
        "--count",
        type=_positive_int,
        default=None,
        help=f"Number of versions to process (default: {DEFAULT_VERSION_COUNT})",
    )
    parser.add_argument(
        "--cache-dir",
        default=None,
        help=f"Cache directory for checksum files (default: {DEFAULT_CACHE_DIR})",
    )
    parser.add_argument(
        "--output",
        default=None,
        help=f"Output file path for generated Starlark (default: {DEFAULT_OUTPUT_FILE})",
    )
    parser.add_argument(
        "--config",
        default=None,
        help="YAML configuration file (default: the user configuration directory)",
    )
    parser.add_argument(
        "--log-level",
        default=None,
        help="Log level name, e.g. DEBUG or WARNING",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help="Also write a rotating log file into this directory",
    )
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """
    Entry point for the update-versions command-line interface.

    Loads configuration, lists the latest golangci-lint releases from GitHub, and
    regenerates the versions file. Exits with status 1 when configuration is invalid
    or the run fails; argument errors exit with status 2.
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        file_config = load_config_file(args.config)
    except ConfigurationError as e:
        log_utils.logger.error(f"Error: {e}")
        sys.exit(1)

    level_name = args.log_level or file_config.get(CONFIG_KEY_LOG_LEVEL)
    if level_name:
        log_utils.set_log_level(str(level_name))
    if args.log_dir:
        log_utils.add_file_logging(Path(args.log_dir), str(level_name or "INFO"))

    try:
        config = Config.from_sources(
            file_config,
            count=args.count,
            cache_dir=args.cache_dir,
            output_file=args.output,
        )
    except ConfigurationError as e:
        log_utils.logger.error(f"Error: {e}")
        sys.exit(1)

    source = GitHubReleaseSource(github_token=config.github_token)
    try:
        Runner(config, source).run()
    except UpdateVersionsError as e:
        log_utils.logger.error(f"Error: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
