"""
Checksum Manifest Parsing

Turns the text of a release's `<tool>-<version>-checksums.txt` manifest into a
mapping of Platform to SHA-256 digest. Lines that cannot be used are skipped
with a warning; only an undecodable manifest is an error.
"""

import re
from functools import lru_cache
from typing import Dict, Pattern

from update_versions.constants import (
    ARCHIVE_EXTENSIONS,
    SHA256_HEX_LENGTH,
    SOURCE_ARCHIVE_MARKER,
    TOOL_NAME,
)
from update_versions.exceptions import ChecksumParseError, PlatformExtractionError
from update_versions.log_utils import logger

from .interfaces import Platform

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


@lru_cache(maxsize=None)
def _platform_archive_rx(tool_name: str) -> Pattern[str]:
    # <tool>-<N(.N)*>-<os>-<arch>.<tar.gz|zip>
    return re.compile(
        rf"{re.escape(tool_name)}-\d+(?:\.\d+)*-(\w+)-(\w+)\.(?:tar\.gz|zip)",
        re.ASCII,
    )


def is_valid_sha256(value: str) -> bool:
    """
    Check whether a string is a SHA-256 hex digest.

    Returns:
        bool: `True` if `value` is exactly 64 characters of [0-9a-fA-F], `False` otherwise.
    """
    return len(value) == SHA256_HEX_LENGTH and all(c in _HEX_DIGITS for c in value)


def is_platform_archive(filename: str) -> bool:
    """
    Determine whether a manifest filename names a downloadable platform archive.

    Package formats (.deb, .rpm, ...) and source archives are not platform archives.
    """
    if not filename.endswith(ARCHIVE_EXTENSIONS):
        return False
    return SOURCE_ARCHIVE_MARKER not in filename


def extract_platform_from_filename(
    filename: str, tool_name: str = TOOL_NAME
) -> Platform:
    """
    Extract the OS and architecture from an asset filename.

    Expected format: `<tool_name>-<version>-<os>-<arch>.<tar.gz|zip>`, for example
    `golangci-lint-2.6.1-linux-amd64.tar.gz`. The pattern may appear anywhere in the
    name, so `sha256sum -b` markers (`*name`) and directory prefixes are accepted.
    OS and architecture tokens are taken verbatim; no whitelist is applied.

    Parameters:
        filename (str): Asset filename from a checksum manifest.
        tool_name (str): Fixed tool-name prefix of the asset filenames.

    Returns:
        Platform: The decoded platform.

    Raises:
        PlatformExtractionError: If the filename does not have the expected shape.
    """
    match = _platform_archive_rx(tool_name).search(filename)
    if match is None:
        raise PlatformExtractionError(
            f"filename does not match expected pattern: {filename}",
            field="filename",
            value=filename,
        )
    return Platform(os=match.group(1), arch=match.group(2))


def parse_checksum_file(
    content: bytes, tool_name: str = TOOL_NAME
) -> Dict[Platform, str]:
    """
    Parse a SHA-256 checksum manifest into a platform to digest mapping.

    Bytes that are not valid UTF-8 are replaced rather than rejected, so a damaged line
    falls through to the per-line checks below while the remaining lines are kept.
    Each non-blank line is split on whitespace; the first token is the digest and the
    last token the filename. A line is skipped (with a warning) when it has fewer than
    two tokens, when the digest is not 64 hex characters, or when the filename names an
    archive whose platform cannot be decoded. Non-archive filenames are skipped silently.
    Digests are stored exactly as written.

    Parameters:
        content (bytes): Raw manifest bytes.
        tool_name (str): Tool-name prefix expected in archive filenames.

    Returns:
        Dict[Platform, str]: Digest per platform; empty when nothing usable was found.

    Raises:
        ChecksumParseError: If `content` is not a bytes object, i.e. nothing was read.
    """
    if not isinstance(content, (bytes, bytearray)):
        raise ChecksumParseError(
            "error reading checksum file",
            details=f"expected bytes, got {type(content).__name__}",
        )
    text = bytes(content).decode("utf-8", errors="replace")

    checksums: Dict[Platform, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        parts = line.split()
        if len(parts) < 2:
            logger.warning(f"Skipping malformed line: {line}")
            continue

        digest = parts[0]
        filename = parts[-1]

        if not is_valid_sha256(digest):
            logger.warning(f"Skipping line with invalid SHA256: {line}")
            continue

        if not is_platform_archive(filename):
            continue

        try:
            platform = extract_platform_from_filename(filename, tool_name)
        except PlatformExtractionError as e:
            logger.warning(f"Skipping file {filename}: {e}")
            continue

        checksums[platform] = digest

    return checksums
