"""
Version Aggregation

Drives manifest resolution and parsing across a list of releases. Failures
are contained per release: a release that cannot be resolved or parsed is
logged and left out, and processing continues with the next one.
"""

from typing import Iterable, List

from update_versions.exceptions import ChecksumParseError, UpdateVersionsError
from update_versions.log_utils import logger

from .cache import ChecksumResolver
from .checksum import parse_checksum_file
from .interfaces import Release, Version


def process_releases(
    releases: Iterable[Release], resolver: ChecksumResolver
) -> List[Version]:
    """
    Resolve and parse the checksum manifest of each release, in the order given.

    Releases with an empty tag, an unresolvable manifest or an unreadable manifest are
    skipped with a warning. A release whose manifest yields no platform archives is
    still recorded, with an empty checksum mapping.

    Parameters:
        releases (Iterable[Release]): Releases in release-source order (newest first).
        resolver (ChecksumResolver): Supplies manifest bytes per tag.

    Returns:
        List[Version]: One entry per surviving release, in input order.
    """
    versions: List[Version] = []

    for release in releases:
        tag = release.tag_name
        if not tag:
            logger.warning("Skipping release with empty tag")
            continue

        logger.info(f"Processing {tag}...")

        try:
            checksum_data = resolver.resolve(tag)
        except UpdateVersionsError as e:
            logger.warning(f"  Skipping {tag}: {e}")
            continue

        try:
            checksums = parse_checksum_file(checksum_data)
        except ChecksumParseError as e:
            logger.warning(f"  Failed to parse checksum file for {tag}: {e}")
            continue

        if checksums:
            logger.info(f"  Found checksums for {len(checksums)} platforms")
        else:
            logger.warning(f"  No platform checksums found for {tag}")

        versions.append(Version(tag=tag, checksums=checksums))

    return versions
