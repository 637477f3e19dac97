"""
Release ordering check.

The first release listed becomes the default version, which is only correct
when the source lists releases newest first. This module checks that
precondition without changing the order.
"""

from typing import List, Optional, Sequence, Tuple

from packaging.version import InvalidVersion, Version
from packaging.version import parse as parse_version

from update_versions.log_utils import logger

from .cache import strip_version_prefix
from .interfaces import Release


def parse_release_tag(tag: str) -> Optional[Version]:
    """
    Parse a release tag such as `v2.6.1` into a comparable version.

    Returns:
        Optional[Version]: The parsed version, or `None` if the tag is not a valid version.
    """
    if not tag:
        return None
    try:
        return parse_version(strip_version_prefix(tag.strip()))
    except InvalidVersion:
        return None


def find_order_violations(releases: Sequence[Release]) -> List[Tuple[str, str]]:
    """
    Find adjacent parseable releases that are not in newest-first order.

    Tags that cannot be parsed are ignored; the comparison continues with the last
    parseable tag.

    Returns:
        List[Tuple[str, str]]: `(earlier_tag, later_tag)` pairs where the later tag is newer.
    """
    violations: List[Tuple[str, str]] = []
    previous: Optional[Tuple[str, Version]] = None

    for release in releases:
        parsed = parse_release_tag(release.tag_name)
        if parsed is None:
            continue
        if previous is not None and parsed > previous[1]:
            violations.append((previous[0], release.tag_name))
        previous = (release.tag_name, parsed)

    return violations


def check_release_order(releases: Sequence[Release]) -> bool:
    """
    Warn when releases are not listed newest first.

    Returns:
        bool: `True` if no ordering violation was found, `False` otherwise.
    """
    violations = find_order_violations(releases)
    for earlier, later in violations:
        logger.warning(
            f"Release {later} is listed after older release {earlier}; "
            f"the default version may be stale"
        )
    return not violations
