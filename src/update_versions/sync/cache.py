"""
Checksum Manifest Cache

Resolves the checksum manifest of a release tag from an on-disk cache, falling
back to the release source on a miss and populating the cache afterwards.
Cache entries never expire; a present file is trusted as-is.
"""

import os
from typing import Callable, Optional

from update_versions.constants import (
    CACHE_FILE_SUFFIX,
    CHECKSUMS_URL_TEMPLATE,
    VERSION_TAG_PREFIX,
)
from update_versions.exceptions import (
    CacheError,
    DownloadError,
    FileSystemError,
)
from update_versions.log_utils import logger

from .files import atomic_write_bytes
from .interfaces import Pathish, ReleaseSource


def strip_version_prefix(tag: str) -> str:
    """Remove a single leading "v" from a release tag, if present."""
    if tag.startswith(VERSION_TAG_PREFIX):
        return tag[len(VERSION_TAG_PREFIX) :]
    return tag


def checksum_url_for_tag(tag: str) -> str:
    """
    Build the download URL of a release's checksum manifest.

    Example:
        `v2.6.1` -> `https://github.com/golangci/golangci-lint/releases/download/v2.6.1/golangci-lint-2.6.1-checksums.txt`
    """
    return CHECKSUMS_URL_TEMPLATE.format(tag=tag, version=strip_version_prefix(tag))


class ChecksumResolver:
    """
    Supplies checksum manifest bytes for release tags.

    Cache files live at `<cache_dir>/<tag>.txt` and hold the raw manifest bytes.
    """

    def __init__(
        self,
        source: ReleaseSource,
        cache_dir: Pathish,
        url_builder: Optional[Callable[[str], str]] = None,
    ):
        """
        Parameters:
            source (ReleaseSource): Source used to download manifests on a cache miss.
            cache_dir (Pathish): Existing directory holding cached manifests.
            url_builder (Optional[Callable[[str], str]]): Maps a tag to its manifest URL;
                defaults to `checksum_url_for_tag`.
        """
        self.source = source
        self.cache_dir = os.fspath(cache_dir)
        self.url_builder = url_builder or checksum_url_for_tag

    def get_cache_file_path(self, tag: str) -> str:
        return os.path.join(self.cache_dir, f"{tag}{CACHE_FILE_SUFFIX}")

    def resolve(self, tag: str) -> bytes:
        """
        Return the checksum manifest for `tag`, preferring the cached copy.

        On a miss the manifest is downloaded and written to the cache. A failure to write
        the cache is logged and does not fail the resolution.

        Returns:
            bytes: Raw manifest bytes.

        Raises:
            CacheError: If a cached file exists but cannot be read.
            DownloadError: If the manifest cannot be downloaded, whatever the source raised.
        """
        cache_file = self.get_cache_file_path(tag)

        if os.path.exists(cache_file):
            logger.info("  Using cached checksum file")
            try:
                with open(cache_file, "rb") as f:
                    return f.read()
            except OSError as e:
                raise CacheError(
                    "failed to read cache file", path=cache_file, details=str(e)
                ) from e

        logger.info("  Downloading checksum file...")
        url = self.url_builder(tag)
        try:
            data = self.source.download(url)
        except DownloadError:
            raise
        except Exception as e:
            # Any source failure surfaces as a DownloadError
            raise DownloadError(
                "failed to download checksum file", url=url, details=str(e)
            ) from e

        try:
            atomic_write_bytes(cache_file, data)
        except FileSystemError as e:
            logger.warning(f"  Failed to save to cache: {e}")
        else:
            logger.info("  Cached checksum file")

        return data
