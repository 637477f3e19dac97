"""
Core Interfaces for the Version Synchronization Pipeline

This module defines the data structures passed between pipeline stages and
the release source abstraction the pipeline depends on.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, List, Union

Pathish = Union[str, Path]


@dataclass(frozen=True)
class Platform:
    """An operating system and architecture pair identifying one build target."""

    os: str
    """OS token as it appears in the asset filename (e.g., 'linux')"""

    arch: str
    """Architecture token as it appears in the asset filename (e.g., 'arm64')"""


@dataclass
class Version:
    """A release tag together with the checksums of its platform archives."""

    tag: str
    """The release tag (e.g., 'v2.6.1')"""

    checksums: Dict[Platform, str] = field(default_factory=dict)
    """SHA-256 hex digest per platform, case preserved from the manifest"""


@dataclass
class Release:
    """Represents a release as reported by a release source."""

    tag_name: str
    """The release tag/version identifier (e.g., 'v2.6.1')"""


class ReleaseSource(ABC):
    """
    Abstract base class for release sources.

    A ReleaseSource lists releases and downloads raw asset bytes. The pipeline
    treats the first release returned by `list_latest_releases` as the default
    version, so implementations must return releases newest first.
    """

    @abstractmethod
    def list_latest_releases(self, count: int) -> List[Release]:
        """
        Retrieve the most recent releases, newest first.

        Parameters:
            count (int): Maximum number of releases to return.

        Returns:
            List[Release]: Releases ordered newest first.

        Raises:
            UpdateVersionsError: If the releases cannot be listed.
        """

    @abstractmethod
    def download(self, url: str) -> bytes:
        """
        Download the asset at the given URL.

        Parameters:
            url (str): Direct download URL of the asset.

        Returns:
            bytes: The complete response body.

        Raises:
            UpdateVersionsError: If the asset cannot be downloaded.
        """
