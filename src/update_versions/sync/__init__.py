"""
update-versions Synchronization Pipeline

This package turns golangci-lint GitHub releases into the generated
`versions.bzl` file consumed by the Bazel module extension.

Core Components:
- interfaces: Release source interface and pipeline data types
- checksum: Checksum manifest parsing and platform extraction
- cache: Cache-or-fetch resolution of checksum manifests
- aggregator: Per-release processing with failure tolerance
- ordering: Newest-first release ordering check
- render: Deterministic Starlark rendering
- files: Atomic file replacement
- github_source: GitHub implementation of the release source
- runner: Workflow orchestration
"""

from .aggregator import process_releases
from .cache import ChecksumResolver, checksum_url_for_tag
from .checksum import (
    extract_platform_from_filename,
    is_valid_sha256,
    parse_checksum_file,
)
from .files import atomic_write, ensure_output_directory
from .github_source import GitHubReleaseSource
from .interfaces import Platform, Release, ReleaseSource, Version
from .ordering import check_release_order
from .render import (
    StarlarkRenderer,
    TemplateData,
    VersionData,
    load_template,
    prepare_template_data,
)
from .runner import Runner

__all__ = [
    # Interfaces
    "ReleaseSource",
    "Release",
    "Platform",
    "Version",
    # Parsing
    "parse_checksum_file",
    "extract_platform_from_filename",
    "is_valid_sha256",
    # Resolution and aggregation
    "ChecksumResolver",
    "checksum_url_for_tag",
    "process_releases",
    "check_release_order",
    # Rendering
    "StarlarkRenderer",
    "TemplateData",
    "VersionData",
    "load_template",
    "prepare_template_data",
    # File operations
    "atomic_write",
    "ensure_output_directory",
    # Sources and orchestration
    "GitHubReleaseSource",
    "Runner",
]
