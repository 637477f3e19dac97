"""
Version Update Runner

Orchestrates one update run: prepares directories, lists releases, collects
checksums and generates the Starlark output file.
"""

from string import Template
from typing import List, Optional, Tuple

from update_versions.config import Config
from update_versions.exceptions import (
    FileSystemError,
    NoVersionsError,
    TemplateError,
    UpdateVersionsError,
)
from update_versions.log_utils import logger

from .aggregator import process_releases
from .cache import ChecksumResolver
from .files import ensure_directory, ensure_output_directory
from .interfaces import Release, ReleaseSource, Version
from .ordering import check_release_order
from .render import StarlarkRenderer, TemplateData, load_template, prepare_template_data


class Runner:
    """
    Runs the version update workflow for a configuration and release source.

    Per-release problems are logged and skipped. The run fails, raising an
    `UpdateVersionsError` naming the failing stage, when directories cannot be
    created, releases cannot be listed, no release survives, or the output
    cannot be written.
    """

    def __init__(
        self,
        config: Config,
        source: ReleaseSource,
        template: Optional[Template] = None,
    ):
        self.config = config
        self.source = source
        self.template = template

    def resolve_absolute_paths(self) -> Tuple[str, str]:
        return self.config.resolve_absolute_paths()

    def run(self) -> TemplateData:
        """
        Execute the update workflow.

        Returns:
            TemplateData: The data written to the output file.

        Raises:
            UpdateVersionsError: If any fatal stage fails.
        """
        logger.info("golangci-lint version updater starting...")
        logger.info(f"Workspace root: {self.config.workspace_root}")
        logger.info(f"Will process {self.config.count} versions")

        abs_cache_dir, abs_output_file = self.resolve_absolute_paths()
        logger.info(f"Cache directory: {abs_cache_dir}")
        logger.info(f"Output file: {abs_output_file}")

        try:
            ensure_directory(abs_cache_dir)
        except FileSystemError as e:
            raise UpdateVersionsError(
                "failed to create cache directory", details=str(e)
            ) from e
        try:
            ensure_output_directory(abs_output_file)
        except FileSystemError as e:
            raise UpdateVersionsError(
                "failed to create output directory", details=str(e)
            ) from e

        logger.info("Fetching releases from GitHub...")
        try:
            releases = self.source.list_latest_releases(self.config.count)
        except Exception as e:
            raise UpdateVersionsError(
                "failed to fetch releases", details=str(e)
            ) from e
        logger.info(f"Found {len(releases)} releases")
        check_release_order(releases)

        versions = self.process_releases(releases, abs_cache_dir)
        if not versions:
            raise NoVersionsError()
        logger.info(f"Successfully processed {len(versions)} versions")

        logger.info("Generating Starlark file...")
        template_data = prepare_template_data(versions)
        try:
            template = self.template if self.template is not None else load_template()
            renderer = StarlarkRenderer(template)
            renderer.write(template_data, abs_output_file)
        except (TemplateError, FileSystemError) as e:
            raise UpdateVersionsError(
                "failed to generate output file", details=str(e)
            ) from e

        logger.info(f"Successfully generated {abs_output_file}")
        logger.info(f"Default version: {template_data.default_version}")
        logger.info("Done!")
        return template_data

    def process_releases(
        self, releases: List[Release], cache_dir: str
    ) -> List[Version]:
        resolver = ChecksumResolver(self.source, cache_dir)
        return process_releases(releases, resolver)

