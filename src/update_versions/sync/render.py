"""
Starlark Rendering

Reshapes aggregated versions into template data and renders the generated
`versions.bzl` file. OS and architecture keys are always emitted in sorted
order so identical checksum data renders to identical bytes; only the
generation timestamp differs between runs.
"""

import importlib.resources
import json
from dataclasses import dataclass, field
from datetime import datetime, timezone
from string import Template
from typing import Dict, List, Mapping, Optional

from update_versions.constants import (
    RFC3339_FORMAT,
    STARLARK_INDENT,
    TEMPLATE_PACKAGE,
    TEMPLATE_RESOURCE,
)
from update_versions.exceptions import TemplateError
from update_versions.log_utils import logger

from .files import atomic_write
from .interfaces import Pathish, Platform, Version

ChecksumsByOS = Dict[str, Dict[str, str]]


@dataclass
class VersionData:
    """Checksums of one release grouped by OS, then architecture."""

    tag: str
    checksums_by_os: ChecksumsByOS = field(default_factory=dict)


@dataclass
class TemplateData:
    """Values substituted into the output template."""

    generated_at: str
    """RFC 3339 UTC timestamp of the render"""

    default_version: str
    """Tag of the first (most recent) version; empty when there are no versions"""

    versions: List[VersionData] = field(default_factory=list)


def organize_platforms_by_os(checksums: Mapping[Platform, str]) -> ChecksumsByOS:
    """Convert a flat Platform -> digest mapping into OS -> arch -> digest."""
    result: ChecksumsByOS = {}
    for platform, digest in checksums.items():
        result.setdefault(platform.os, {})[platform.arch] = digest
    return result


def sorted_os_keys(checksums_by_os: Mapping[str, Mapping[str, str]]) -> List[str]:
    return sorted(checksums_by_os)


def sorted_arch_keys(checksums_by_arch: Mapping[str, str]) -> List[str]:
    return sorted(checksums_by_arch)


def utc_timestamp(now: Optional[datetime] = None) -> str:
    """Format `now` (default: the current time) as an RFC 3339 UTC timestamp."""
    moment = now or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).strftime(RFC3339_FORMAT)


def prepare_template_data(versions: List[Version]) -> TemplateData:
    """
    Build template data from aggregated versions.

    The first version becomes the default; version order is kept as given.
    """
    return TemplateData(
        generated_at=utc_timestamp(),
        default_version=versions[0].tag if versions else "",
        versions=[
            VersionData(
                tag=version.tag,
                checksums_by_os=organize_platforms_by_os(version.checksums),
            )
            for version in versions
        ],
    )


def _quote(value: str) -> str:
    # JSON string literals are valid Starlark string literals
    return json.dumps(value)


def format_versions_literal(versions: List[VersionData]) -> str:
    """
    Render versions as a Starlark dict literal: tag -> OS -> arch -> digest.

    Tags keep their given order; OS and architecture keys are sorted.
    """
    if not versions:
        return "{}"

    indent = STARLARK_INDENT
    lines = ["{"]
    for version in versions:
        lines.append(f"{indent}{_quote(version.tag)}: {{")
        for os_name in sorted_os_keys(version.checksums_by_os):
            arches = version.checksums_by_os[os_name]
            lines.append(f"{indent * 2}{_quote(os_name)}: {{")
            for arch in sorted_arch_keys(arches):
                lines.append(f"{indent * 3}{_quote(arch)}: {_quote(arches[arch])},")
            lines.append(f"{indent * 2}}},")
        lines.append(f"{indent}}},")
    lines.append("}")
    return "\n".join(lines)


def load_template(path: Optional[Pathish] = None) -> Template:
    """
    Load the output template.

    Parameters:
        path (Optional[Pathish]): Template file to load; the packaged
            `templates/versions.bzl.tmpl` resource is used when omitted.

    Returns:
        Template: The loaded template.

    Raises:
        TemplateError: If the template cannot be read.
    """
    try:
        if path is None:
            resource = importlib.resources.files(TEMPLATE_PACKAGE).joinpath(
                TEMPLATE_RESOURCE
            )
            text = resource.read_text(encoding="utf-8")
        else:
            with open(path, "r", encoding="utf-8") as f:
                text = f.read()
    except OSError as e:
        raise TemplateError("failed to load template", details=str(e)) from e
    return Template(text)


class StarlarkRenderer:
    """
    Renders template data into the generated Starlark file.

    The template is supplied at construction so alternate templates can be used
    without touching any module state.
    """

    def __init__(self, template: Template):
        self.template = template

    def render(self, data: TemplateData) -> str:
        """
        Substitute `generated_at`, `default_version` and `versions` into the template.

        Raises:
            TemplateError: If the template references an unknown placeholder or is malformed.
        """
        try:
            return self.template.substitute(
                generated_at=data.generated_at,
                default_version=_quote(data.default_version),
                versions=format_versions_literal(data.versions),
            )
        except (KeyError, ValueError) as e:
            raise TemplateError("failed to execute template", details=str(e)) from e

    def write(self, data: TemplateData, output_path: Pathish) -> None:
        """
        Render `data` and atomically replace `output_path` with the result.

        Rendering happens while the temporary file is open, so a rendering failure
        leaves no temporary file behind and the previous output untouched.

        Raises:
            TemplateError: If rendering fails.
            FileSystemError: If the file cannot be written or renamed.
        """
        atomic_write(output_path, lambda f: f.write(self.render(data)))
        logger.debug(f"Wrote {len(data.versions)} versions to {output_path}")
