"""
Constants and configuration values for update-versions.

This module contains the hardcoded URLs, timeouts, default paths and other
constants used throughout the tool.
"""

# Tool whose releases are tracked
TOOL_NAME = "golangci-lint"
GITHUB_OWNER = "golangci"
GITHUB_REPO = "golangci-lint"

# GitHub URLs
GITHUB_API_BASE = "https://api.github.com/repos"
GOLANGCI_RELEASES_URL = f"{GITHUB_API_BASE}/{GITHUB_OWNER}/{GITHUB_REPO}/releases"
GOLANGCI_DOWNLOAD_BASE = (
    f"https://github.com/{GITHUB_OWNER}/{GITHUB_REPO}/releases/download"
)
# Formatted with the full tag and the tag without its leading "v"
CHECKSUMS_URL_TEMPLATE = (
    GOLANGCI_DOWNLOAD_BASE + "/{tag}/" + TOOL_NAME + "-{version}-checksums.txt"
)

# Network timeouts (in seconds)
GITHUB_API_TIMEOUT = 10
DOWNLOAD_TIMEOUT = 30
GITHUB_MAX_PER_PAGE = 100

# Command line defaults
DEFAULT_VERSION_COUNT = 10
DEFAULT_CACHE_DIR = "tools/update_versions/cache/checksums"
DEFAULT_OUTPUT_FILE = "golangci_lint/private/versions.bzl"

# Checksum manifests
CACHE_FILE_SUFFIX = ".txt"
TEMP_FILE_SUFFIX = ".tmp"
ARCHIVE_EXTENSIONS = (".tar.gz", ".zip")
SOURCE_ARCHIVE_MARKER = "-source."
SHA256_HEX_LENGTH = 64
VERSION_TAG_PREFIX = "v"

# Generated artifact
TEMPLATE_PACKAGE = "update_versions.sync"
TEMPLATE_RESOURCE = "templates/versions.bzl.tmpl"
GENERATED_FILE_MARKER = "# Code generated by //tools/update_versions. DO NOT EDIT."
STARLARK_INDENT = "    "
RFC3339_FORMAT = "%Y-%m-%dT%H:%M:%SZ"

# Directory permissions for created cache/output directories
DIRECTORY_PERMISSIONS = 0o755

# Configuration file
APP_NAME = "update-versions"
CONFIG_FILE_NAME = "update_versions.yaml"
CONFIG_KEY_COUNT = "COUNT"
CONFIG_KEY_CACHE_DIR = "CACHE_DIR"
CONFIG_KEY_OUTPUT = "OUTPUT"
CONFIG_KEY_GITHUB_TOKEN = "GITHUB_TOKEN"
CONFIG_KEY_LOG_LEVEL = "LOG_LEVEL"

# Environment variable names
WORKSPACE_ROOT_ENV_VAR = "BUILD_WORKSPACE_DIRECTORY"
GITHUB_TOKEN_ENV_VAR = "GITHUB_TOKEN"
LOG_LEVEL_ENV_VAR = "UPDATE_VERSIONS_LOG_LEVEL"

# Logging configuration
LOGGER_NAME = "update_versions"
LOG_FILE_NAME = "update_versions.log"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
INFO_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(message)s"
DEBUG_LOG_FORMAT = "%(asctime)s - %(levelname)s - %(name)s: %(message)s"
LOG_FILE_MAX_BYTES = 10 * 1024 * 1024  # 10 MB
LOG_FILE_BACKUP_COUNT = 5
