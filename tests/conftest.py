import logging
from typing import Dict, List, Optional

import platformdirs
import pytest
import requests

from update_versions.exceptions import APIError, NetworkError
from update_versions.sync.interfaces import Release, ReleaseSource

_NETWORK_BLOCK_MSG = (
    "Network access is blocked during tests. Mock requests.* or Session.request."
)

MARKERS = {
    "unit": "fast tests of a single component",
    "integration": "tests running the whole update workflow",
    "core": "checksum parsing, aggregation and rendering",
    "infrastructure": "files, cache, logging and HTTP plumbing",
    "configuration": "configuration loading and command line handling",
}


def _block_network(*_args, **_kwargs):
    """
    Prevent network calls in tests by raising a RuntimeError.

    Raises:
        RuntimeError: with `_NETWORK_BLOCK_MSG` indicating that network access is blocked during tests.
    """
    raise RuntimeError(_NETWORK_BLOCK_MSG)


def pytest_configure(config):
    for name, description in MARKERS.items():
        config.addinivalue_line("markers", f"{name}: {description}")


def pytest_runtest_setup():
    """Replace the requests entry points with blocking callables."""
    requests.get = _block_network
    requests.post = _block_network
    requests.head = _block_network
    requests.Session.request = _block_network


@pytest.fixture(autouse=True)
def _isolate_test_environment(tmp_path_factory, monkeypatch):
    """
    Point the user configuration directory at a temporary location and clear
    environment variables that change behaviour.
    """
    config_dir = tmp_path_factory.mktemp("update_versions_config")
    monkeypatch.setattr(
        platformdirs, "user_config_dir", lambda *_args, **_kwargs: str(config_dir)
    )
    for name in (
        "BUILD_WORKSPACE_DIRECTORY",
        "GITHUB_TOKEN",
        "UPDATE_VERSIONS_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class FakeReleaseSource(ReleaseSource):
    """
    Release source returning canned releases and asset contents.

    Downloads of URLs without registered content fail, so a test can assert that
    a cached manifest is used without touching the source.
    """

    def __init__(self) -> None:
        self.releases: List[Release] = []
        self.asset_contents: Dict[str, bytes] = {}
        self.list_error: Optional[Exception] = None
        self.download_error: Optional[Exception] = None
        self.downloaded_urls: List[str] = []

    def add_release(self, tag: str) -> None:
        self.releases.append(Release(tag_name=tag))

    def add_asset(self, url: str, content: bytes) -> None:
        self.asset_contents[url] = content

    def list_latest_releases(self, count: int) -> List[Release]:
        if self.list_error is not None:
            raise self.list_error
        return self.releases[:count]

    def download(self, url: str) -> bytes:
        self.downloaded_urls.append(url)
        if self.download_error is not None:
            raise self.download_error
        if url not in self.asset_contents:
            raise NetworkError(f"asset not found: {url}", url=url)
        return self.asset_contents[url]


@pytest.fixture
def fake_source() -> FakeReleaseSource:
    """Provide an empty FakeReleaseSource."""
    return FakeReleaseSource()


@pytest.fixture
def api_error() -> APIError:
    return APIError("API rate limit exceeded", status_code=403)


def checksums_url(tag: str) -> str:
    version = tag[1:] if tag.startswith("v") else tag
    return (
        "https://github.com/golangci/golangci-lint/releases/download/"
        f"{tag}/golangci-lint-{version}-checksums.txt"
    )


@pytest.fixture
def manifest_url():
    """Return a function building the checksum manifest URL for a tag."""
    return checksums_url


@pytest.fixture
def caplog_update_versions(caplog):
    """Capture records from the non-propagating update_versions logger."""
    logger = logging.getLogger("update_versions")
    logger.addHandler(caplog.handler)
    caplog.set_level(logging.DEBUG, logger="update_versions")
    yield caplog
    logger.removeHandler(caplog.handler)
