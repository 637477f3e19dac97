"""
GitHub Release Source

This module implements the ReleaseSource interface against the GitHub REST
API: listing the latest golangci-lint releases and downloading release
assets. Calls are made once; there is no retry.
"""

import importlib.metadata
import os
from datetime import datetime, timezone
from functools import lru_cache
from typing import Any, Dict, List, Optional

import requests  # type: ignore[import-untyped]

from update_versions.constants import (
    APP_NAME,
    DOWNLOAD_TIMEOUT,
    GITHUB_API_TIMEOUT,
    GITHUB_MAX_PER_PAGE,
    GITHUB_TOKEN_ENV_VAR,
    GOLANGCI_RELEASES_URL,
)
from update_versions.exceptions import (
    APIError,
    HTTPError,
    NetworkError,
    RateLimitError,
)
from update_versions.log_utils import logger

from .interfaces import Release, ReleaseSource


@lru_cache(maxsize=1)
def user_agent() -> str:
    """Return the `update-versions/<installed version>` User-Agent string."""
    try:
        installed = importlib.metadata.version(APP_NAME)
    except importlib.metadata.PackageNotFoundError:
        installed = "unknown"
    return f"{APP_NAME}/{installed}"


def resolve_github_token(
    explicit_token: Optional[str], allow_env_token: bool = True
) -> Optional[str]:
    """
    Pick the token for API requests: the explicit one, else GITHUB_TOKEN when allowed.

    Blank values count as missing.
    """
    candidates = [explicit_token]
    if allow_env_token:
        candidates.append(os.environ.get(GITHUB_TOKEN_ENV_VAR))
    for candidate in candidates:
        token = (candidate or "").strip()
        if token:
            return token
    return None


def _parse_rate_limit_header(header_value: Any) -> Optional[int]:
    try:
        return int(header_value)
    except (TypeError, ValueError):
        return None


def create_release_from_github_data(release_data: Dict[str, Any]) -> Release:
    """
    Create a Release from GitHub API release data.

    Only the tag is kept. A missing or non-string tag becomes an empty tag, which the
    aggregation step skips with a warning.
    """
    tag_name = release_data.get("tag_name")
    if not isinstance(tag_name, str):
        tag_name = ""
    return Release(tag_name=tag_name.strip())


class GitHubReleaseSource(ReleaseSource):
    """
    Lists releases and downloads assets from GitHub.

    Usage:
        source = GitHubReleaseSource(github_token=config.github_token)
        releases = source.list_latest_releases(10)
        data = source.download(url)
    """

    def __init__(
        self,
        releases_url: str = GOLANGCI_RELEASES_URL,
        github_token: Optional[str] = None,
        allow_env_token: bool = True,
        session: Optional[requests.Session] = None,
    ):
        """
        Parameters:
            releases_url (str): GitHub API URL listing the releases.
            github_token (Optional[str]): Token for authenticated API requests.
            allow_env_token (bool): Fall back to the GITHUB_TOKEN environment variable.
            session (Optional[requests.Session]): Session used for requests; a new one is created when omitted.
        """
        self.releases_url = releases_url
        self.github_token = resolve_github_token(github_token, allow_env_token)
        self.session = session or requests.Session()

    def _api_headers(self) -> Dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
            "User-Agent": user_agent(),
        }
        if self.github_token:
            headers["Authorization"] = f"token {self.github_token}"
            logger.debug("Using GitHub token for API authentication")
        else:
            logger.debug("No GitHub token available - using unauthenticated API requests")
        return headers

    def _raise_for_api_status(self, response: requests.Response) -> None:
        if response.status_code == 403:
            remaining = _parse_rate_limit_header(
                response.headers.get("X-RateLimit-Remaining")
            )
            if remaining == 0:
                reset_time = _parse_rate_limit_header(
                    response.headers.get("X-RateLimit-Reset")
                )
                reset_str = (
                    datetime.fromtimestamp(reset_time, timezone.utc).strftime(
                        "%Y-%m-%d %H:%M:%S UTC"
                    )
                    if reset_time is not None
                    else "unknown"
                )
                raise RateLimitError(
                    f"GitHub API rate limit exceeded. Resets at {reset_str}. "
                    f"Set GITHUB_TOKEN environment variable for higher rate limits.",
                    reset_time=reset_time,
                    url=self.releases_url,
                )
        if response.status_code != 200:
            raise APIError(
                f"unexpected status code: {response.status_code}",
                url=self.releases_url,
                status_code=response.status_code,
            )

    def list_latest_releases(self, count: int) -> List[Release]:
        """
        Fetch the latest `count` releases, newest first, as GitHub returns them.

        Raises:
            APIError: If the request fails, GitHub answers with an error, or the payload is not a list.
        """
        params = {"per_page": min(count, GITHUB_MAX_PER_PAGE)}
        logger.debug(f"Making GitHub API request: {self.releases_url}")
        try:
            response = self.session.get(
                self.releases_url,
                headers=self._api_headers(),
                params=params,
                timeout=GITHUB_API_TIMEOUT,
            )
        except requests.RequestException as e:
            raise APIError(
                "failed to list releases", url=self.releases_url, details=str(e)
            ) from e

        self._raise_for_api_status(response)

        try:
            releases_data = response.json()
        except ValueError as e:
            raise APIError(
                "invalid releases response", url=self.releases_url, details=str(e)
            ) from e

        if not isinstance(releases_data, list):
            raise APIError(
                "invalid releases response",
                url=self.releases_url,
                details=f"expected list, got {type(releases_data).__name__}",
            )

        releases: List[Release] = []
        for release_data in releases_data[:count]:
            if not isinstance(release_data, dict):
                logger.warning(
                    f"Skipping malformed release entry from {self.releases_url}: "
                    f"expected dict, got {type(release_data).__name__}"
                )
                continue
            releases.append(create_release_from_github_data(release_data))

        return releases

    def download(self, url: str) -> bytes:
        """
        Download an asset and return its contents.

        Raises:
            NetworkError: If the request cannot be completed.
            HTTPError: If the server answers with a status other than 200.
        """
        logger.debug(f"Downloading {url}")
        try:
            response = self.session.get(
                url,
                headers={"User-Agent": user_agent()},
                timeout=DOWNLOAD_TIMEOUT,
            )
        except requests.RequestException as e:
            raise NetworkError(
                "failed to download asset", url=url, details=str(e)
            ) from e

        if response.status_code != 200:
            raise HTTPError(
                f"unexpected status code: {response.status_code}",
                status_code=response.status_code,
                url=url,
            )

        return response.content
