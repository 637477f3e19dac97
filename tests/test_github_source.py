"""
Tests for the GitHub release source.

The requests session is replaced with a mock; no network access happens.
"""

import importlib.metadata

import pytest
import requests

from update_versions.exceptions import APIError, HTTPError, NetworkError, RateLimitError
from update_versions.sync.github_source import (
    GitHubReleaseSource,
    create_release_from_github_data,
    resolve_github_token,
    user_agent,
)
from update_versions.sync.interfaces import Release

pytestmark = [pytest.mark.unit, pytest.mark.infrastructure]

RELEASES_URL = "https://api.github.com/repos/golangci/golangci-lint/releases"


@pytest.fixture
def mock_session(mocker):
    return mocker.MagicMock(spec=requests.Session)


@pytest.fixture
def make_response(mocker):
    def _make(status_code=200, json_data=None, content=b"", headers=None):
        response = mocker.MagicMock(spec=requests.Response)
        response.status_code = status_code
        response.headers = headers or {}
        response.content = content
        response.json.return_value = json_data
        return response

    return _make


@pytest.fixture
def source(mock_session):
    return GitHubReleaseSource(session=mock_session, allow_env_token=False)


class TestCreateRelease:
    def test_uses_tag_name(self):
        assert create_release_from_github_data({"tag_name": "v2.6.1"}) == Release(
            "v2.6.1"
        )

    @pytest.mark.parametrize("data", [{}, {"tag_name": None}, {"tag_name": 5}])
    def test_missing_tag_becomes_empty(self, data):
        assert create_release_from_github_data(data).tag_name == ""


class TestListLatestReleases:
    def test_returns_releases_in_api_order(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(
            json_data=[
                {"tag_name": "v2.6.1"},
                {"tag_name": "v2.6.0"},
                {"tag_name": "v2.5.0"},
            ]
        )

        releases = source.list_latest_releases(10)

        assert [r.tag_name for r in releases] == ["v2.6.1", "v2.6.0", "v2.5.0"]
        args, kwargs = mock_session.get.call_args
        assert args[0] == RELEASES_URL
        assert kwargs["params"] == {"per_page": 10}
        assert kwargs["timeout"] == 10

    def test_truncates_to_count(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(
            json_data=[{"tag_name": f"v1.{i}.0"} for i in range(5)]
        )

        releases = source.list_latest_releases(2)

        assert len(releases) == 2

    def test_per_page_is_capped(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(json_data=[])

        source.list_latest_releases(500)

        assert mock_session.get.call_args.kwargs["params"] == {"per_page": 100}

    def test_malformed_entries_are_skipped(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(
            json_data=["oops", {"tag_name": "v2.6.1"}]
        )

        releases = source.list_latest_releases(10)

        assert releases == [Release("v2.6.1")]

    def test_request_exception_raises_api_error(self, source, mock_session):
        mock_session.get.side_effect = requests.ConnectionError("refused")

        with pytest.raises(APIError, match="failed to list releases"):
            source.list_latest_releases(10)

    def test_non_200_raises_api_error(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(status_code=500)

        with pytest.raises(APIError) as exc_info:
            source.list_latest_releases(10)

        assert exc_info.value.status_code == 500
        assert "unexpected status code: 500" in str(exc_info.value)

    def test_rate_limit_raises_rate_limit_error(
        self, source, mock_session, make_response
    ):
        mock_session.get.return_value = make_response(
            status_code=403,
            headers={"X-RateLimit-Remaining": "0", "X-RateLimit-Reset": "1700000000"},
        )

        with pytest.raises(RateLimitError) as exc_info:
            source.list_latest_releases(10)

        assert exc_info.value.reset_time == 1700000000

    def test_forbidden_without_rate_limit_is_api_error(
        self, source, mock_session, make_response
    ):
        mock_session.get.return_value = make_response(
            status_code=403, headers={"X-RateLimit-Remaining": "42"}
        )

        with pytest.raises(APIError) as exc_info:
            source.list_latest_releases(10)

        assert not isinstance(exc_info.value, RateLimitError)

    def test_invalid_json_raises_api_error(self, source, mock_session, make_response):
        response = make_response()
        response.json.side_effect = ValueError("not json")
        mock_session.get.return_value = response

        with pytest.raises(APIError, match="invalid releases response"):
            source.list_latest_releases(10)

    def test_non_list_payload_raises_api_error(
        self, source, mock_session, make_response
    ):
        mock_session.get.return_value = make_response(json_data={"message": "hi"})

        with pytest.raises(APIError, match="invalid releases response"):
            source.list_latest_releases(10)


class TestAuthentication:
    def test_token_is_sent(self, mock_session, make_response):
        mock_session.get.return_value = make_response(json_data=[])
        source = GitHubReleaseSource(
            session=mock_session, github_token="secret", allow_env_token=False
        )

        source.list_latest_releases(1)

        headers = mock_session.get.call_args.kwargs["headers"]
        assert headers["Authorization"] == "token secret"
        assert headers["User-Agent"].startswith("update-versions/")

    def test_no_token_no_authorization_header(
        self, source, mock_session, make_response
    ):
        mock_session.get.return_value = make_response(json_data=[])

        source.list_latest_releases(1)

        assert "Authorization" not in mock_session.get.call_args.kwargs["headers"]

    def test_environment_token_fallback(self, mock_session, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "  from-env  ")

        source = GitHubReleaseSource(session=mock_session)

        assert source.github_token == "from-env"


class TestDownload:
    def test_returns_content(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(content=b"manifest")

        assert source.download("https://example.com/a.txt") == b"manifest"
        assert mock_session.get.call_args.kwargs["timeout"] == 30

    def test_not_found_raises_http_error(self, source, mock_session, make_response):
        mock_session.get.return_value = make_response(status_code=404)

        with pytest.raises(HTTPError) as exc_info:
            source.download("https://example.com/a.txt")

        assert exc_info.value.status_code == 404
        assert exc_info.value.url == "https://example.com/a.txt"

    def test_request_exception_raises_network_error(self, source, mock_session):
        mock_session.get.side_effect = requests.Timeout("slow")

        with pytest.raises(NetworkError):
            source.download("https://example.com/a.txt")


class TestUserAgent:
    @pytest.fixture(autouse=True)
    def _clear_cache(self):
        user_agent.cache_clear()
        yield
        user_agent.cache_clear()

    def test_includes_installed_version(self, mocker):
        mocker.patch("importlib.metadata.version", return_value="1.2.3")

        assert user_agent() == "update-versions/1.2.3"

    def test_unknown_version_when_not_installed(self, mocker):
        mocker.patch(
            "importlib.metadata.version",
            side_effect=importlib.metadata.PackageNotFoundError,
        )

        assert user_agent() == "update-versions/unknown"

    def test_value_is_cached(self, mocker):
        version = mocker.patch("importlib.metadata.version", return_value="1.0")

        user_agent()
        user_agent()

        assert version.call_count == 1


class TestResolveGithubToken:
    def test_explicit_token_wins(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env")

        assert resolve_github_token(" explicit ") == "explicit"

    def test_environment_fallback(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env")

        assert resolve_github_token(None) == "env"

    def test_environment_disallowed(self, monkeypatch):
        monkeypatch.setenv("GITHUB_TOKEN", "env")

        assert resolve_github_token(None, allow_env_token=False) is None

    @pytest.mark.parametrize("token", ["", "   ", None])
    def test_blank_values_are_missing(self, token):
        assert resolve_github_token(token) is None
