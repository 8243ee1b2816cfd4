"""GitHub REST API client.

Implements the four repository operations semrel needs:

- list the pull requests associated with a commit
- list repository tags
- fetch a release by its tag
- create a release

Requests are synchronous and issued one at a time over a single
httpx.Client. Failures are wrapped in GitHubError subclasses and are
never retried.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Protocol, TypeVar

import httpx

from semrel.exceptions import GitHubAPIError, GitHubError

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from semrel.config.models import GitHubConfig

DEFAULT_API_URL = "https://api.github.com"
API_VERSION = "2022-11-28"
TAGS_PER_PAGE = 100

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class PullRequest:
    """A pull request and the names of its labels."""

    number: int
    labels: tuple[str, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> PullRequest:
        labels = tuple(label["name"] for label in data.get("labels") or [])
        return cls(number=data.get("number", 0), labels=labels)


@dataclass(frozen=True, slots=True)
class Release:
    """A GitHub release."""

    tag_name: str
    prerelease: bool = False
    draft: bool = False
    body: str = ""

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Release:
        return cls(
            tag_name=data["tag_name"],
            prerelease=bool(data.get("prerelease", False)),
            draft=bool(data.get("draft", False)),
            body=data.get("body") or "",
        )


class ReleaseHost(Protocol):
    """Repository operations the release workflow depends on."""

    def list_associated_pull_requests(self, commit_sha: str) -> list[PullRequest]: ...

    def list_tags(self) -> list[str]: ...

    def get_release_by_tag(self, tag: str) -> Release | None: ...

    def create_release(
        self,
        tag_name: str,
        *,
        prerelease: bool,
        generate_notes: bool = True,
    ) -> Release: ...


class GitHubClient:
    """Client for one GitHub repository.

    Can be used as a context manager to close the underlying
    HTTP connection pool.
    """

    def __init__(
        self,
        owner: str,
        repo: str,
        token: str,
        *,
        api_url: str = DEFAULT_API_URL,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            owner: Repository owner (user or organization)
            repo: Repository name
            token: GitHub token used for authentication
            api_url: Base URL of the REST API (GitHub Enterprise support)
            timeout: Request timeout in seconds
            transport: Optional httpx transport, used by tests
        """
        self.owner = owner
        self.repo = repo
        self._client = httpx.Client(
            base_url=api_url.rstrip("/"),
            headers={
                "Accept": "application/vnd.github+json",
                "Authorization": f"Bearer {token}",
                "X-GitHub-Api-Version": API_VERSION,
            },
            timeout=timeout,
            transport=transport,
        )

    @classmethod
    def from_config(cls, config: GitHubConfig) -> GitHubClient:
        return cls(
            owner=config.owner,
            repo=config.repo,
            token=config.token.get_secret_value(),
            api_url=config.api_url,
            timeout=config.timeout,
        )

    @property
    def _repo_path(self) -> str:
        return f"/repos/{self.owner}/{self.repo}"

    def close(self) -> None:
        self._client.close()

    def __enter__(self) -> GitHubClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def _request(self, method: str, url: str, **kwargs: Any) -> httpx.Response:
        try:
            response = self._client.request(method, url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise GitHubAPIError(
                f"GitHub API request {method} {e.request.url.path} failed "
                f"with status {e.response.status_code}: {_error_message(e.response)}",
                status_code=e.response.status_code,
            ) from e
        except httpx.RequestError as e:
            raise GitHubError(f"GitHub API request {method} {url} failed: {e}") from e
        return response

    def list_associated_pull_requests(self, commit_sha: str) -> list[PullRequest]:
        """List pull requests associated with a commit, in API order."""
        response = self._request("GET", f"{self._repo_path}/commits/{commit_sha}/pulls")
        return _decode(response, lambda data: [PullRequest.from_api(item) for item in data])

    def list_tags(self) -> list[str]:
        """List the names of all repository tags, following pagination."""
        names: list[str] = []
        url: str | None = f"{self._repo_path}/tags"
        params: dict[str, Any] | None = {"per_page": TAGS_PER_PAGE}
        while url is not None:
            response = self._request("GET", url, params=params)
            names.extend(_decode(response, lambda data: [tag["name"] for tag in data]))
            # The next link already carries the query string
            url = response.links.get("next", {}).get("url")
            params = None
        return names

    def get_release_by_tag(self, tag: str) -> Release | None:
        """Fetch the release for a tag.

        Returns:
            The release, or None if no release exists for the tag
        """
        try:
            response = self._request("GET", f"{self._repo_path}/releases/tags/{tag}")
        except GitHubAPIError as e:
            if e.status_code == httpx.codes.NOT_FOUND:
                return None
            raise
        return _decode(response, Release.from_api)

    def create_release(
        self,
        tag_name: str,
        *,
        prerelease: bool,
        generate_notes: bool = True,
    ) -> Release:
        """Create a release, and its tag, at the default branch head."""
        response = self._request(
            "POST",
            f"{self._repo_path}/releases",
            json={
                "tag_name": tag_name,
                "prerelease": prerelease,
                "generate_release_notes": generate_notes,
            },
        )
        return _decode(response, Release.from_api)


def _error_message(response: httpx.Response) -> str:
    try:
        data = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(data, dict) and "message" in data:
        return str(data["message"])
    return response.reason_phrase


def _decode(response: httpx.Response, parse: Callable[[Any], T]) -> T:
    """Parse a successful response body.

    Raises:
        GitHubError: If the body is not JSON of the expected shape
    """
    try:
        return parse(response.json())
    except (ValueError, AttributeError, KeyError, TypeError) as e:
        request = response.request
        raise GitHubError(
            f"Unexpected response to GitHub API request {request.method} {request.url.path}: {e!r}"
        ) from e
