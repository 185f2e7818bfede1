"""GitHub client for release notes and the "Latest release" marker."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import requests

from itdigest.changelog import extract_changelog_section
from itdigest.fetching import FetchError, fetch_body

DEFAULT_API_BASE_URL = "https://api.github.com"
DEFAULT_RAW_BASE_URL = "https://raw.githubusercontent.com"


class ReleaseNotFoundError(Exception):
    """No published release (or changelog section) exists for the request."""

    def __init__(self, message: str = "release notes not found") -> None:
        super().__init__(message)


@dataclass(frozen=True)
class ReleaseNotes:
    """Markdown notes for a release and the page they came from."""

    body: str
    release_url: str


@dataclass(frozen=True)
class LatestRelease:
    """The release GitHub marks as "Latest", with its leading "v" removed."""

    version: str
    body: str
    release_url: str


def _decode_release(raw: bytes, what: str) -> dict[str, Any]:
    try:
        data = json.loads(raw)
    except ValueError as exc:
        raise FetchError(f"decode {what}: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise FetchError(f"decode {what}: expected a JSON object")

    def text(key: str) -> str:
        value = data.get(key)
        if value is None:
            return ""
        if not isinstance(value, str):
            raise FetchError(f"decode {what}: field {key} is not a string")
        return value

    def flag(key: str) -> bool:
        value = data.get(key)
        if value is None:
            return False
        if not isinstance(value, bool):
            raise FetchError(f"decode {what}: field {key} is not a boolean")
        return value

    return {
        "html_url": text("html_url"),
        "body": text("body"),
        "tag_name": text("tag_name"),
        "draft": flag("draft"),
        "prerelease": flag("prerelease"),
    }


class GitHubClient:
    """Fetches release notes and CHANGELOG.md from GitHub.

    A non-empty ``token`` is sent as a bearer token on API requests.
    """

    def __init__(
        self,
        session: requests.Session | None = None,
        token: str = "",
        api_base_url: str = DEFAULT_API_BASE_URL,
        raw_base_url: str = DEFAULT_RAW_BASE_URL,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.token = token
        self.api_base_url = api_base_url
        self.raw_base_url = raw_base_url

    def _api_headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": "2022-11-28",
        }
        if self.token:
            headers["Authorization"] = "Bearer " + self.token
        return headers

    def fetch_latest_release(self, repo: str) -> LatestRelease:
        """Return the release GitHub marks as "Latest" for ``repo``.

        Raises ``ReleaseNotFoundError`` when the repository is reachable but
        has no qualifying release, and ``FetchError`` when the repository
        itself is not accessible or the request fails.
        """
        url = f"{self.api_base_url}/repos/{repo}/releases/latest"
        try:
            raw = fetch_body(
                self.session, url, f"github latest {repo}", self._api_headers()
            )
        except FetchError as exc:
            if exc.status != 404:
                raise
            # A 404 here may mean a missing repo rather than no release.
            try:
                exists = self._repo_accessible(repo)
            except FetchError as probe_exc:
                raise FetchError(
                    f"verify repo {repo} after /releases/latest 404: {probe_exc}",
                    status=probe_exc.status,
                ) from probe_exc
            if not exists:
                raise FetchError(
                    f"github repo {repo} not accessible "
                    "(check [claudecode].github_repo and GITHUB_TOKEN scope)"
                ) from exc
            raise ReleaseNotFoundError() from exc

        rel = _decode_release(raw, "github latest")
        if not rel["tag_name"]:
            raise FetchError(f"github latest {repo}: empty tag_name")
        if rel["draft"] or rel["prerelease"]:
            raise ReleaseNotFoundError()
        return LatestRelease(
            version=rel["tag_name"].removeprefix("v"),
            body=rel["body"],
            release_url=rel["html_url"],
        )

    def _repo_accessible(self, repo: str) -> bool:
        url = f"{self.api_base_url}/repos/{repo}"
        try:
            fetch_body(self.session, url, f"probe repo {repo}", self._api_headers())
        except FetchError as exc:
            if exc.status == 404:
                return False
            raise
        return True

    def fetch_release_notes(self, repo: str, tag: str) -> ReleaseNotes:
        """Return notes for ``tag``, trying "v<tag>", then "<tag>", then CHANGELOG.md."""
        for candidate in ("v" + tag, tag):
            try:
                return self._fetch_release(repo, candidate)
            except FetchError as exc:
                if exc.status != 404:
                    raise
        return self._fetch_changelog(repo, tag)

    def _fetch_release(self, repo: str, tag: str) -> ReleaseNotes:
        url = f"{self.api_base_url}/repos/{repo}/releases/tags/{tag}"
        raw = fetch_body(
            self.session, url, f"github release {repo} {tag}", self._api_headers()
        )
        rel = _decode_release(raw, "github release")
        return ReleaseNotes(body=rel["body"], release_url=rel["html_url"])

    def _fetch_changelog(self, repo: str, version: str) -> ReleaseNotes:
        url = f"{self.raw_base_url}/{repo}/main/CHANGELOG.md"
        try:
            raw = fetch_body(self.session, url, f"changelog {repo}")
        except FetchError as exc:
            if exc.status == 404:
                raise ReleaseNotFoundError() from exc
            raise
        body = extract_changelog_section(raw.decode("utf-8", errors="replace"), version)
        if not body:
            raise ReleaseNotFoundError()
        return ReleaseNotes(
            body=body,
            release_url=f"https://github.com/{repo}/blob/main/CHANGELOG.md",
        )