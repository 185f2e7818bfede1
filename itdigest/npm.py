"""npm registry client for the latest published version of a package."""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from urllib.parse import quote

import requests

from itdigest.fetching import FetchError, fetch_body

DEFAULT_REGISTRY_URL = "https://registry.npmjs.org"
NPM_PACKAGE_PAGE = "https://www.npmjs.com/package/"


def _path_escape(segment: str) -> str:
    """Escape a single URL path segment, encoding "/" as well."""
    return quote(segment, safe="$&+:=@")


def npm_package_url(package: str) -> str:
    """Return the public npmjs.com page URL for a package."""
    return NPM_PACKAGE_PAGE + _path_escape(package)


def _parse_rfc3339(value: str) -> datetime:
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    return datetime.fromisoformat(text)


@dataclass(frozen=True)
class PackageInfo:
    """The latest version of a package and when it was published."""

    latest_version: str
    published_at: datetime | None = None


class NPMClient:
    """Fetches package metadata from the npm registry."""

    def __init__(
        self,
        session: requests.Session | None = None,
        base_url: str = DEFAULT_REGISTRY_URL,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.base_url = base_url

    def fetch_latest(self, package: str) -> PackageInfo:
        """Return the ``latest`` dist-tag of ``package`` and its publish time."""
        url = f"{self.base_url}/{_path_escape(package)}"
        label = f"npm {package}"
        body = fetch_body(self.session, url, label, {"Accept": "application/json"})

        try:
            payload = json.loads(body)
        except ValueError as exc:
            raise FetchError(f"decode npm response: {exc}") from exc
        if payload is None:
            payload = {}
        if not isinstance(payload, dict):
            raise FetchError("decode npm response: expected a JSON object")

        dist_tags = payload.get("dist-tags") or {}
        times = payload.get("time") or {}
        if not isinstance(dist_tags, dict) or not isinstance(times, dict):
            raise FetchError("decode npm response: malformed dist-tags or time")

        latest = dist_tags.get("latest")
        if not isinstance(latest, str) or not latest:
            raise FetchError(f"{label}: no dist-tags.latest")

        published_at = None
        stamp = times.get(latest)
        if stamp is not None:
            try:
                published_at = _parse_rfc3339(str(stamp))
            except ValueError as exc:
                raise FetchError(f"decode npm response: {exc}") from exc
        return PackageInfo(latest_version=latest, published_at=published_at)