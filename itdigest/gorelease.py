"""Client for official Go toolchain release metadata on go.dev."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from typing import Any

import requests
from bs4 import BeautifulSoup, NavigableString
from bs4.element import Comment, Declaration, Doctype, ProcessingInstruction, Tag

from itdigest.fetching import FetchError, fetch_body
from itdigest.golinks import DEFAULT_DOWNLOADS_URL, DEFAULT_RELEASE_HISTORY_URL

PACKAGE_KEY = "go"

_NON_TEXT = (Comment, Declaration, Doctype, ProcessingInstruction)


@dataclass(frozen=True)
class DownloadFile:
    """One downloadable artifact listed for a Go release."""

    filename: str = ""
    os: str = ""
    arch: str = ""
    version: str = ""
    sha256: str = ""
    size: int = 0
    kind: str = ""


@dataclass(frozen=True)
class DownloadRelease:
    """A Go release as listed by the downloads endpoint."""

    version: str
    stable: bool = False
    files: tuple[DownloadFile, ...] = field(default_factory=tuple)


def _decode_error(detail: str) -> FetchError:
    return FetchError(f"decode go downloads response: {detail}")


def _typed(data: dict[str, Any], key: str, kind: type, default: Any) -> Any:
    value = data.get(key)
    if value is None:
        return default
    if kind is int:
        if isinstance(value, bool) or not isinstance(value, int):
            raise _decode_error(f"field {key} is not an integer")
        return value
    if not isinstance(value, kind):
        raise _decode_error(f"field {key} has the wrong type")
    return value


def _decode_file(data: Any) -> DownloadFile:
    if not isinstance(data, dict):
        raise _decode_error("file entry is not an object")
    return DownloadFile(
        filename=_typed(data, "filename", str, ""),
        os=_typed(data, "os", str, ""),
        arch=_typed(data, "arch", str, ""),
        version=_typed(data, "version", str, ""),
        sha256=_typed(data, "sha256", str, ""),
        size=_typed(data, "size", int, 0),
        kind=_typed(data, "kind", str, ""),
    )


def _decode_release(data: Any) -> DownloadRelease:
    if not isinstance(data, dict):
        raise _decode_error("release entry is not an object")
    files = _typed(data, "files", list, [])
    return DownloadRelease(
        version=_typed(data, "version", str, "").strip(),
        stable=_typed(data, "stable", bool, False),
        files=tuple(_decode_file(f) for f in files),
    )


def _text_content(node: Tag) -> str:
    return " ".join(
        str(s)
        for s in node.descendants
        if isinstance(s, NavigableString) and not isinstance(s, _NON_TEXT)
    )


def extract_release_summary(page: bytes | str, version: str) -> str:
    """Return the text of the release-history entry anchored at ``version``.

    For a major release heading (``h2``) the following paragraph is
    appended. Raises ``ValueError`` when the anchor is missing or empty.
    """
    soup = BeautifulSoup(page, "html.parser")
    target = soup.find(id=version)
    if not isinstance(target, Tag):
        raise ValueError(f"go release history: {version} not found")

    text = _text_content(target)
    if target.name == "h2":
        following = target.find_next_sibling("p")
        if following is not None:
            text += " " + _text_content(following)
    text = " ".join(text.split())
    if not text:
        raise ValueError(f"go release history: {version} has empty text")
    return text


class GoReleaseClient:
    """Fetches Go release metadata from go.dev."""

    def __init__(
        self,
        session: requests.Session | None = None,
        downloads_url: str = DEFAULT_DOWNLOADS_URL,
        release_history_url: str = DEFAULT_RELEASE_HISTORY_URL,
    ) -> None:
        self.session = session if session is not None else requests.Session()
        self.downloads_url = downloads_url
        self.release_history_url = release_history_url

    def fetch_stable(self) -> list[DownloadRelease]:
        """Return the stable Go releases, in the order go.dev lists them."""
        raw = fetch_body(
            self.session,
            self.downloads_url,
            "go downloads",
            {"Accept": "application/json"},
        )
        try:
            payload = json.loads(raw)
        except ValueError as exc:
            raise _decode_error(str(exc)) from exc
        if payload is None:
            payload = []
        if not isinstance(payload, list):
            raise _decode_error("expected a JSON array")

        stable = [
            rel
            for rel in map(_decode_release, payload)
            if rel.stable and rel.version
        ]
        if not stable:
            raise FetchError("go downloads: no stable releases")
        return stable

    def fetch_release_summary(self, version: str) -> str:
        """Return short release text for ``version`` from the release history."""
        raw = fetch_body(
            self.session,
            self.release_history_url,
            "go release history",
            {"Accept": "text/html"},
        )
        return extract_release_summary(raw, version)