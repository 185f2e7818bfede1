"""Links and fallback text for Go toolchain release announcements."""

from __future__ import annotations

from urllib.parse import quote_plus

DEFAULT_DOWNLOADS_URL = "https://go.dev/dl/?mode=json"
DEFAULT_RELEASE_HISTORY_URL = "https://go.dev/doc/devel/release"
_DOWNLOAD_PAGE_URL = "https://go.dev/dl/"


def _query_escape(value: str) -> str:
    """Escape ``value`` for use in a URL query or fragment."""
    return quote_plus(value, safe="")


def fallback_summary(version: str) -> str:
    """Return the summary used when the release-history page is unusable."""
    return (
        "Official stable "
        + version
        + " release is available. See downloads and release history for details."
    )


def default_download_page_url() -> str:
    """Return the official Go downloads page."""
    return _DOWNLOAD_PAGE_URL


def download_url(version: str) -> str:
    """Return the go.dev downloads anchor for ``version``."""
    return default_download_page_url() + "#" + _query_escape(version)


def release_history_url(version: str) -> str:
    """Return the go.dev release-history anchor for ``version``."""
    return DEFAULT_RELEASE_HISTORY_URL + "#" + _query_escape(version)