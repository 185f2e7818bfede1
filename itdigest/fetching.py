"""Bounded HTTP GET helper shared by the release clients."""

from __future__ import annotations

from collections.abc import Mapping

import requests

MAX_API_BODY = 4 << 20
"""Largest response body, in bytes, accepted from any upstream API."""

DEFAULT_TIMEOUT = 30.0
_CHUNK_SIZE = 64 * 1024


class FetchError(Exception):
    """An upstream request failed.

    ``status`` holds the HTTP status code when the server answered with
    something other than 200, and is ``None`` for transport, size and
    decoding failures.
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status


def fetch_body(
    session: requests.Session | None,
    url: str,
    label: str,
    headers: Mapping[str, str] | None = None,
) -> bytes:
    """GET ``url`` and return its body, capped at ``MAX_API_BODY`` bytes.

    Raises ``FetchError`` on transport failure, a non-200 status, or an
    oversized body. ``label`` names the request in error messages.
    """
    http = session if session is not None else requests.Session()
    try:
        with http.get(
            url, headers=dict(headers or {}), stream=True, timeout=DEFAULT_TIMEOUT
        ) as resp:
            if resp.status_code != 200:
                raise FetchError(
                    f"{label}: http {resp.status_code}", status=resp.status_code
                )
            chunks: list[bytes] = []
            size = 0
            for chunk in resp.iter_content(_CHUNK_SIZE):
                size += len(chunk)
                if size > MAX_API_BODY:
                    raise FetchError(
                        f"{label}: response exceeds {MAX_API_BODY} bytes"
                    )
                chunks.append(chunk)
            return b"".join(chunks)
    except requests.RequestException as exc:
        raise FetchError(f"fetch {label}: {exc}") from exc