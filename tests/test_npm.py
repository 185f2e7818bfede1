import re
from datetime import datetime, timezone

import pytest
import requests
import responses

from itdigest.fetching import FetchError
from itdigest.npm import NPMClient, PackageInfo, npm_package_url

BASE = "https://registry.example.com"
ANY = re.compile(r"https://registry\.example\.com/.*")


@pytest.fixture
def mocked():
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        yield rsps


def client():
    return NPMClient(requests.Session(), BASE)


def test_fetch_latest(mocked):
    mocked.add(
        responses.GET,
        ANY,
        body='{"dist-tags": {"latest": "2.1.114"},'
        ' "time": {"2.1.114": "2025-04-18T10:00:00.000Z"}}',
    )
    info = client().fetch_latest("@anthropic-ai/claude-code")
    assert info == PackageInfo(
        latest_version="2.1.114",
        published_at=datetime(2025, 4, 18, 10, 0, tzinfo=timezone.utc),
    )
    url = mocked.calls[0].request.url
    assert url.endswith("/@anthropic-ai%2Fclaude-code") or url.endswith(
        "/@anthropic-ai/claude-code"
    )
    assert mocked.calls[0].request.headers["Accept"] == "application/json"


def test_fetch_latest_without_time(mocked):
    mocked.add(responses.GET, ANY, body='{"dist-tags": {"latest": "1.0.0"}}')
    info = client().fetch_latest("pkg")
    assert info.latest_version == "1.0.0"
    assert info.published_at is None


def test_fetch_latest_missing_tag(mocked):
    mocked.add(responses.GET, ANY, body='{"dist-tags": {}, "time": {}}')
    with pytest.raises(FetchError, match="dist-tags.latest"):
        client().fetch_latest("nothing")


def test_fetch_latest_500(mocked):
    mocked.add(responses.GET, ANY, status=500, body="boom")
    with pytest.raises(FetchError) as info:
        client().fetch_latest("pkg")
    assert info.value.status == 500


def test_fetch_latest_malformed_json(mocked):
    mocked.add(responses.GET, ANY, body="{not-json")
    with pytest.raises(FetchError, match="decode npm response"):
        client().fetch_latest("pkg")


@pytest.mark.parametrize(
    "package, want",
    [
        ("@anthropic-ai/claude-code", "https://www.npmjs.com/package/@anthropic-ai%2Fclaude-code"),
        ("plain-package", "https://www.npmjs.com/package/plain-package"),
        ("weird name with spaces", "https://www.npmjs.com/package/weird%20name%20with%20spaces"),
        ("query?injection#frag", "https://www.npmjs.com/package/query%3Finjection%23frag"),
    ],
)
def test_npm_package_url(package, want):
    assert npm_package_url(package) == want