# itdigest

Building blocks for watching software releases and assembling a news
digest. The package fetches release metadata from the npm registry,
GitHub and go.dev, pulls the notes for one version out of a
`CHANGELOG.md`, builds go.dev links for a Go release, and caps how many
ranked digest entries any one source may contribute.

## Installation

```
pip install itdigest
```

For the test suite:

```
pip install "itdigest[test]"
pytest
```

## npm (`itdigest.npm`)

```python
import requests
from itdigest.npm import NPMClient, npm_package_url

client = NPMClient(requests.Session())
info = client.fetch_latest("@anthropic-ai/claude-code")
print(info.latest_version, info.published_at)

npm_package_url("@anthropic-ai/claude-code")
# 'https://www.npmjs.com/package/@anthropic-ai%2Fclaude-code'
```

`fetch_latest` returns a `PackageInfo` with the `latest` dist-tag and its
publish time (`published_at` is `None` when the registry gives no time for
that version). A missing `dist-tags.latest` raises `FetchError`.
`NPMClient` takes an optional `base_url` to point at another registry.

## GitHub releases (`itdigest.github`)

`GitHubClient.fetch_latest_release(repo)` returns a `LatestRelease`
(`version` with any leading "v" removed, `body`, `release_url`) for the
release GitHub marks as "Latest". Drafts and prereleases never count.

- If the repository exists but has no qualifying release, it raises
  `ReleaseNotFoundError`.
- If the repository itself answers 404 (a wrong name or a token without
  access), it raises `FetchError` whose message says the repository is
  "not accessible", so the misconfiguration is not mistaken for "nothing
  released yet".

```python
from itdigest.github import GitHubClient, ReleaseNotFoundError

gh = GitHubClient(requests.Session(), token="token")
try:
    latest = gh.fetch_latest_release("anthropics/claude-code")
except ReleaseNotFoundError:
    latest = None
```

`fetch_release_notes(repo, tag)` returns `ReleaseNotes` (`body`,
`release_url`): it looks up the release for `v<tag>`, then `<tag>`, and
finally falls back to the matching section of the repository's
`CHANGELOG.md` on the `main` branch, raising `ReleaseNotFoundError` if
none of them has it. A non-empty `token` is sent as
`Authorization: Bearer <token>` on API requests. `api_base_url` and
`raw_base_url` can be overridden.

## Changelogs (`itdigest.changelog`)

```python
from itdigest.changelog import extract_changelog_section

extract_changelog_section("## v1.0.0\n- launch\n", "1.0.0")
# '- launch'
```

Headings such as `## 2.1.114`, `## [2.1.114] - 2025-04-18`, `## v2.1.114`
and `# 2.1.114` are recognised; the section ends at the next heading that
starts with a version number. An unknown version gives `""`.

## Go releases (`itdigest.gorelease`, `itdigest.golinks`)

```python
from itdigest.gorelease import GoReleaseClient, extract_release_summary
from itdigest.golinks import download_url, release_history_url, fallback_summary

go = GoReleaseClient(requests.Session())
stable = go.fetch_stable()   # stable releases only, in go.dev's order
summary = go.fetch_release_summary(stable[0].version)

download_url("go1.26.2")         # 'https://go.dev/dl/#go1.26.2'
release_history_url("go1.26.2")  # 'https://go.dev/doc/devel/release#go1.26.2'
```

`fetch_stable` returns `DownloadRelease` objects (`version`, `stable`,
`files` of `DownloadFile`) and raises `FetchError` when the list holds no
stable release or cannot be decoded.

`extract_release_summary(page, version)` finds the element with the id
`version` on the release-history page and returns its text with
whitespace collapsed; for a major release heading (`h2`) the following
paragraph is appended. It raises `ValueError` when the anchor is missing
or empty. `fallback_summary(version)` gives a short generic text to use
when the page cannot be read.

## Capping digest entries per source (`itdigest.capping`)

```python
from itdigest.capping import cap_per_source

kept = cap_per_source(summaries, sources, max_per_source=2, log=None)
```

Each summary needs a `source_index` attribute; `sources[i]` names the
source of item `i`. Summaries are walked in ranked order and, once a
source has reached the cap, its later entries are dropped. Summaries whose
index is out of range pass through uncounted. A cap of zero or less
returns the list unchanged. With a `logging.Logger`, the number dropped
is logged at INFO level.

## Errors

Transport failures, unexpected HTTP status codes and response bodies over
4 MiB raise `itdigest.fetching.FetchError`; its `status` attribute holds
the HTTP status code when the server answered with something other than
200.

## What this package does not do

It only fetches, parses and selects. It has no command-line program, does
not format or send announcements or digest messages to any chat service,
does not summarize articles, does not read news feeds, and keeps no record
of what has already been seen or posted.