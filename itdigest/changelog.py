"""Extraction of one version's section from a Keep-a-Changelog file."""

from __future__ import annotations


def _heading_text(line: str) -> str | None:
    """Return the heading text stripped of markers, or None for non-headings."""
    s = line.strip()
    if not s.startswith("#"):
        return None
    s = s.lstrip("#").strip()
    return s.removeprefix("[").removeprefix("v")


def _is_heading_for_version(line: str, version: str) -> bool:
    s = _heading_text(line)
    if s is None or not s.startswith(version):
        return False
    rest = s[len(version):]
    return rest == "" or rest[0] in " ]-\t"


def _is_any_version_heading(line: str) -> bool:
    s = _heading_text(line)
    return bool(s) and "0" <= s[0] <= "9"


def extract_changelog_section(md: str, version: str) -> str:
    """Return the body under the heading for ``version``, or "" if absent.

    Accepts headings such as ``## 2.1.114``, ``## [2.1.114] - 2025-04-18``,
    ``## v2.1.114`` and ``# 2.1.114``. The section ends at the next heading
    that looks like a version.
    """
    lines = md.split("\n")
    start: int | None = None
    end = len(lines)
    for i, line in enumerate(lines):
        if start is None:
            if _is_heading_for_version(line, version):
                start = i + 1
            continue
        if _is_any_version_heading(line):
            end = i
            break
    if start is None:
        return ""
    return "\n".join(lines[start:end]).strip()