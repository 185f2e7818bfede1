import pytest

from itdigest.changelog import extract_changelog_section

MD = """# Changelog

All notable changes to this project.

## 2.1.114 - 2025-04-18
- foo feature
- bug fix

## 2.1.113 - 2025-04-17
- older

## [2.1.112]
- much older
"""


@pytest.mark.parametrize(
    "version, want, absent",
    [
        ("2.1.114", ["foo feature", "bug fix"], ["- older", "- much older"]),
        ("2.1.113", ["- older"], ["foo feature", "much older"]),
        ("2.1.112", ["much older"], ["- older", "foo feature"]),
    ],
)
def test_extract_section(version, want, absent):
    body = extract_changelog_section(MD, version)
    for w in want:
        assert w in body
    for a in absent:
        assert a not in body


def test_unknown_version_is_empty():
    assert extract_changelog_section(MD, "9.9.9") == ""


def test_v_prefix():
    body = extract_changelog_section("## v1.0.0\n- launch\n", "1.0.0")
    assert "launch" in body


def test_section_is_trimmed():
    body = extract_changelog_section(MD, "2.1.114")
    assert body == "- foo feature\n- bug fix"


def test_version_prefix_of_longer_version_does_not_match():
    md = "## 1.0.10\n- ten\n"
    assert extract_changelog_section(md, "1.0.1") == ""