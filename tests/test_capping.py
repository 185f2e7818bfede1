import logging
from dataclasses import dataclass

import pytest

from itdigest.capping import cap_per_source


@dataclass
class Summary:
    source_index: int
    headline: str


def headlines(summaries):
    return [s.headline for s in summaries]


def test_drops_overflow():
    sources = ["Anthropic", "Anthropic", "Anthropic", "Anthropic", "OpenAI"]
    summaries = [
        Summary(0, "A1"),
        Summary(1, "A2"),
        Summary(2, "A3"),
        Summary(3, "A4"),
        Summary(4, "O1"),
    ]
    got = cap_per_source(summaries, sources, 2, None)
    assert headlines(got) == ["A1", "A2", "O1"]


def test_preserves_order_across_sources():
    sources = ["A", "B", "A", "B", "A"]
    summaries = [
        Summary(0, "A1"),
        Summary(1, "B1"),
        Summary(2, "A2"),
        Summary(3, "B2"),
        Summary(4, "A3"),
    ]
    got = cap_per_source(summaries, sources, 2, None)
    assert headlines(got) == ["A1", "B1", "A2", "B2"]


@pytest.mark.parametrize("cap", [0, -1, -99])
def test_disabled_when_non_positive(cap):
    sources = ["A", "A", "A"]
    summaries = [Summary(0, "A1"), Summary(1, "A2"), Summary(2, "A3")]
    got = cap_per_source(summaries, sources, cap, None)
    assert headlines(got) == ["A1", "A2", "A3"]


def test_invalid_index_passes_through():
    sources = ["A"]
    summaries = [
        Summary(0, "A1"),
        Summary(99, "bad"),
        Summary(-1, "bad2"),
        Summary(0, "A2"),
    ]
    got = cap_per_source(summaries, sources, 1, None)
    assert headlines(got) == ["A1", "bad", "bad2"]


def test_empty_input():
    assert cap_per_source([], [], 2, None) == []


def test_logs_dropped_count(caplog):
    log = logging.getLogger("itdigest.test.capping")
    sources = ["A", "A", "A"]
    summaries = [Summary(0, "A1"), Summary(1, "A2"), Summary(2, "A3")]
    with caplog.at_level(logging.INFO, logger=log.name):
        got = cap_per_source(summaries, sources, 1, log)
    assert headlines(got) == ["A1"]
    assert "dropped=2 kept=1" in caplog.text


def test_no_log_when_nothing_dropped(caplog):
    log = logging.getLogger("itdigest.test.capping.quiet")
    with caplog.at_level(logging.INFO, logger=log.name):
        got = cap_per_source([Summary(0, "A1")], ["A"], 1, log)
    assert headlines(got) == ["A1"]
    assert caplog.records == []