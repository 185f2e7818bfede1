"""Deterministic per-source cap on ranked digest summaries."""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Sequence
from typing import Protocol, TypeVar


class _Ranked(Protocol):
    source_index: int


S = TypeVar("S", bound=_Ranked)


def cap_per_source(
    summaries: Sequence[S],
    sources: Sequence[str],
    max_per_source: int,
    log: logging.Logger | None = None,
) -> list[S]:
    """Keep at most ``max_per_source`` summaries per source, in ranked order.

    ``sources[i]`` names the source of the item a summary's ``source_index``
    points at. Summaries with an out-of-range index pass through uncounted.
    A non-positive cap returns the summaries unchanged.
    """
    if max_per_source <= 0 or not summaries:
        return list(summaries)

    counts: Counter[str] = Counter()
    kept: list[S] = []
    dropped = 0
    for summary in summaries:
        index = summary.source_index
        if not 0 <= index < len(sources):
            kept.append(summary)
            continue
        source = sources[index]
        if counts[source] >= max_per_source:
            dropped += 1
            continue
        counts[source] += 1
        kept.append(summary)

    if dropped and log is not None:
        log.info(
            "capped per-source items: max_per_source=%d dropped=%d kept=%d",
            max_per_source,
            dropped,
            len(kept),
        )
    return kept