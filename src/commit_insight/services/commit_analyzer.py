"""Commit-message analysis — pure functions over a list of commits.

Nothing in here touches the network or keeps state between calls, so the same
input always yields an equal :class:`AnalysisSummary`.
"""

from __future__ import annotations

import math
import re
from datetime import datetime
from typing import Iterable, Sequence

from commit_insight.domain.entities import AnalysisSummary, CommitRecord, round_half_up

CONVENTIONAL_RE = re.compile(
    r"^(feat|fix|docs|style|refactor|perf|test|chore|build|ci|revert)(\(.+\))?:"
)
COMMIT_TYPE_RE = re.compile(r"^(\w+)(\(.+\))?:")
_NON_WORD_RE = re.compile(r"[^\w\s]")

DESCRIPTIVE_MIN = 10
DESCRIPTIVE_MAX = 72
TOP_WORDS = 20
STOP_WORDS = frozenset({"that", "this", "with", "from", "have", "will"})

# Weights of the quality score; they sum to 1.
W_CONVENTIONAL = 0.3
W_DESCRIPTIVE = 0.4
W_NO_MERGE = 0.3


# ── Per-message classification ──────────────────────────────────────────────


def is_conventional(message: str) -> bool:
    return CONVENTIONAL_RE.match(message) is not None


def is_descriptive(message: str) -> bool:
    """First line is long enough to say something and short enough to scan."""
    first_line = message.split("\n", 1)[0]
    return DESCRIPTIVE_MIN <= len(first_line) <= DESCRIPTIVE_MAX


def is_merge(message: str) -> bool:
    return message.startswith("Merge") or message.startswith("merge")


def commit_type(message: str) -> str | None:
    """``feat(api): ...`` → ``"feat"``; ``None`` when there is no type prefix."""
    match = COMMIT_TYPE_RE.match(message)
    return match.group(1).lower() if match else None


# ── Aggregations ────────────────────────────────────────────────────────────


def count_commit_types(messages: Iterable[str]) -> dict[str, int]:
    counts: dict[str, int] = {}
    for message in messages:
        kind = commit_type(message)
        if kind is not None:
            counts[kind] = counts.get(kind, 0) + 1
    return counts


def tokenize(message: str) -> list[str]:
    """Lower-cased words of *message* worth counting (stop words dropped)."""
    cleaned = _NON_WORD_RE.sub(" ", message.lower())
    return [w for w in cleaned.split() if len(w) > 3 and w not in STOP_WORDS]


def word_frequencies(
    messages: Iterable[str], limit: int = TOP_WORDS
) -> list[tuple[str, int]]:
    """Top *limit* words by count; ties keep the order words were first seen."""
    freq: dict[str, int] = {}
    for message in messages:
        for word in tokenize(message):
            freq[word] = freq.get(word, 0) + 1
    ranked = sorted(freq.items(), key=lambda item: item[1], reverse=True)
    return ranked[:limit]


def quality_score(conventional: int, descriptive: int, no_merge: int, total: int) -> int:
    """Weighted 0–100 score of format, descriptiveness and merge avoidance."""
    score = (
        conventional / total * W_CONVENTIONAL
        + descriptive / total * W_DESCRIPTIVE
        + no_merge / total * W_NO_MERGE
    )
    return round_half_up(score * 100)


def format_date_range(start: datetime, end: datetime) -> str:
    """Describe the span between two timestamps in the coarsest sensible unit."""
    span_days = (end - start).total_seconds() / 86_400
    if span_days < 1:
        return "Same day"

    days = math.ceil(span_days)
    if days < 30:
        return f"{days} day{'s' if days != 1 else ''}"
    if days < 365:
        months = days // 30
        return f"{months} month{'s' if months > 1 else ''}"
    years = f"{days / 365:.1f}"
    return f"{years} year{'s' if years != '1.0' else ''}"


# ── Entry point ─────────────────────────────────────────────────────────────


def analyze(commits: Sequence[CommitRecord]) -> AnalysisSummary:
    """Compute the message-quality summary for *commits*.

    Raises :class:`ValueError` for an empty list; callers handle the
    empty-repository case before getting here.
    """
    if not commits:
        raise ValueError("analyze() needs at least one commit.")

    messages = tuple(c.message for c in commits)
    total = len(commits)

    conventional = sum(1 for m in messages if is_conventional(m))
    descriptive = sum(1 for m in messages if is_descriptive(m))
    merges = sum(1 for m in messages if is_merge(m))
    no_merge = total - merges

    dates = [c.author_date for c in commits]

    return AnalysisSummary(
        total_commits=total,
        avg_length=round_half_up(sum(len(m) for m in messages) / total),
        quality_score=quality_score(conventional, descriptive, no_merge, total),
        time_range=format_date_range(min(dates), max(dates)),
        conventional_format=conventional,
        descriptive_messages=descriptive,
        merge_commits=merges,
        no_merge_commits=no_merge,
        commit_types=count_commit_types(messages),
        common_words=tuple(word_frequencies(messages)),
        messages=messages,
    )
