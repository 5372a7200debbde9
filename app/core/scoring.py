"""Keyword heuristic that turns pasted reviews into a 1-10 trust score.

The engine is intentionally naive: every marker is a literal substring and is
counted once when present anywhere in the lowercased text. Nothing here does
I/O, so the same input always yields the same :class:`ScoreResult`.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence

POSITIVE = "positive"
NEUTRAL = "neutral"
NEGATIVE = "negative"

SENTIMENTS: tuple[str, ...] = (POSITIVE, NEUTRAL, NEGATIVE)

MIN_SCORE = 1
MAX_SCORE = 10
BASE_SCORE = 5

POSITIVE_THRESHOLD = 7
NEGATIVE_THRESHOLD = 4

KEYWORD_MIN_LENGTH = 5
MAX_KEYWORDS = 8

_NON_WORD_RE = re.compile(r"[^a-z0-9\s]")


@dataclass(frozen=True, slots=True)
class Marker:
    """Literal substring that nudges the score in one direction."""

    token: str
    polarity: int  # +1 or -1


MARKERS: tuple[Marker, ...] = (
    Marker("good", 1),
    Marker("great", 1),
    Marker("excellent", 1),
    Marker("awesome", 1),
    Marker("amazing", 1),
    Marker("love", 1),
    Marker("perfect", 1),
    Marker("worth", 1),
    Marker("bad", -1),
    Marker("worst", -1),
    Marker("poor", -1),
    Marker("waste", -1),
    Marker("broken", -1),
    Marker("refund", -1),
    Marker("return", -1),
    Marker("delay", -1),
    Marker("damaged", -1),
)

SUMMARIES = {
    POSITIVE: "Overall feedback is positive with multiple favorable mentions.",
    NEGATIVE: "Overall feedback is negative with several concerns highlighted.",
    NEUTRAL: "Overall feedback is mixed with both positives and negatives.",
}


@dataclass(slots=True)
class ScoreResult:
    score10: int
    sentiment: str
    summary: str
    keywords: List[str] = field(default_factory=list)
    positive_hits: int = 0
    negative_hits: int = 0


def clamp(value: int, lower: int, upper: int) -> int:
    return max(lower, min(upper, value))


def sentiment_for_score(score: float) -> str:
    """Map a score onto a label; only 5 and 6 (and values between) are neutral."""

    if score >= POSITIVE_THRESHOLD:
        return POSITIVE
    if score <= NEGATIVE_THRESHOLD:
        return NEGATIVE
    return NEUTRAL


def count_markers(text: str, markers: Iterable[Marker] = MARKERS) -> tuple[int, int]:
    """Return ``(positive, negative)`` presence counts for ``text``.

    ``text`` is expected to be lowercased already.
    """

    positive = negative = 0
    for marker in markers:
        if marker.token not in text:
            continue
        if marker.polarity > 0:
            positive += 1
        else:
            negative += 1
    return positive, negative


def extract_keywords(text: str, limit: int = MAX_KEYWORDS) -> List[str]:
    cleaned = _NON_WORD_RE.sub(" ", text)
    keywords: List[str] = []
    seen: set[str] = set()
    for token in cleaned.split():
        if len(token) < KEYWORD_MIN_LENGTH or token in seen:
            continue
        seen.add(token)
        keywords.append(token)
        if len(keywords) == limit:
            break
    return keywords


def score_reviews(reviews_text: str, markers: Sequence[Marker] = MARKERS) -> ScoreResult:
    """Score raw review text.

    The 20 character minimum for submissions is enforced by callers; any
    string, including the empty one, produces a result here.
    """

    text = reviews_text.lower()
    positive, negative = count_markers(text, markers)
    score10 = clamp(BASE_SCORE + (positive - negative), MIN_SCORE, MAX_SCORE)
    sentiment = sentiment_for_score(score10)
    return ScoreResult(
        score10=score10,
        sentiment=sentiment,
        summary=SUMMARIES[sentiment],
        keywords=extract_keywords(text),
        positive_hits=positive,
        negative_hits=negative,
    )


__all__ = [
    "MARKERS",
    "Marker",
    "ScoreResult",
    "SENTIMENTS",
    "clamp",
    "count_markers",
    "extract_keywords",
    "score_reviews",
    "sentiment_for_score",
]
