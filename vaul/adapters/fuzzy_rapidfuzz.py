"""Fuzzy command search backed by ``rapidfuzz``.

The threshold follows the convention the search box was tuned with: ``0.0``
accepts only exact matches and ``1.0`` accepts anything. It maps onto a
rapidfuzz score cutoff of ``(1 - threshold) * 100``. ``partial_ratio`` scores
the best-aligned substring, which keeps matching close to "fairly strict
substring-like" at the default ``0.3``. Commands shorter than the query are
scored as a whole with ``ratio``.
"""

from __future__ import annotations

from typing import Callable, List, Sequence, TypeVar

from rapidfuzz import fuzz, process

from vaul.domain.ports import MatcherPort

T = TypeVar("T")

DEFAULT_THRESHOLD = 0.3


def _normalize(text: str) -> str:
    return text.casefold().strip()


def _substring_score(query: str, choice: str, *, score_cutoff=None, **_kwargs) -> float:
    # a query longer than the command must match it as a whole
    if len(query) <= len(choice):
        return fuzz.partial_ratio(query, choice, score_cutoff=score_cutoff)
    return fuzz.ratio(query, choice, score_cutoff=score_cutoff)


class RapidFuzzMatcher(MatcherPort):
    def __init__(self, threshold: float = DEFAULT_THRESHOLD) -> None:
        if not 0.0 <= float(threshold) <= 1.0:
            raise ValueError("Fuzzy threshold must be within [0.0, 1.0].")
        self.threshold = float(threshold)

    @property
    def score_cutoff(self) -> float:
        return (1.0 - self.threshold) * 100.0

    def match(self, query: str, candidates: Sequence[T], key: Callable[[T], str]) -> List[T]:
        """Return candidates scoring at least the cutoff, best first.

        Ties keep the candidates' original order.
        """
        needle = _normalize(query or "")
        if not needle or not candidates:
            return []
        choices = [_normalize(key(item) or "") for item in candidates]
        results = process.extract(
            needle,
            choices,
            scorer=_substring_score,
            processor=None,
            score_cutoff=self.score_cutoff,
            limit=None,
        )
        ranked = sorted(results, key=lambda hit: (-hit[1], hit[2]))
        return [candidates[index] for _choice, _score, index in ranked]


__all__ = ["DEFAULT_THRESHOLD", "RapidFuzzMatcher"]
