"""A simple matcher that matches many patterns one at a time."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass
from typing import Any

from .indexing import IndexedData, IndexingScheme
from .matcher import PatternID, PatternMatch, PortMatcher
from .pattern import Pattern
from .single_pattern import SinglePatternMatcher


@dataclass(frozen=True)
class NaiveManyMatcher(PortMatcher):
    """Matches each pattern separately with a :class:`SinglePatternMatcher`.

    Mostly useful as a baseline for benchmarking and for testing. The
    pattern ID of a match is the position of its pattern.
    """

    matchers: tuple = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "matchers", tuple(self.matchers))

    @classmethod
    def from_patterns(
        cls,
        patterns: Iterable[Pattern],
        selector_cls: Any,
        indexing: IndexingScheme,
    ) -> NaiveManyMatcher:
        """A matcher for ``patterns`` on hosts indexed by ``indexing``."""
        return cls(
            tuple(
                SinglePatternMatcher.from_pattern(pattern, selector_cls, indexing)
                for pattern in patterns
            )
        )

    def find_matches(self, host: IndexedData) -> Iterator[PatternMatch]:
        """All matches of all patterns in ``host``, pattern by pattern."""
        for position, matcher in enumerate(self.matchers):
            for match in matcher.find_matches(host):
                yield PatternMatch(PatternID(position), match.match_data)