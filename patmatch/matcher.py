"""Pattern matcher interface and match results."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class PatternID:
    """Identifier of a pattern."""

    id: int = 0

    def __int__(self) -> int:
        return self.id

    def __index__(self) -> int:
        return self.id

    def __repr__(self) -> str:
        return repr(self.id)

    def __str__(self) -> str:
        return f"ID({self.id})"


@dataclass(frozen=True, order=True)
class PatternMatch:
    """A match: which pattern matched, and data on where it matched."""

    pattern: PatternID
    match_data: Any


class PortMatcher(ABC):
    """Matches patterns on host data."""

    @abstractmethod
    def find_matches(self, host: Any) -> Iterator[PatternMatch]:
        """All matches of all patterns in ``host``."""


class PatternFallback(enum.Enum):
    """What to do if a pattern fails to convert to constraints.

    ``FAIL`` is the default behaviour.
    """

    SKIP = "skip"
    FAIL = "fail"