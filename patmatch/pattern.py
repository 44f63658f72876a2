"""Abstractions for patterns and their evaluation logic."""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any

ClassRank = float
"""Rank used to prioritise branch classes; lower is better."""


class SatisfiableKind(enum.Enum):
    """Whether a pattern or constraint is satisfiable."""

    YES = "yes"
    NO = "no"
    TAUTOLOGY = "tautology"


@dataclass(frozen=True)
class Satisfiable:
    """A satisfiability result, carrying a value when satisfiable."""

    kind: SatisfiableKind
    value: Any = None

    @classmethod
    def yes(cls, value: Any = None) -> Satisfiable:
        return cls(SatisfiableKind.YES, value)

    @classmethod
    def no(cls) -> Satisfiable:
        return cls(SatisfiableKind.NO)

    @classmethod
    def tautology(cls) -> Satisfiable:
        return cls(SatisfiableKind.TAUTOLOGY)

    def is_yes(self) -> bool:
        return self.kind is SatisfiableKind.YES

    def is_no(self) -> bool:
        return self.kind is SatisfiableKind.NO

    def is_tautology(self) -> bool:
        return self.kind is SatisfiableKind.TAUTOLOGY


@dataclass(frozen=True)
class PredicateSelection:
    """A selection of predicates; ``None`` selects all predicates of a class."""

    predicates: tuple | None = None


class Pattern(ABC):
    """A pattern for pattern matching."""

    @abstractmethod
    def required_bindings(self) -> list:
        """Keys that must be bound to match the pattern."""

    @abstractmethod
    def into_logic(self) -> PatternLogic:
        """The evaluation logic of the pattern."""


class PatternLogic(ABC):
    """The evaluation logic for a type of pattern."""

    @abstractmethod
    def rank_classes(self) -> Iterable[tuple[Any, ClassRank]]:
        """Branch classes pertinent to the pattern, each with a rank."""

    @abstractmethod
    def nominate(self, cls: Any) -> set:
        """Constraints of ``cls`` useful for matching the pattern."""

    @abstractmethod
    def apply_transitions(self, transitions: Sequence[Any]) -> list[Satisfiable]:
        """The pattern conditioned on each of ``transitions``."""

    @abstractmethod
    def is_satisfiable(self) -> Satisfiable:
        """Whether the pattern is satisfiable."""