"""Patterns defined by a set of predicate constraints."""

from __future__ import annotations

from collections.abc import Iterable, Iterator, Sequence
from dataclasses import dataclass
from typing import Any

from .pattern import ClassRank, Pattern, PatternLogic, Satisfiable
from .predicate import condition_constraint, constraint_classes


def _sorted_unique(constraints: Iterable[Any]) -> tuple:
    return tuple(sorted(set(constraints)))


@dataclass(frozen=True, order=True)
class PredicateLogic(PatternLogic):
    """Pattern logic given by a conjunction of constraints."""

    pattern_constraints: tuple = ()
    known_constraints: tuple = ()

    @classmethod
    def from_constraints(cls, constraints: Iterable[Any]) -> PredicateLogic:
        """Logic requiring all of ``constraints``."""
        return cls(_sorted_unique(constraints), ())

    def all_classes(self) -> list:
        """All distinct branch classes of the constraints, sorted."""
        return sorted({cls for c in self.pattern_constraints for cls in constraint_classes(c)})

    def get_by_class(self, cls: Any) -> Iterator[Any]:
        """The constraints belonging to branch class ``cls``."""
        return (c for c in self.pattern_constraints if cls in constraint_classes(c))

    def conditioned(
        self, known_constraints: Iterable[Any], prev_constraints: Sequence[Any]
    ) -> Satisfiable:
        """The logic conditioned on ``known_constraints`` being satisfied."""
        known = frozenset(known_constraints)
        new_constraints = set()
        for c in self.pattern_constraints:
            result = condition_constraint(c, known, prev_constraints)
            if result.is_no():
                return Satisfiable.no()
            if result.is_yes():
                new_constraints.add(result.value)
        if not new_constraints:
            return Satisfiable.tautology()
        return Satisfiable.yes(PredicateLogic(_sorted_unique(new_constraints), _sorted_unique(known)))

    def rank_classes(self) -> Iterator[tuple[Any, ClassRank]]:
        return ((cls, 0.5) for cls in self.all_classes())

    def nominate(self, cls: Any) -> set:
        return set(self.get_by_class(cls))

    def apply_transitions(self, transitions: Sequence[Any]) -> list[Satisfiable]:
        transitions = list(transitions)
        return [
            self.conditioned({*self.known_constraints, c}, transitions[:i])
            for i, c in enumerate(transitions)
        ]

    def is_satisfiable(self) -> Satisfiable:
        if not self.pattern_constraints:
            return Satisfiable.tautology()
        return Satisfiable.yes()


@dataclass(frozen=True, order=True)
class PredicatePattern(Pattern):
    """A pattern whose logic is a :class:`PredicateLogic`."""

    logic: PredicateLogic

    @classmethod
    def from_constraints(cls, constraints: Iterable[Any]) -> PredicatePattern:
        """A pattern requiring all of ``constraints``."""
        return cls(PredicateLogic.from_constraints(constraints))

    def required_bindings(self) -> list:
        keys = (k for c in self.logic.pattern_constraints for k in c.required_bindings)
        return list(dict.fromkeys(keys))

    def into_logic(self) -> PredicateLogic:
        return self.logic