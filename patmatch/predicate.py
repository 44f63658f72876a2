"""Predicates used to define constraints and patterns.

A predicate is a boolean-valued function evaluated on input data and a
list of bound values. A constraint pairs a predicate with the index keys
it is evaluated on. Any object with a ``predicate`` attribute and a
``required_bindings`` attribute (a sequence of keys) serves as a
constraint. Constraints must be hashable and ordered.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Collection, Sequence
from typing import Any

from .pattern import Satisfiable


class ArityPredicate(ABC):
    """A predicate on a fixed number of arguments."""

    @abstractmethod
    def arity(self) -> int:
        """The number of arguments the predicate expects."""


class Predicate(ArityPredicate):
    """A predicate that can be evaluated on data and bound values."""

    @abstractmethod
    def check(self, bindings: Sequence[Any], data: Any) -> bool:
        """Whether the predicate holds for ``bindings`` on ``data``."""


class ConstraintLogic(ABC):
    """How constraints made of a predicate group into classes and simplify."""

    @abstractmethod
    def get_classes(self, keys: Sequence[Any]) -> list:
        """All branch classes of the constraint made of ``self`` and ``keys``."""

    @abstractmethod
    def condition_on(
        self,
        keys: Sequence[Any],
        known_constraints: Collection[Any],
        prev_constraints: Sequence[Any],
    ) -> Satisfiable:
        """The constraint made of ``self`` and ``keys`` conditioned on others.

        ``known_constraints`` are assumed satisfied; ``prev_constraints``
        are those evaluated so far in the same branch.
        """


def constraint_classes(constraint: Any) -> list:
    """The branch classes that ``constraint`` belongs to."""
    return constraint.predicate.get_classes(constraint.required_bindings)


def condition_constraint(
    constraint: Any,
    known_constraints: Collection[Any],
    prev_constraints: Sequence[Any],
) -> Satisfiable:
    """Condition ``constraint`` on a set of known constraints."""
    return constraint.predicate.condition_on(
        constraint.required_bindings, known_constraints, prev_constraints
    )