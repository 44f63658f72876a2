"""Branch selectors that evaluate lists of predicate constraints."""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True, order=True)
class _InnerSelector:
    """Shared state and logic of the predicate selectors.

    Keys needed by all constraints are stored once in
    ``all_required_bindings``; each constraint refers to them by position.
    """

    predicates: tuple = ()
    all_required_bindings: tuple = ()
    binding_indices: tuple = ()
    deterministic: bool = False

    @classmethod
    def build(cls, constraints: Iterable[Any], deterministic: bool) -> _InnerSelector:
        predicates: list = []
        all_keys: list = []
        binding_indices: list[tuple[int, ...]] = []
        for constraint in constraints:
            indices = []
            for key in constraint.required_bindings:
                try:
                    pos = all_keys.index(key)
                except ValueError:
                    all_keys.append(key)
                    pos = len(all_keys) - 1
                indices.append(pos)
            binding_indices.append(tuple(indices))
            predicates.append(constraint.predicate)
        return cls(
            tuple(predicates), tuple(all_keys), tuple(binding_indices), deterministic
        )

    def keys(self, pos: int) -> list:
        return [self.all_required_bindings[i] for i in self.binding_indices[pos]]

    def get_class(self) -> Any:
        if not self.predicates:
            return None
        classes = set(self.predicates[0].get_classes(self.keys(0)))
        for pos, predicate in enumerate(self.predicates[1:], start=1):
            classes &= set(predicate.get_classes(self.keys(pos)))
        if not classes:
            raise ValueError("All predicates in a pattern must share a class")
        return min(classes)

    def eval(self, bindings: Sequence[Any], data: Any) -> list[int]:
        valid: list[int] = []
        for pos, (predicate, indices) in enumerate(
            zip(self.predicates, self.binding_indices)
        ):
            if valid and self.deterministic:
                break
            args = [bindings[i] for i in indices]
            if any(arg is None for arg in args):
                continue
            if predicate.check(args, data):
                valid.append(pos)
        return valid


@dataclass(frozen=True, order=True)
class PredicatePatternDefaultSelector:
    """A non-deterministic selector: returns every constraint that holds."""

    _inner: _InnerSelector = _InnerSelector()

    @classmethod
    def from_constraints(cls, constraints: Iterable[Any]) -> PredicatePatternDefaultSelector:
        """A selector choosing between ``constraints``, in order."""
        return cls(_InnerSelector.build(constraints, deterministic=False))

    @classmethod
    def create_branch_selector(
        cls, constraints: Iterable[Any]
    ) -> PredicatePatternDefaultSelector:
        """A selector for ``constraints``; same as :meth:`from_constraints`."""
        return cls.from_constraints(constraints)

    def keys(self, pos: int) -> list:
        """The keys the constraint at position ``pos`` is evaluated on."""
        return self._inner.keys(pos)

    def get_class(self) -> Any:
        """The smallest branch class shared by all predicates, or ``None`` if empty.

        Raises ValueError if the predicates share no class.
        """
        return self._inner.get_class()

    def predicates(self) -> list:
        """The predicates of the selector, in order."""
        return list(self._inner.predicates)

    def required_bindings(self) -> list:
        """All keys needed to evaluate the selector, in order of first use."""
        return list(self._inner.all_required_bindings)

    def eval(self, bindings: Sequence[Any], data: Any) -> list[int]:
        """Positions of all constraints satisfied on ``data``.

        ``bindings`` holds one value per key of :meth:`required_bindings`;
        ``None`` marks a key that could not be bound, and constraints using
        it are skipped.
        """
        return self._inner.eval(bindings, data)


@dataclass(frozen=True, order=True)
class DeterministicPredicatePatternSelector:
    """A deterministic selector: returns only the first constraint that holds."""

    _inner: _InnerSelector = _InnerSelector(deterministic=True)

    @classmethod
    def from_constraints(
        cls, constraints: Iterable[Any]
    ) -> DeterministicPredicatePatternSelector:
        """A selector choosing between ``constraints``, in order."""
        return cls(_InnerSelector.build(constraints, deterministic=True))

    @classmethod
    def create_branch_selector(
        cls, constraints: Iterable[Any]
    ) -> DeterministicPredicatePatternSelector:
        """A selector for ``constraints``; same as :meth:`from_constraints`."""
        return cls.from_constraints(constraints)

    def keys(self, pos: int) -> list:
        """The keys the constraint at position ``pos`` is evaluated on."""
        return self._inner.keys(pos)

    def get_class(self) -> Any:
        """The smallest branch class shared by all predicates, or ``None`` if empty.

        Raises ValueError if the predicates share no class.
        """
        return self._inner.get_class()

    def predicates(self) -> list:
        """The predicates of the selector, in order."""
        return list(self._inner.predicates)

    def required_bindings(self) -> list:
        """All keys needed to evaluate the selector, in order of first use."""
        return list(self._inner.all_required_bindings)

    def eval(self, bindings: Sequence[Any], data: Any) -> list[int]:
        """Position of the first constraint satisfied on ``data``, if any.

        ``bindings`` holds one value per key of :meth:`required_bindings`;
        ``None`` marks a key that could not be bound, and constraints using
        it are skipped.
        """
        return self._inner.eval(bindings, data)