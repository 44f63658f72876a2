"""A simple matcher for a single pattern."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from .indexing import BindMap, IndexedData, IndexingScheme
from .matcher import PatternID, PatternMatch, PortMatcher
from .pattern import Pattern, PatternLogic


def _approx_int(rank: float) -> int:
    return int(rank * 10000.0)


def decompose_constraints(logic: PatternLogic) -> list:
    """Break pattern logic into a sequence of single constraints.

    Raises ValueError if the pattern is not satisfiable, cannot be
    decomposed, or nominates more than one constraint for a class.
    """
    status = logic.is_satisfiable()
    if status.is_no():
        raise ValueError("Pattern is not satisfiable")
    if status.is_tautology():
        return []

    constraints: list = []
    while True:
        ranked = list(logic.rank_classes())
        if not ranked:
            return []
        # On ties, the last class of highest rank is chosen.
        cls, _ = max(reversed(ranked), key=lambda pair: _approx_int(pair[1]))

        nominated = sorted(logic.nominate(cls))
        new_logics = logic.apply_transitions(nominated)
        if len(nominated) != 1:
            raise ValueError(
                "SinglePatternMatcher only supports patterns that nominate "
                "a single constraint per class"
            )
        if len(new_logics) != 1:
            raise ValueError("must match size of transitions")
        constraints.append(nominated[0])

        new_logic = new_logics[0]
        if new_logic.is_no():
            raise ValueError("Could not decompose pattern into constraints")
        if new_logic.is_tautology():
            break
        logic = new_logic.value

    return constraints


@dataclass(frozen=True)
class SinglePatternMatcher(PortMatcher):
    """Matches one pattern by evaluating its constraints one after another."""

    branch_selectors: tuple
    scopes: tuple
    required_bindings: tuple

    @classmethod
    def from_pattern(
        cls, pattern: Pattern, selector_cls: Any, indexing: IndexingScheme
    ) -> SinglePatternMatcher:
        """A matcher for ``pattern`` on hosts indexed by ``indexing``.

        ``selector_cls`` provides ``create_branch_selector`` to turn each
        constraint into a branch selector.
        """
        required = sorted(set(pattern.required_bindings()))
        constraints = decompose_constraints(pattern.into_logic())
        selectors = [selector_cls.create_branch_selector([c]) for c in constraints]

        scopes: list[tuple] = []
        known: set = set()
        for selector in selectors:
            new_keys = indexing.all_missing_bindings(selector.required_bindings(), known)
            known.update(new_keys)
            scopes.append(tuple(new_keys))
        scopes.append(tuple(indexing.all_missing_bindings(required, known)))

        return cls(tuple(selectors), tuple(scopes), tuple(required))

    def find_matches(self, host: IndexedData) -> Iterator[PatternMatch]:
        """All matches of the pattern in ``host``."""
        for bindings in self._all_bindings(host):
            yield PatternMatch(PatternID(), bindings)

    def match_exists(self, host: IndexedData) -> bool:
        """Whether the pattern matches anywhere in ``host``."""
        return bool(self._all_bindings(host))

    def _selector_args(self, selector: Any, bindings: BindMap) -> list:
        args = []
        for key in selector.required_bindings():
            binding = bindings.get_binding(key)
            if binding.is_unbound():
                raise RuntimeError(f"tried to use unbound key {key!r}")
            args.append(binding.value if binding.is_bound() else None)
        return args

    def _all_bindings(self, host: IndexedData) -> list[BindMap]:
        all_bindings = [BindMap()]

        for selector, scope in zip(self.branch_selectors, self.scopes):
            all_bindings = [
                extended
                for bindings in all_bindings
                for extended in host.bind_all(bindings, scope)
            ]
            all_bindings = [
                bindings
                for bindings in all_bindings
                if selector.eval(self._selector_args(selector, bindings), host)
            ]

        last_scope = sorted(set(self.scopes[-1]))
        final = [
            extended
            for bindings in all_bindings
            for extended in host.bind_all(bindings, last_scope)
        ]
        for bindings in final:
            bindings.retain_keys(self.required_bindings)

        seen: set = set()
        result: list[BindMap] = []
        for bindings in final:
            entries = tuple(bindings.get_binding(k) for k in self.required_bindings)
            if not all(entry.is_bound() for entry in entries):
                continue
            if entries in seen:
                continue
            seen.add(entries)
            result.append(bindings)
        return result