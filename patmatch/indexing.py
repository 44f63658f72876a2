"""Access pattern matching subject data through indexing schemes.

Index keys are bound by an :class:`IndexingScheme` to values of the
subject data. Bindings are stored in a :class:`BindMap`.
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from collections.abc import Callable, Collection, Hashable, Iterable
from dataclasses import dataclass
from typing import Any


class BindingState(enum.Enum):
    """The state of an index key in a set of bindings."""

    BOUND = "bound"
    UNBOUND = "unbound"
    FAILED = "failed"


@dataclass(frozen=True)
class Binding:
    """The result of looking up the binding of a key."""

    state: BindingState
    value: Any = None

    @classmethod
    def bound(cls, value: Any) -> Binding:
        """The key is bound to ``value``."""
        return cls(BindingState.BOUND, value)

    @classmethod
    def unbound(cls) -> Binding:
        """No value has been assigned to the key yet."""
        return cls(BindingState.UNBOUND)

    @classmethod
    def failed(cls) -> Binding:
        """A previous attempt at binding the key was unsuccessful."""
        return cls(BindingState.FAILED)

    def is_unbound(self) -> bool:
        return self.state is BindingState.UNBOUND

    def is_failed(self) -> bool:
        return self.state is BindingState.FAILED

    def is_bound(self) -> bool:
        return self.state is BindingState.BOUND

    def map(self, func: Callable[[Any], Any]) -> Binding:
        """Apply ``func`` to the bound value, if any."""
        if self.is_bound():
            return Binding.bound(func(self.value))
        return self


class BindVariableError(Exception):
    """Error in creating an index key-value binding."""


class VariableExistsError(BindVariableError):
    """A different binding already exists for the index key."""

    def __init__(self, key: str, curr_value: str, new_value: str) -> None:
        self.key = key
        self.curr_value = curr_value
        self.new_value = new_value
        super().__init__(
            f"Cannot bind existing index key {key} to value {curr_value}: "
            f"already bound to {new_value}"
        )


class InvalidKeyError(BindVariableError):
    """Trying to bind an invalid key."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(f"Cannot bind to key: {key}")


class BindMap(dict):
    """A map of index key bindings.

    A key mapped to ``None`` records a failed binding attempt; a key that is
    absent is unbound.
    """

    def get_binding(self, key: Hashable) -> Binding:
        """Look up the binding of ``key``."""
        if key not in self:
            return Binding.unbound()
        value = self[key]
        if value is None:
            return Binding.failed()
        return Binding.bound(value)

    def bind(self, key: Hashable, value: Any) -> None:
        """Bind ``value`` to ``key``.

        Raises VariableExistsError if ``key`` already holds a different entry.
        """
        if key in self and self[key] != value:
            raise VariableExistsError(repr(key), repr(self[key]), repr(value))
        self[key] = value

    def bind_failed(self, key: Hashable) -> None:
        """Mark ``key`` as impossible to bind."""
        self[key] = None

    def retain_keys(self, keys: Collection[Hashable]) -> None:
        """Keep only the entries whose key is in ``keys``."""
        for key in [k for k in self if k not in keys]:
            del self[key]

    def copy(self) -> BindMap:
        return BindMap(self)


class IndexingScheme(ABC):
    """A scheme giving the dependencies between index keys."""

    @abstractmethod
    def required_bindings(self, key: Hashable) -> list:
        """Keys that must be bound, in order, before ``key`` can be bound."""

    def missing_bindings(
        self, key: Hashable, known_bindings: Collection[Hashable]
    ) -> list:
        """All missing bindings for ``key``, in topological order.

        Includes ``key`` itself unless it is already known.
        """
        missing: list = []
        visited: set = set()
        stack: list[tuple[bool, Hashable]] = []
        if key not in known_bindings:
            stack.append((True, key))
            visited.add(key)
        while stack:
            entering, current = stack.pop()
            if not entering:
                missing.append(current)
                continue
            stack.append((False, current))
            for req in self.required_bindings(current):
                if req not in known_bindings and req not in visited:
                    visited.add(req)
                    stack.append((True, req))
        return missing

    def all_missing_bindings(
        self, keys: Iterable[Hashable], known_bindings: Iterable[Hashable]
    ) -> list:
        """All missing bindings for ``keys``, in topological order."""
        missing: list = []
        known = set(known_bindings)
        for key in keys:
            if key not in known:
                new = self.missing_bindings(key, known)
                missing.extend(new)
                known.update(new)
        return missing


class IndexedData(ABC):
    """Data that can be accessed through index key bindings."""

    @abstractmethod
    def list_bind_options(self, key: Hashable, known_bindings: BindMap) -> list:
        """All valid values for ``key``; empty if it cannot be bound."""

    def bind_all(self, bindings: BindMap, new_keys: Iterable[Hashable]) -> list[BindMap]:
        """All ways to extend ``bindings`` by binding ``new_keys`` in order."""
        all_bindings = [bindings]
        for key in new_keys:
            extended: list[BindMap] = []
            for current in all_bindings:
                if not current.get_binding(key).is_unbound():
                    extended.append(current)
                    continue
                options = self.list_bind_options(key, current)
                if not options:
                    current.bind_failed(key)
                    extended.append(current)
                    continue
                for value in options:
                    candidate = current.copy()
                    try:
                        candidate.bind(key, value)
                    except BindVariableError:
                        continue
                    extended.append(candidate)
            all_bindings = extended
        return all_bindings


def bindings_hash(bindings: BindMap, scope: Iterable[Hashable]) -> int:
    """Hash the bindings of the keys in ``scope``."""
    return hash(tuple(bindings.get_binding(key) for key in scope))