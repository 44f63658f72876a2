"""Constraint trees: organise constraints into a small state automaton.

Outgoing edges of a node form a disjunction of constraints; a path from the
root forms a conjunction. Nodes may carry indices into a list of
constraints: constraint ``i`` is satisfied exactly when a node labelled
``i`` is reachable. If ``make_det`` is set, the constraints on the edges
leaving the root are mutually exclusive and tried in order.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable, Iterable, Iterator, Sequence
from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

C = TypeVar("C")


@dataclass
class _TreeNode(Generic[C]):
    constraint_indices: list[int] = field(default_factory=list)
    children: list[tuple[C, int]] = field(default_factory=list)


@dataclass
class _QueueItem:
    next_index: int
    satisfied: list
    node: int


class ConstraintTree(Generic[C]):
    """A tree of constraints with labelled nodes."""

    def __init__(self, make_det: bool = False) -> None:
        self._nodes: list[_TreeNode[C]] = [_TreeNode()]
        self.make_det = make_det

    def __repr__(self) -> str:
        return f"ConstraintTree(n_nodes={self.n_nodes()}, make_det={self.make_det})"

    @classmethod
    def with_children(cls, children: Iterable[tuple[C, Iterable[int]]]) -> ConstraintTree[C]:
        """A tree of depth one; each child carries the given constraint indices."""
        tree = cls()
        for constraint, indices in children:
            child = tree.get_or_add_child(tree.root(), constraint)
            for index in indices:
                tree.add_constraint_index(child, index)
        return tree

    @classmethod
    def with_pairwise_mutex(
        cls,
        constraints: Iterable[tuple[C, int]],
        is_mutex: Callable[[C, C], bool],
    ) -> ConstraintTree[C]:
        """A deterministic tree of the constraints that are pairwise mutually exclusive.

        A constraint is kept only if it is exclusive with every constraint
        kept before it.
        """
        kept: list[tuple[C, list[int]]] = []
        for constraint, index in constraints:
            if all(is_mutex(other, constraint) for other, _ in kept):
                kept.append((constraint, [index]))
        tree = cls.with_children(kept)
        tree.make_det = True
        return tree

    @classmethod
    def with_transitive_mutex(
        cls,
        constraints: Iterable[tuple[C, int]],
        is_mutex: Callable[[C, C], bool],
    ) -> ConstraintTree[C]:
        """A deterministic tree of the constraints exclusive with the first one.

        Assumes mutual exclusion is transitive.
        """
        it = iter(constraints)
        first = next(it, None)
        if first is None:
            return cls()
        first_constraint, first_index = first
        rest = [(c, [i]) for c, i in it if is_mutex(first_constraint, c)]
        tree = cls.with_children([(first_constraint, [first_index]), *rest])
        tree.make_det = True
        return tree

    @classmethod
    def with_powerset(
        cls,
        constraints: Sequence[tuple[C, int]],
        conditioned: Callable[[C, list[C]], C | None],
    ) -> ConstraintTree[C]:
        """A tree of the conjunctions of all subsets of ``constraints``.

        ``conditioned(constraint, satisfied)`` returns the constraint
        simplified under the assumption that ``satisfied`` hold, or ``None``
        if it is implied by them.
        """
        constraints = list(constraints)
        if not constraints:
            return cls()

        tree = cls(make_det=True)
        queue = deque([_QueueItem(0, [], tree.root())])

        while queue:
            item = queue.popleft()
            next_index, satisfied, node = item.next_index, item.satisfied, item.node

            next_constraint: Any = None
            while next_index < len(constraints):
                candidate, index = constraints[next_index]
                next_constraint = conditioned(candidate, satisfied)
                if next_constraint is not None:
                    break
                satisfied.append(candidate)
                tree.add_constraint_index(node, index)
                next_index += 1
            else:
                continue

            queue.append(_QueueItem(next_index + 1, list(satisfied), node))

            child = tree.get_or_add_child(node, next_constraint)
            original, index = constraints[next_index]
            satisfied.append(original)
            tree.add_constraint_index(child, index)
            queue.append(_QueueItem(next_index + 1, satisfied, child))

        return tree

    def root(self) -> int:
        """The index of the root node."""
        return 0

    def constraint_indices(self, node: int) -> list[int]:
        """The constraint indices attached to ``node``."""
        return list(self._nodes[node].constraint_indices)

    def children(self, node: int) -> Iterator[tuple[int, C]]:
        """The children of ``node`` as ``(child index, edge constraint)`` pairs."""
        for constraint, child in self._nodes[node].children:
            yield child, constraint

    def add_children(self, node: int, constraints: Iterable[C]) -> list[int]:
        """Get or add a child of ``node`` for each constraint."""
        return [self.get_or_add_child(node, c) for c in constraints]

    def get_or_add_child(self, node: int, constraint: C) -> int:
        """The child of ``node`` along ``constraint``, created if missing."""
        if not 0 <= node < len(self._nodes):
            raise IndexError("Cannot add child to node that does not exist")
        for existing, child in self._nodes[node].children:
            if existing == constraint:
                return child
        child = len(self._nodes)
        self._nodes.append(_TreeNode())
        self._nodes[node].children.append((constraint, child))
        return child

    def add_constraint_index(self, node: int, index: int) -> None:
        """Attach constraint ``index`` to ``node``."""
        self._nodes[node].constraint_indices.append(index)

    def n_nodes(self) -> int:
        """The number of nodes in the tree."""
        return len(self._nodes)

    def n_children(self, node: int) -> int:
        """The number of children of ``node``."""
        return len(self._nodes[node].children)