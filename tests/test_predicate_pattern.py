from __future__ import annotations

from dataclasses import dataclass

from patmatch.pattern import Satisfiable
from patmatch.predicate import ConstraintLogic, Predicate, constraint_classes
from patmatch.predicate_pattern import PredicateLogic, PredicatePattern


@dataclass(frozen=True, order=True)
class SamplePredicate(Predicate, ConstraintLogic):
    rank: int
    name: str

    def arity(self) -> int:
        return 1 if self.name in ("NeverTrueThree", "AlwaysTrueThree") else 2

    def check(self, bindings, data) -> bool:
        if self.name in ("AreEqualOne", "AreEqualTwo"):
            a, b = bindings
            return a == b
        if self.name == "NotEqualOne":
            a, b = bindings
            return a != b
        return self.name != "NeverTrueThree"

    def get_classes(self, keys):
        assert self.arity() == len(keys)
        if self.name in ("AreEqualOne", "NotEqualOne"):
            return [(1, *keys)]
        if self.name in ("AreEqualTwo", "AlwaysTrueTwo"):
            return [(2, *keys)]
        return [(3,)]

    def condition_on(self, keys, known_constraints, prev_constraints):
        own = SampleConstraint(self, tuple(keys))
        classes = self.get_classes(keys)
        condition = next(
            (c for c in sorted(known_constraints) if constraint_classes(c) == classes),
            None,
        )
        if condition is None:
            return Satisfiable.yes(own)
        if self == condition.predicate:
            return Satisfiable.tautology()
        (cls,) = classes
        if cls[0] == 1:
            return Satisfiable.no()
        always_true = ALWAYS_TRUE_TWO if cls[0] == 2 else ALWAYS_TRUE_THREE
        if condition.predicate == always_true:
            return Satisfiable.yes(own)
        return Satisfiable.tautology()


@dataclass(frozen=True, order=True)
class SampleConstraint:
    predicate: SamplePredicate
    required_bindings: tuple


ARE_EQUAL_ONE = SamplePredicate(0, "AreEqualOne")
NOT_EQUAL_ONE = SamplePredicate(1, "NotEqualOne")
ARE_EQUAL_TWO = SamplePredicate(2, "AreEqualTwo")
ALWAYS_TRUE_TWO = SamplePredicate(3, "AlwaysTrueTwo")
ALWAYS_TRUE_THREE = SamplePredicate(5, "AlwaysTrueThree")

C1 = SampleConstraint(ARE_EQUAL_TWO, ("key1", "key1"))
C2 = SampleConstraint(ALWAYS_TRUE_THREE, ("key100",))
C3 = SampleConstraint(NOT_EQUAL_ONE, ("key1", "key2"))


def test_required_bindings():
    c = SampleConstraint(ARE_EQUAL_ONE, ("key1", "key1"))
    p = PredicatePattern.from_constraints([c])
    assert p.required_bindings() == ["key1"]


def test_required_bindings_unique_in_constraint_order():
    p = PredicatePattern.from_constraints([C1, C2, C3])
    assert p.required_bindings() == ["key1", "key2", "key100"]


def test_into_logic_keeps_constraints():
    p = PredicatePattern.from_constraints([C2, C1, C1])
    assert p.into_logic().pattern_constraints == (C1, C2)


def test_all_classes_and_rank():
    logic = PredicateLogic.from_constraints([C1, C2, C3])
    assert logic.all_classes() == [(1, "key1", "key2"), (2, "key1", "key1"), (3,)]
    assert all(rank == 0.5 for _, rank in logic.rank_classes())
    assert [cls for cls, _ in logic.rank_classes()] == logic.all_classes()


def test_nominate_and_get_by_class():
    logic = PredicateLogic.from_constraints([C1, C2, C3])
    assert logic.nominate((3,)) == {C2}
    assert list(logic.get_by_class((1, "key1", "key2"))) == [C3]
    assert logic.nominate((2, "x", "y")) == set()


def test_apply_transitions_simplifies():
    logic = PredicateLogic.from_constraints([C1, C2, C3])
    (result,) = logic.apply_transitions([C2])
    assert result.is_yes()
    assert result.value.pattern_constraints == (C3, C1)
    assert result.value.known_constraints == (C2,)


def test_apply_transitions_mutex():
    logic = PredicateLogic.from_constraints([C1, C2, C3])
    equal = SampleConstraint(ARE_EQUAL_ONE, ("key1", "key2"))
    first, second = logic.apply_transitions([equal, C3])
    assert first.is_no()
    assert second.is_yes()
    assert second.value.pattern_constraints == (C1, C2)


def test_conditioned_tautology():
    logic = PredicateLogic.from_constraints([C2])
    assert logic.conditioned({C2}, []).is_tautology()


def test_is_satisfiable():
    assert PredicateLogic.from_constraints([]).is_satisfiable().is_tautology()
    assert PredicateLogic.from_constraints([C1]).is_satisfiable().is_yes()