# patmatch

A small library for matching patterns against arbitrary data.

Data is accessed through an **indexing scheme**: a set of index keys whose values are
bound at match time. Patterns are conjunctions of **constraints**, each a predicate
applied to a list of index keys. The matchers find every binding of keys to values
under which all of a pattern's constraints hold.

The library has no dependencies outside the standard library.

## Main pieces

- `patmatch.indexing`
  - `IndexingScheme`: subclass it and implement `required_bindings(key)`, the keys
    that must be bound before `key`. `missing_bindings` and `all_missing_bindings`
    list the keys still to bind, in dependency order.
  - `IndexedData`: subclass it and implement `list_bind_options(key, known_bindings)`.
    `bind_all(bindings, new_keys)` returns every way of extending a `BindMap` with
    the new keys; a key with no options is marked as failed.
  - `BindMap`: a `dict` of bindings. A key mapped to `None` is a failed binding, a
    missing key is unbound. `bind` raises `VariableExistsError` when the key already
    holds a different value.
  - `Binding` and `BindingState`, the result of `BindMap.get_binding`.
  - The errors `BindVariableError`, `VariableExistsError` and `InvalidKeyError`.
  - `bindings_hash(bindings, scope)`.
- `patmatch.pattern`: the abstract `Pattern` and `PatternLogic`, the result type
  `Satisfiable` (`yes`, `no`, `tautology`) with `SatisfiableKind`, and
  `PredicateSelection`.
- `patmatch.predicate`: the abstract `ArityPredicate`, `Predicate` (`arity`, `check`)
  and `ConstraintLogic` (`get_classes`, `condition_on`), and the helpers
  `constraint_classes` and `condition_constraint`.
- `patmatch.predicate_pattern`: `PredicateLogic` and `PredicatePattern`, which build
  patterns from sets of constraints. Every branch class is ranked 0.5.
- `patmatch.selector`: `PredicatePatternDefaultSelector` (returns the positions of
  every satisfied constraint) and `DeterministicPredicatePatternSelector` (returns
  only the first). A `None` binding makes the constraints that use it be skipped.
- `patmatch.constraint_tree`: `ConstraintTree`, which arranges constraints into a
  tree with labelled nodes. It can be built with `with_children`, from pairwise
  (`with_pairwise_mutex`) or transitive (`with_transitive_mutex`) mutual exclusion,
  or from the power set of a list of constraints (`with_powerset`).
- `patmatch.single_pattern`: `SinglePatternMatcher`, which matches one pattern,
  and `decompose_constraints`, which breaks pattern logic into single constraints.
- `patmatch.naive`: `NaiveManyMatcher`, which matches many patterns one at a time.
- `patmatch.matcher`: `PatternID`, `PatternMatch`, the abstract `PortMatcher` and
  the `PatternFallback` enum (`SKIP`, `FAIL`).
- `patmatch.utils`: `sort_with_indices`, a stable sort that pairs each value with
  its original position.

## Constraints

A constraint is any hashable, ordered object with two attributes:

- `predicate`: an object implementing `Predicate` and `ConstraintLogic`;
- `required_bindings`: the sequence of keys the predicate is evaluated on.

A frozen, ordered dataclass with these two fields is enough.

## Example

```python
from patmatch.predicate_pattern import PredicatePattern
from patmatch.selector import PredicatePatternDefaultSelector
from patmatch.single_pattern import SinglePatternMatcher

pattern = PredicatePattern.from_constraints(constraints)
matcher = SinglePatternMatcher.from_pattern(
    pattern, PredicatePatternDefaultSelector, indexing
)

for match in matcher.find_matches(host):
    print(match.pattern, match.match_data)
```

Here `constraints` are constraints built from your own predicate class, `indexing`
is your `IndexingScheme`, and `host` is your `IndexedData`. Each match carries
`PatternID(0)` and a `BindMap` restricted to the pattern's keys; duplicate matches
are dropped. `match_exists(host)` tells whether there is any match.

`SinglePatternMatcher.from_pattern` raises `ValueError` if the pattern is not
satisfiable or nominates more than one constraint for a branch class.

To match several patterns, use `NaiveManyMatcher.from_patterns` with the same
arguments, passing a list of patterns. Each match is tagged with the `PatternID` of
the position of the pattern it came from.

## What it does not do

- There is no matcher that evaluates many patterns at once through a shared
  automaton; `NaiveManyMatcher` runs one `SinglePatternMatcher` per pattern.
- `ConstraintTree` is a standalone data structure; the matchers do not use it.
- `PatternFallback` is defined but no matcher takes it.
- No concrete predicates, indexing schemes or host data types are included; you
  supply them.

## Installing and testing

```
pip install .
pip install ".[test]"
pytest
```