"""Pattern matching over indexed data with predicates, selectors and constraint trees."""

__version__ = "0.1.0"

__all__ = [
    "constraint_tree",
    "indexing",
    "matcher",
    "naive",
    "pattern",
    "predicate",
    "predicate_pattern",
    "selector",
    "single_pattern",
    "utils",
]