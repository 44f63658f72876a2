"""Utility functions."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any


def sort_with_indices(values: Iterable[Any]) -> list[tuple[Any, int]]:
    """Sort values, pairing each with its original position (stable)."""
    return sorted(((v, i) for i, v in enumerate(values)), key=lambda p: p[0])