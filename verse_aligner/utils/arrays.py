from __future__ import annotations

from typing import Iterable, List, Sequence, TypeVar

T = TypeVar("T")


def group_consecutive(indices: Iterable[int]) -> List[List[int]]:
    """Split indices into ascending runs where each item is the previous plus one."""
    groups: List[List[int]] = []
    for index in sorted(int(value) for value in indices):
        if groups and index == groups[-1][-1] + 1:
            groups[-1].append(index)
        else:
            groups.append([index])
    return groups


def delete_indices(items: Sequence[T], indices: Iterable[int]) -> List[T]:
    """Return a new list without the given positions."""
    doomed = set(indices)
    return [item for position, item in enumerate(items) if position not in doomed]
