"""
Partition of constraint indices into an active (included) and an inactive
(excluded) subset.
"""

from __future__ import annotations

from typing import Iterable, Union

import numpy as np

IndexLike = Union[int, Iterable[int]]


def _as_indices(indices: IndexLike) -> Iterable[int]:
    if isinstance(indices, (int, np.integer)):
        return (int(indices),)
    return (int(i) for i in indices)


class IndexSelector:
    """
    Fixed-size included/excluded partition of ``range(count)``.

    Remembers the most recently included and excluded index (``-1`` when
    there is none) and whether the most recent change was an inclusion;
    the active-set solver uses these to break ties and to undo a step.
    Including an already included index, or excluding an already excluded
    one, is a no-op and does not touch that history.
    """

    def __init__(self, count: int) -> None:
        if count < 0:
            raise ValueError(f"count must be non-negative, got {count}.")
        self._included = np.zeros(int(count), dtype=bool)
        self._last_included = -1
        self._last_excluded = -1
        self._last_was_inclusion = False

    def __len__(self) -> int:
        return int(self._included.shape[0])

    @property
    def last_included(self) -> int:
        return self._last_included

    @property
    def last_excluded(self) -> int:
        return self._last_excluded

    def include(self, indices: IndexLike) -> None:
        for index in _as_indices(indices):
            if not self._included[index]:
                self._included[index] = True
                self._last_included = index
                self._last_was_inclusion = True

    def exclude(self, indices: IndexLike) -> None:
        for index in _as_indices(indices):
            if self._included[index]:
                self._included[index] = False
                self._last_excluded = index
                self._last_was_inclusion = False

    def include_all(self) -> None:
        self._included[:] = True

    def exclude_all(self) -> None:
        self._included[:] = False

    def shrink(self) -> None:
        """Exclude the highest included index."""
        included = self.get_included()
        if included.size:
            self.exclude(int(included[-1]))

    def revert_last_inclusion(self) -> None:
        if self._last_included >= 0:
            self.exclude(self._last_included)

    def is_included(self, index: int) -> bool:
        return bool(self._included[index])

    def is_last_included(self) -> bool:
        """True when the most recent change was an inclusion."""
        return self._last_was_inclusion

    def get_included(self) -> np.ndarray:
        return np.flatnonzero(self._included)

    def get_excluded(self) -> np.ndarray:
        return np.flatnonzero(~self._included)

    def count_included(self) -> int:
        return int(np.count_nonzero(self._included))

    def count_excluded(self) -> int:
        return len(self) - self.count_included()

    def __repr__(self) -> str:
        return (
            f"IndexSelector(included={self.get_included().tolist()}, "
            f"excluded={self.get_excluded().tolist()}, "
            f"last_included={self._last_included}, last_excluded={self._last_excluded})"
        )


__all__ = ["IndexSelector"]
