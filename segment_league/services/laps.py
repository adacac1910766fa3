"""Fastest contiguous lap window selection."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence, Tuple

from ..core.errors import InsufficientData, InvalidInput


@dataclass(frozen=True)
class LapWindow:
    """Selected laps: original 0-based indices, their durations and the sum."""

    indices: Tuple[int, ...]
    durations: Tuple[int, ...]
    total_seconds: int

    @property
    def start_index(self) -> int:
        return self.indices[0]


def select_best_window(durations: Sequence[int], required: int) -> LapWindow:
    """Pick the ``required`` consecutive laps with the smallest total time.

    ``durations`` must be in recording order. Every window of length
    ``required`` is evaluated; on equal totals the earliest window wins.
    Raises :class:`InsufficientData` when fewer laps than ``required`` were
    recorded.
    """

    if isinstance(required, bool) or not isinstance(required, int) or required < 1:
        raise InvalidInput(f"required lap count must be a positive integer, got {required!r}")

    count = len(durations)
    if count < required:
        raise InsufficientData(count, required)

    best_start = 0
    best_total = running = sum(durations[:required])
    # Slide the window one lap at a time.
    for start in range(1, count - required + 1):
        running += durations[start + required - 1] - durations[start - 1]
        if running < best_total:
            best_start = start
            best_total = running

    indices = tuple(range(best_start, best_start + required))
    return LapWindow(
        indices=indices,
        durations=tuple(durations[index] for index in indices),
        total_seconds=best_total,
    )


__all__ = ["LapWindow", "select_best_window"]
