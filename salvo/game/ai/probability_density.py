"""Probability-density AI that scores cells from every consistent ship placement."""

from __future__ import annotations

import random

import numpy as np
from numpy.lib.stride_tricks import sliding_window_view

from salvo.game.ai.context import AIMemory, OpponentView
from salvo.game.core.errors import NoLegalTargetError
from salvo.game.core.models import CellState, Coord

PLAIN_WEIGHT = 1
HIT_WEIGHT = 20


def density_map(view: OpponentView) -> np.ndarray:
    """Accumulate placement weights for every cell of the defender grid.

    A placement is consistent when none of its cells is a miss or part of a
    sunk ship. Placements covering a live hit count ``HIT_WEIGHT``.
    """
    cells = view.grid.cells
    size = view.grid.size
    blocked = (cells == CellState.MISS) | (cells == CellState.SUNK)
    hits = cells == CellState.HIT
    density = np.zeros((size, size), dtype=np.int64)

    for length in view.remaining_lengths:
        if length > size:
            continue
        span = size - length + 1

        # Horizontal windows: shape (size, span, length).
        weights = _placement_weights(
            sliding_window_view(blocked, length, axis=1),
            sliding_window_view(hits, length, axis=1),
        )
        for offset in range(length):
            density[:, offset : offset + span] += weights

        # Vertical windows: shape (span, size, length).
        weights = _placement_weights(
            sliding_window_view(blocked, length, axis=0),
            sliding_window_view(hits, length, axis=0),
        )
        for offset in range(length):
            density[offset : offset + span, :] += weights

    return density


def _placement_weights(blocked_windows: np.ndarray, hit_windows: np.ndarray) -> np.ndarray:
    consistent = ~blocked_windows.any(axis=-1)
    covers_hit = hit_windows.any(axis=-1)
    return np.where(consistent, np.where(covers_hit, HIT_WEIGHT, PLAIN_WEIGHT), 0)


def choose_probability_shot(
    view: OpponentView, memory: AIMemory, rng: random.Random
) -> tuple[Coord, AIMemory]:
    """Fire at the legal cell with the highest density, ties broken at random."""
    legal = view.grid.legal_mask()
    if not legal.any():
        raise NoLegalTargetError("No legal targets remain.")
    density = density_map(view)
    best = density[legal].max()
    candidates = np.argwhere(legal & (density == best))
    row, col = candidates[rng.randrange(len(candidates))]
    return Coord(int(row), int(col)), memory
