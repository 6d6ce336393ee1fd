"""
Neighbourhood construction and comparison for the attention model.

A neighbourhood is a small random subset of the pixels around a centre,
picked from a fixed table of offsets. Two neighbourhoods built from the
same offsets can be compared position by position.
"""

import logging
from functools import lru_cache

import numpy as np

logger = logging.getLogger(__name__)

__all__ = [
    'RADIUS',
    'neighbour_offsets',
    'random_neighbourhood',
    'sample_neighbourhood',
    'sample_neighbourhoods',
    'neighbourhoods_match',
    'count_mismatches',
]

# Max-norm radius neighbours are picked from
RADIUS = 2


@lru_cache(maxsize=None)
def neighbour_offsets(radius: int = RADIUS) -> np.ndarray:
    """
    All (dx, dy) offsets with max(|dx|, |dy|) <= radius, origin excluded.

    Rows are ordered over dx first, then dy. The returned array is
    read-only and shared between callers.
    """
    if radius < 1:
        raise ValueError(f"radius must be >= 1, got {radius}")

    offsets = [
        (dx, dy)
        for dx in range(-radius, radius + 1)
        for dy in range(-radius, radius + 1)
        if dx != 0 or dy != 0
    ]
    table = np.array(offsets, dtype=np.intp)
    table.setflags(write=False)
    logger.debug(f"Built offset table for radius {radius}: {len(table)} entries")
    return table


def random_neighbourhood(rng: np.random.Generator, table_size: int, size: int) -> np.ndarray:
    """Pick `size` distinct offset indices uniformly at random."""
    if not 1 <= size < table_size:
        raise ValueError(
            f"Neighbourhood size must be between 1 and {table_size - 1}, got {size}"
        )
    return rng.choice(table_size, size=size, replace=False)


def sample_neighbourhood(converted: np.ndarray, x: int, y: int,
                         offsets: np.ndarray, shape: np.ndarray) -> np.ndarray:
    """
    Read the converted colours around (x, y) for the given shape.

    `converted` is an (H, W, 3) array already passed through a colour
    converter. The centre must lie at least the offset radius away from
    every border. Returns a (len(shape), 3) array.
    """
    d = offsets[shape]
    return converted[y + d[:, 1], x + d[:, 0]]


def sample_neighbourhoods(converted: np.ndarray, xs: np.ndarray, ys: np.ndarray,
                          offsets: np.ndarray, shape: np.ndarray) -> np.ndarray:
    """Vectorised sample_neighbourhood over many centres, shape (n, len(shape), 3)."""
    d = offsets[shape]
    cols = np.asarray(xs)[:, None] + d[None, :, 0]
    rows = np.asarray(ys)[:, None] + d[None, :, 1]
    return converted[rows, cols]


def neighbourhoods_match(a: np.ndarray, b: np.ndarray, max_dist: int) -> bool:
    """
    True if every aligned colour pair is within `max_dist` (L1).

    Stops at the first pair over the threshold.
    """
    a = np.asarray(a, dtype=np.int64)
    b = np.asarray(b, dtype=np.int64)
    if a.shape != b.shape:
        raise ValueError(f"Neighbourhood shapes differ: {a.shape} vs {b.shape}")

    for p, q in zip(a, b):
        if int(np.abs(p - q).sum()) > max_dist:
            return False
    return True


def count_mismatches(reference: np.ndarray, candidates: np.ndarray, max_dist: int) -> int:
    """Number of candidate neighbourhoods that do not match the reference."""
    reference = np.asarray(reference, dtype=np.int64)
    candidates = np.asarray(candidates, dtype=np.int64)
    if len(candidates) == 0:
        return 0

    # (n, k) L1 distances per aligned pair
    dist = np.abs(candidates - reference[None, :, :]).sum(axis=-1)
    matches = np.all(dist <= max_dist, axis=1)
    return int(len(candidates) - np.count_nonzero(matches))
