# trace.py  (direction-automaton boundary tracing)
# Orders the boundary pixels of a binary mask into closed (row, col) chains.

from __future__ import annotations
import logging
from typing import List, Tuple, Union
import numpy as np

from .errors import InvalidInputError, LoopLabError

logger = logging.getLogger(__name__)

Chain = np.ndarray  # (n+1, 2) intp rows of (row, col); chain[0] == chain[-1]

# A pixel has direction-type D when a one-pixel step towards D leaves the foreground.
NORTH, EAST, SOUTH, WEST = 0, 1, 2, 3

# (type delta, row delta, col delta) indexed by [direction-type, preference rank]
#   rank 0: corner continuation, rank 1: straight continuation, rank 2: same pixel, next type
_MOVES = np.array([
    [(3, -1, 1), (0, 0, 1), (1, 0, 0)],      # NORTH -> WEST@NE, NORTH@E, EAST@here
    [(-1, 1, 1), (0, 1, 0), (1, 0, 0)],      # EAST  -> NORTH@SE, EAST@S, SOUTH@here
    [(-1, 1, -1), (0, 0, -1), (1, 0, 0)],    # SOUTH -> EAST@SW, SOUTH@W, WEST@here
    [(-1, -1, -1), (0, -1, 0), (-3, 0, 0)],  # WEST  -> SOUTH@NW, WEST@N, NORTH@here
], dtype=np.intp)

_SELECT = {"first": 0, "second": 1, 1: 0, 2: 1}


def _as_mask(mask) -> np.ndarray:
    m = np.asarray(mask)
    if m.ndim != 2:
        raise InvalidInputError(f"mask must be 2D, got shape {m.shape}")
    return m != 0

def border_types(mask) -> np.ndarray:
    """(4,H,W) bool: foreground pixels whose neighbour towards each direction is background."""
    fg = _as_mask(mask)
    p = np.pad(fg, 1, constant_values=False)
    border = np.zeros((4, *fg.shape), dtype=bool)
    border[NORTH] = fg & ~p[:-2, 1:-1]
    border[EAST] = fg & ~p[1:-1, 2:]
    border[SOUTH] = fg & ~p[2:, 1:-1]
    border[WEST] = fg & ~p[1:-1, :-2]
    return border

def _preferences(border: np.ndarray) -> np.ndarray:
    """Preference rank of the first neighbouring border state present, per (type,row,col)."""
    b = np.pad(border, ((0, 0), (1, 1), (1, 1)), constant_values=False)
    candidates = {
        NORTH: (b[WEST, :-2, 2:], b[NORTH, 1:-1, 2:], b[EAST, 1:-1, 1:-1]),
        EAST: (b[NORTH, 2:, 2:], b[EAST, 2:, 1:-1], b[SOUTH, 1:-1, 1:-1]),
        SOUTH: (b[EAST, 2:, :-2], b[SOUTH, 1:-1, :-2], b[WEST, 1:-1, 1:-1]),
        WEST: (b[SOUTH, :-2, :-2], b[WEST, :-2, 1:-1], b[NORTH, 1:-1, 1:-1]),
    }
    rank = np.zeros(border.shape, dtype=np.intp)
    for d, options in candidates.items():
        rank[d] = np.argmax(np.stack(options), axis=0)
    return rank

def _collapse(path: np.ndarray) -> Chain:
    # type-only moves repeat the position; keep the closing pixel
    keep = np.any(path[1:] != path[:-1], axis=1)
    return np.vstack([path[:-1][keep], path[-1:]])

def chain_length(chain: Chain) -> int:
    """Pixel count of a closed chain, closing repeat excluded."""
    return len(chain) - 1

def trace_all_chains(mask) -> List[Chain]:
    """
    Walk every (direction-type, pixel) border state exactly once.
    Each walk starts at the first unvisited state, scanning column by column, then row,
    direction-type fastest, so the chains of one object stay adjacent. A walk stops
    when it returns to its starting state; no length filtering or pair selection.
    """
    border = border_types(mask)
    steps = _MOVES[np.arange(4)[:, None, None], _preferences(border)]  # (4,H,W,3)
    unvisited = border.copy()
    budget = int(border.sum()) + 1
    chains: List[Chain] = []
    for c, r, t in zip(*np.nonzero(border.transpose(2, 1, 0))):
        start = (int(t), int(r), int(c))
        if not unvisited[start]:
            continue
        state = start
        path: List[Tuple[int, int]] = [start[1:]]
        for _ in range(budget):
            unvisited[state] = False
            dt, dr, dc = steps[state].tolist()
            state = (state[0] + dt, state[1] + dr, state[2] + dc)
            path.append(state[1:])
            if state == start:
                break
        else:
            raise LoopLabError(f"boundary walk from state {start} did not close")
        chains.append(_collapse(np.array(path, dtype=np.intp)))
    return chains

def trace_boundary(mask, min_length: float, max_length: float, select: Union[str, int]) -> List[Chain]:
    """
    Ordered closed boundary chains of a binary mask.

    Args:
        mask: 2D array, non-zero = foreground. Not modified.
        min_length, max_length: keep chains with min_length < length < max_length,
            length being the pixel count after collapsing repeats. Use min_length=4,
            max_length=inf to drop only the small accidental loops.
        select: "first" or "second" (1/2 also accepted). Surviving chains come in
            pairs, one per traversal variant of the same boundary; every first or
            every second one is returned.

    Returns:
        list of (n+1, 2) integer (row, col) arrays, first row == last row.
        Empty for an empty mask, an empty length range, or when nothing survives.
    """
    try:
        offset = _SELECT[select]
    except (KeyError, TypeError):
        raise InvalidInputError(f"select must be 'first' or 'second', got {select!r}") from None

    if not min_length < max_length:
        return []
    chains = trace_all_chains(mask)
    kept = [c for c in chains if min_length < chain_length(c) < max_length]
    selected = kept[offset::2]
    logger.debug("traced %d chains, %d within length range, %d selected", len(chains), len(kept), len(selected))
    return selected
