# arclength.py
# polyline contour length + validation of closed point sequences

from __future__ import annotations
import numpy as np

from .errors import InvalidInputError

# second/first singular value ratio below which a point set counts as collinear
_COLLINEAR_TOL = 1e-9


def contour_length(points) -> np.ndarray:
    """Cumulative point-to-point distance; same length as ``points``, first entry 0."""
    pts = np.asarray(points, dtype=float)
    if len(pts) == 0:
        return np.zeros(0)
    ds = np.hypot(*np.diff(pts, axis=0).T)
    return np.concatenate(([0.0], np.cumsum(ds)))

def closed_points(points) -> np.ndarray:
    """
    Float (n,2) copy of a closed point sequence, ready for fitting.

    Consecutive duplicates are dropped and the sequence is closed (last == first)
    if it is not already. Raises InvalidInputError for fewer than 4 distinct points,
    zero total length, non-finite coordinates or collinear points.
    """
    pts = np.array(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 2:
        raise InvalidInputError(f"expected an (n, 2) point sequence, got shape {pts.shape}")
    if not np.all(np.isfinite(pts)):
        raise InvalidInputError("point sequence contains non-finite coordinates")

    if len(pts) > 1:
        pts = pts[np.r_[True, np.any(pts[1:] != pts[:-1], axis=1)]]
    distinct = np.unique(pts, axis=0)
    if len(distinct) < 4:
        raise InvalidInputError(f"need at least 4 distinct points, got {len(distinct)}")

    centred = distinct - distinct.mean(axis=0)
    sv = np.linalg.svd(centred, compute_uv=False)
    if sv[1] <= _COLLINEAR_TOL * sv[0]:
        raise InvalidInputError("points are collinear")

    if np.any(pts[0] != pts[-1]):
        pts = np.vstack([pts, pts[:1]])
    if contour_length(pts)[-1] <= 0:
        raise InvalidInputError("point sequence has zero length")
    return pts
