# shape.py
# Smooth, periodic, arclength-resampled description of a closed contour:
# position, tangent angle and curvature, plus their evaluable curves.

from __future__ import annotations
import logging
from contextlib import contextmanager
from dataclasses import dataclass
import numpy as np
from scipy.interpolate import make_smoothing_spline

from .arclength import contour_length, closed_points
from .curves import PeriodicCurve, fit_periodic, fit_winding
from .errors import FittingError, InvalidInputError
from .params import N_SAMPLES, SMOOTHING_SCALE, MIN_FIT_POINTS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoopShape:
    """
    Sampled contour plus its evaluable curves.

    position_curve wraps on its knot period (position_curve.period), which can differ
    slightly from total_length; angle_curve and curvature_curve wrap on total_length,
    the recomputed arclength of the samples.
    """
    arclength: np.ndarray        # (n,) true arclength of the samples, starts at 0
    position: np.ndarray         # (n,2) resampled smoothed contour
    tangent_angle: np.ndarray    # (n,) unwrapped, radians
    curvature: np.ndarray        # (n,) signed, 1/length
    position_curve: PeriodicCurve
    angle_curve: PeriodicCurve
    curvature_curve: PeriodicCurve

    @property
    def total_length(self) -> float:
        return float(self.arclength[-1])

    @property
    def winding(self) -> int:
        """Net tangent turning in full turns (+1 / -1 for a simple closed curve)."""
        return int(round((self.tangent_angle[-1] - self.tangent_angle[0]) / (2 * np.pi)))


@contextmanager
def _stage(name: str):
    try:
        yield
    except (ValueError, np.linalg.LinAlgError) as exc:
        raise FittingError(name, str(exc)) from exc

def _check_finite(stage: str, *arrays):
    for a in arrays:
        if not np.all(np.isfinite(a)):
            raise FittingError(stage, "non-finite values")

def smoothing_parameter(points) -> float:
    """csaps-style p in (0,1] from the mean spacing of an open point sequence."""
    dbar = float(np.mean(np.diff(contour_length(points))))
    return 1.0 / (1.0 + dbar ** 3 / SMOOTHING_SCALE)

def _densify(pts: np.ndarray, min_points: int) -> np.ndarray:
    # linear subdivision of each edge of a closed sequence
    n = len(pts) - 1
    if n >= min_points:
        return pts
    k = -(-min_points // n)
    t = np.arange(k) / k
    seg = pts[:-1, None, :] + t[None, :, None] * np.diff(pts, axis=0)[:, None, :]
    return np.vstack([seg.reshape(-1, 2), pts[-1:]])

def loop_shape(points, n_samples: int = N_SAMPLES) -> LoopShape:
    """
    Fit a closed contour and resample it uniformly in arclength.

    1) open cubic smoothing spline of the raw points vs raw arclength
    2) drop the two ends (where the open fit is worst) and close on the new first point
    3) periodic cubic interpolation of that closed set
    4) resample at n_samples uniform arclengths; recompute the true arclength
    5) tangent angle from the spline derivative (unwrapped), curvature from the
       derivative of a periodic fit of that angle

    Args:
        points: (n,2) closed or open ordered contour, e.g. a traced (row, col) chain.
        n_samples: number of output samples.

    Raises:
        InvalidInputError: fewer than 4 distinct points, collinear or zero-length input.
        FittingError: a spline stage failed; .stage is "smoothing",
            "periodic-interpolation" or "differentiation".
    """
    if n_samples < 4:
        raise InvalidInputError(f"n_samples must be at least 4, got {n_samples}")
    pts = _densify(closed_points(points), MIN_FIT_POINTS)

    raw = pts[:-1]
    rs = contour_length(raw)
    p = smoothing_parameter(raw)
    lam = (1.0 - p) / p
    logger.debug("fitting %d points, p=%.4g (lam=%.4g)", len(raw), p, lam)

    with _stage("smoothing"):
        smoothed = np.column_stack([make_smoothing_spline(rs, raw[:, k], lam=lam)(rs) for k in range(2)])
    _check_finite("smoothing", smoothed)

    # fold the open-fit seam into the interior of the periodic fit
    closed = np.vstack([smoothed[1:-1], smoothed[1:2]])

    with _stage("periodic-interpolation"):
        ts = contour_length(closed)
        position_curve = fit_periodic(ts, closed)
        total = contour_length(position_curve(ts))[-1]
        position = position_curve(np.linspace(0.0, total, n_samples))
        arclength = contour_length(position)
    _check_finite("periodic-interpolation", position, arclength)

    with _stage("differentiation"):
        tangent = position_curve.derivative()(arclength)
        norm = np.hypot(tangent[:, 0], tangent[:, 1])
        if not np.all(norm > 0):
            raise FittingError("differentiation", "zero-length tangent")
        tangent = tangent / norm[:, None]
        theta = np.unwrap(np.arctan2(tangent[:, 1], tangent[:, 0]))
        angle_curve = fit_winding(arclength, theta)
        curvature_curve = angle_curve.derivative()
        kappa = curvature_curve(arclength)
    _check_finite("differentiation", theta, kappa)

    return LoopShape(
        arclength=arclength,
        position=position,
        tangent_angle=theta,
        curvature=kappa,
        position_curve=position_curve,
        angle_curve=angle_curve,
        curvature_curve=curvature_curve,
    )
