# curves.py
# Evaluable periodic piecewise-cubic curves over arclength (scipy PPoly based).

from __future__ import annotations
from dataclasses import dataclass
import numpy as np
from scipy.interpolate import CubicSpline, PPoly


@dataclass(frozen=True)
class PeriodicCurve:
    """
    f(s) = ppoly(s) + slope * s + offset, with ppoly wrapping periodically.

    slope is non-zero only for unwrapped angles, where it carries the net turning
    per unit length (2*pi*winding / period) so that the periodic part stays periodic.
    """
    ppoly: PPoly
    slope: float = 0.0
    offset: float = 0.0

    @property
    def period(self) -> float:
        return float(self.ppoly.x[-1] - self.ppoly.x[0])

    def __call__(self, s):
        s = np.asarray(s, dtype=float)
        out = self.ppoly(s)
        if self.slope or self.offset:
            out = out + self.slope * s + self.offset
        return out

    def derivative(self) -> "PeriodicCurve":
        return PeriodicCurve(self.ppoly.derivative(), 0.0, self.slope)


def fit_periodic(s, values) -> PeriodicCurve:
    """Exact periodic cubic interpolant; values[0] must equal values[-1]."""
    return PeriodicCurve(CubicSpline(s, values, axis=0, bc_type="periodic"))

def fit_winding(s, angles) -> PeriodicCurve:
    """Interpolate an unwrapped angle that gains a net turn over one period."""
    s = np.asarray(s, dtype=float)
    angles = np.asarray(angles, dtype=float)
    span = s[-1] - s[0]
    slope = (angles[-1] - angles[0]) / span
    residual = angles - slope * (s - s[0])
    residual[-1] = residual[0]
    curve = fit_periodic(s, residual)
    return PeriodicCurve(curve.ppoly, slope, -slope * s[0])
