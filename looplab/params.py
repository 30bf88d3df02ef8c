# params.py
# Tunable constants and parameter bundles (one place).

from __future__ import annotations
import math
from dataclasses import dataclass
from typing import Optional, Tuple, Union

# ---------------------------
# Shape fitting
# ---------------------------

N_SAMPLES: int = 200          # resampled points along each fitted contour

# csaps-style smoothing parameter p = 1 / (1 + dbar**3 / SMOOTHING_SCALE), dbar = mean
# point spacing. Empirically tuned on pixel-pitch contours; not an optimised bandwidth.
SMOOTHING_SCALE: float = 0.06

# open contours shorter than this are linearly subdivided before smoothing
MIN_FIT_POINTS: int = 16

# ---------------------------
# Segmentation / featuring (batch defaults)
# ---------------------------

@dataclass
class SegmentParams:
    invert: bool = False
    threshold: Optional[float] = None           # None -> Otsu
    area_range: Tuple[float, float] = (2000, math.inf)
    close_radius: int = 3

@dataclass
class FeatureParams:
    min_length: float = 4
    max_length: float = math.inf
    select: Union[str, int] = "first"
