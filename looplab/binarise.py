# binarise.py
# thresholding, closing & area filtering -> binary mask of objects

from __future__ import annotations
import numpy as np
from skimage.filters import threshold_otsu
from skimage.measure import label as sklabel, regionprops
from skimage.morphology import closing, disk
from skimage.util import invert

from .params import SegmentParams

def binarise(gray: np.ndarray, threshold: float | None = None) -> tuple[np.ndarray, float]:
    if threshold is None:
        threshold = threshold_otsu(gray)
    fg = gray > threshold   # bright = foreground
    return fg, float(threshold)

def filter_area(fg_mask: np.ndarray, area_range) -> np.ndarray:
    """Keep 8-connected components whose pixel area lies within [lo, hi]."""
    lo, hi = area_range
    labels = sklabel(fg_mask, connectivity=2)
    keep = [r.label for r in regionprops(labels) if lo <= r.area <= hi]
    return np.isin(labels, keep)

def segment(gray: np.ndarray, params: SegmentParams | None = None) -> np.ndarray:
    """
    Binary object mask from a grey image:
    optional inversion -> threshold (manual or Otsu) -> closing with a disk -> area filter.
    """
    p = params or SegmentParams()
    img = invert(gray) if p.invert else gray
    fg, _ = binarise(img, p.threshold)
    if p.close_radius > 0:
        fg = closing(fg, disk(p.close_radius)).astype(bool)
    return filter_area(fg, p.area_range)
