import math

import numpy as np

from looplab.binarise import binarise, filter_area, segment
from looplab.params import SegmentParams


def bright_blobs():
    gray = np.full((80, 80), 20, dtype=np.uint8)
    gray[10:40, 10:40] = 200     # 900 px object
    gray[60:64, 60:64] = 200     # 16 px speck
    return gray


def test_otsu_threshold_splits_levels():
    fg, thr = binarise(bright_blobs())
    assert 20 <= thr < 200
    assert fg.sum() == 900 + 16


def test_manual_threshold():
    fg, thr = binarise(bright_blobs(), threshold=250)
    assert thr == 250
    assert not fg.any()


def test_area_filter_is_inclusive():
    fg, _ = binarise(bright_blobs())
    assert filter_area(fg, (16, 16)).sum() == 16
    assert filter_area(fg, (17, math.inf)).sum() == 900


def test_segment_drops_small_objects():
    bw = segment(bright_blobs(), SegmentParams(area_range=(100, math.inf), close_radius=2))
    assert bw.dtype == bool
    assert bw[10:40, 10:40].all()
    assert not bw[60:64, 60:64].any()


def test_segment_inverts_dark_objects():
    gray = 255 - bright_blobs()
    bw = segment(gray, SegmentParams(invert=True, area_range=(100, math.inf), close_radius=0))
    assert bw.sum() == 900


def test_closing_bridges_thin_gap():
    gray = bright_blobs()
    gray[12:38, 25] = 20       # one-pixel slit inside the big object
    bw = segment(gray, SegmentParams(area_range=(100, math.inf), close_radius=2))
    assert bw[10:40, 10:40].all()
