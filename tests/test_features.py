import json
import logging

import numpy as np
import pytest

from looplab.features import feature_connected_components
from looplab.params import FeatureParams


@pytest.fixture
def two_rectangles():
    bw = np.zeros((60, 80), dtype=bool)
    bw[5:25, 10:40] = True     # 20 x 30
    bw[35:55, 50:70] = True    # 20 x 20
    return bw


def test_region_properties(two_rectangles):
    feats = feature_connected_components(two_rectangles)
    assert len(feats) == 2
    first, second = feats
    assert first.area == 600
    assert second.area == 400
    assert first.centroid == pytest.approx((14.5, 24.5))
    assert first.bbox == (5, 10, 25, 40)
    assert first.solidity == pytest.approx(1.0)


def test_boundaries_are_in_image_coordinates(two_rectangles):
    for feat in feature_connected_components(two_rectangles):
        r0, c0, r1, c1 = feat.bbox
        b = feat.boundary
        assert np.array_equal(b[0], b[-1])
        assert b[:, 0].min() == r0 and b[:, 0].max() == r1 - 1
        assert b[:, 1].min() == c0 and b[:, 1].max() == c1 - 1
        assert two_rectangles[b[:, 0], b[:, 1]].all()
        assert len(b) - 1 == 2 * ((r1 - r0) + (c1 - c0)) - 4


def test_shapes_are_fitted(two_rectangles):
    for feat in feature_connected_components(two_rectangles):
        assert feat.shape is not None
        assert feat.shape.position.shape == (200, 2)
        assert abs(feat.shape.winding) == 1


def test_to_dict_is_json_ready(two_rectangles):
    feats = feature_connected_components(two_rectangles)
    d = json.loads(json.dumps(feats[0].to_dict()))
    assert d["area"] == 600
    assert len(d["curvature"]) == 200
    assert len(d["position"][0]) == 2


def test_object_without_surviving_trace(two_rectangles, caplog):
    params = FeatureParams(min_length=4, max_length=80, select="first")
    with caplog.at_level(logging.WARNING, logger="looplab.features"):
        feats = feature_connected_components(two_rectangles, params)
    big, small = feats
    assert big.boundary is None and big.shape is None
    assert small.boundary is not None and small.shape is not None
    assert "no boundary" in caplog.text
    assert big.to_dict()["boundary"] is None
