# features.py
# Per-object featuring: region properties, traced boundary and fitted loop shape.

from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple
import numpy as np
from skimage.measure import label as sklabel, regionprops

from .params import FeatureParams
from .shape import LoopShape, loop_shape
from .trace import trace_boundary

logger = logging.getLogger(__name__)


@dataclass
class Feature:
    label: int
    centroid: Tuple[float, float]            # (row, col), same order as boundary pixels
    area: float
    solidity: float
    bbox: Tuple[int, int, int, int]          # (min_row, min_col, max_row, max_col), max exclusive
    boundary: Optional[np.ndarray] = None    # (n+1,2) ordered (row, col) in image coordinates
    shape: Optional[LoopShape] = None

    def to_dict(self) -> Dict:
        d = {
            "label": self.label,
            "centroid": list(self.centroid),
            "area": self.area,
            "solidity": self.solidity,
            "bbox": list(self.bbox),
            "boundary": None if self.boundary is None else self.boundary.tolist(),
        }
        if self.shape is not None:
            d.update(
                arclength=self.shape.arclength.tolist(),
                position=self.shape.position.tolist(),
                tangent_angle=self.shape.tangent_angle.tolist(),
                curvature=self.shape.curvature.tolist(),
            )
        return d


def object_boundary(object_mask: np.ndarray, origin: Tuple[int, int], params: FeatureParams) -> Optional[np.ndarray]:
    """First selected boundary chain of a cropped object mask, shifted by origin (row, col)."""
    chains = trace_boundary(object_mask, params.min_length, params.max_length, params.select)
    if not chains:
        return None
    return chains[0] + np.asarray(origin, dtype=np.intp)

def feature_connected_components(bw: np.ndarray, params: FeatureParams | None = None) -> List[Feature]:
    """
    Featurise the 8-connected components of a binary image.
    Each object is traced on its own cropped mask, so neighbours never leak into its
    boundary, then smoothed with loop_shape. Objects without a surviving trace keep
    boundary/shape = None.
    """
    params = params or FeatureParams()
    labels = sklabel(np.asarray(bw) != 0, connectivity=2)
    features: List[Feature] = []
    for region in regionprops(labels):
        r0, c0, r1, c1 = (int(v) for v in region.bbox)
        feat = Feature(
            label=int(region.label),
            centroid=(float(region.centroid[0]), float(region.centroid[1])),
            area=float(region.area),
            solidity=float(region.solidity),
            bbox=(r0, c0, r1, c1),
        )
        boundary = object_boundary(region.image, (r0, c0), params)
        if boundary is None:
            logger.warning("object %d: no boundary with length in (%s, %s)", feat.label, params.min_length, params.max_length)
        else:
            feat.boundary = boundary
            feat.shape = loop_shape(boundary)
        features.append(feat)
    return features
