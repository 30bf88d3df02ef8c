# pipeline.py
# Batch driver: image glob -> segmentation -> featuring -> per-frame JSON (+ optional SVG).

from __future__ import annotations
import glob, logging, os
from typing import Dict, List

from .binarise import segment
from .features import feature_connected_components
from .io_save_load import load_gray, save_json
from .params import FeatureParams, SegmentParams
from .svg import write_svg

logger = logging.getLogger(__name__)


def extract_features(
    input_glob: str,
    out_dir: str = "out/features",
    segment_params: SegmentParams | None = None,
    feature_params: FeatureParams | None = None,
    export_svg: bool = False,
) -> List[Dict]:
    """
    For each file (sorted), frame numbers starting at 1:
      - load, segment and featurise
      - write <name>_features.json (and <name>_features.svg if export_svg)
    Writes features_table.json with one row per feature, the input for a
    downstream tracker, and returns those rows.
    """
    os.makedirs(out_dir, exist_ok=True)
    files = sorted(glob.glob(input_glob))
    rows: List[Dict] = []
    for frame, path in enumerate(files, start=1):
        if (frame - 1) % 10 == 0:
            logger.info("Extracting features from frame %d out of %d", frame, len(files))
        gray = load_gray(path)
        bw = segment(gray, segment_params)
        feats = feature_connected_components(bw, feature_params)

        name = os.path.splitext(os.path.basename(path))[0]
        save_json(
            os.path.join(out_dir, name + "_features.json"),
            {"file": os.path.basename(path), "frame": frame, "features": [f.to_dict() for f in feats]},
        )
        if export_svg:
            write_svg(
                size=gray.shape[::-1],
                out_path=os.path.join(out_dir, name + "_features.svg"),
                chains=[f.boundary for f in feats if f.boundary is not None],
                contours=[f.shape.position for f in feats if f.shape is not None],
            )

        for i, f in enumerate(feats, start=1):
            rows.append({
                "file": os.path.basename(path),
                "centroid_row": f.centroid[0],
                "centroid_col": f.centroid[1],
                "area": f.area,
                "frame": frame,
                "feature_id": i,
            })

    save_json(os.path.join(out_dir, "features_table.json"), {"results": rows})
    logger.info("Done with the extraction: %d features from %d frames", len(rows), len(files))
    return rows
