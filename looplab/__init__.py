# looplab/__init__.py

# I/O
from .io_save_load import load_gray, save_json

# Parameters & errors
from .params import N_SAMPLES, SMOOTHING_SCALE, SegmentParams, FeatureParams
from .errors import LoopLabError, InvalidInputError, FittingError

# Core: tracing, arclength, shape fitting
from .trace import trace_boundary, trace_all_chains, border_types, chain_length
from .arclength import contour_length, closed_points
from .curves import PeriodicCurve, fit_periodic, fit_winding
from .shape import LoopShape, loop_shape, smoothing_parameter

# Segmentation, featuring & batch
from .binarise import binarise, segment
from .features import Feature, feature_connected_components
from .pipeline import extract_features
from .svg import write_svg
