# io_save_load.py
# load/save helpers

from PIL import Image
import numpy as np, pathlib as _p

_KEEP_MODES = ("L", "I", "I;16", "I;16B", "I;16L", "F")

def load_gray(path: str) -> np.ndarray:
    """Grey image as an array; 16-bit/float images keep their depth, colour goes to 8-bit L."""
    img = Image.open(path)
    if img.mode not in _KEEP_MODES:
        img = img.convert('L')
    return np.array(img)

def _jsonable(o):
    if isinstance(o, np.ndarray): return o.tolist()
    if isinstance(o, np.generic): return o.item()
    raise TypeError(f"Object of type {type(o).__name__} is not JSON serializable")

def save_json(path: str, obj: dict):
    import json, os
    _p.Path(os.path.dirname(path) or ".").mkdir(parents=True, exist_ok=True)
    with open(path, 'w') as f: json.dump(obj, f, ensure_ascii=False, indent=2, default=_jsonable)
