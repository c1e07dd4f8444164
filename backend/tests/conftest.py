import os
import tempfile

import numpy as np
import pytest
from PIL import Image

# app.py creates its directories at import time
_service_root = tempfile.mkdtemp(prefix="alphafix-tests-")
os.environ.setdefault("ALPHAFIX_INPUT_DIR", os.path.join(_service_root, "inputs"))
os.environ.setdefault("ALPHAFIX_OUTPUT_DIR", os.path.join(_service_root, "output"))


@pytest.fixture
def sprite_array():
    """4x3 sprite: opaque red left column, opaque blue right column, black transparent middle."""
    arr = np.zeros((3, 4, 4), dtype=np.uint8)
    arr[:, 0] = (255, 0, 0, 255)
    arr[:, 3] = (0, 0, 255, 255)
    return arr


@pytest.fixture
def sprite_png(tmp_path, sprite_array):
    path = tmp_path / "sprite.png"
    Image.fromarray(sprite_array).save(path)
    return path
