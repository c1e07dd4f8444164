"""alphafix - Bleed opaque colors into transparent pixels of images."""
from alphafix.alpha_fix import (
    BleedError,
    BleedStats,
    PixelState,
    bleed_image,
    fix_alpha,
    set_alpha,
    set_image_alpha,
)
from alphafix.io import load_image_rgba, save_image_with_icc
from alphafix.paths import get_save_path
from alphafix.pipeline import process_one

__version__ = "0.1.0"
__all__ = [
    "BleedError",
    "BleedStats",
    "PixelState",
    "bleed_image",
    "fix_alpha",
    "set_alpha",
    "set_image_alpha",
    "load_image_rgba",
    "save_image_with_icc",
    "get_save_path",
    "process_one",
]
