"""Image I/O operations with ICC profile preservation."""
from pathlib import Path
from typing import Optional
from PIL import Image

# Formats Pillow writes losslessly with a full alpha channel
SUPPORTED_SUFFIXES = (".png", ".webp", ".tga", ".tif", ".tiff")

# WebP is lossy by default and drops the RGB of fully transparent pixels
WEBP_PARAMS = {"lossless": True, "exact": True}


def has_alpha(pil_img: Image.Image) -> bool:
    """Check whether an image carries transparency (alpha band or key)."""
    return "A" in pil_img.getbands() or "transparency" in pil_img.info


def load_image_rgba(path: Path) -> Image.Image:
    """
    Load an image and convert it to RGBA mode.

    Images without any transparency come back as RGB, since there is
    nothing to bleed into.

    Args:
        path: Path to the image file

    Returns:
        PIL Image in RGBA (or RGB) mode
    """
    img = Image.open(path)
    target = "RGBA" if has_alpha(img) else "RGB"
    if img.mode == target:
        img.load()
    else:
        # P, L, LA, I;16 and friends
        img = img.convert(target)
    return img


def save_image_with_icc(
    img: Image.Image,
    output_path: Path,
    icc_profile: Optional[bytes] = None
) -> None:
    """
    Save an image with optional ICC profile preservation.

    Args:
        img: PIL Image to save
        output_path: Destination path
        icc_profile: Optional ICC profile bytes to embed
    """
    params = dict(WEBP_PARAMS) if output_path.suffix.lower() == ".webp" else {}
    if icc_profile:
        params["icc_profile"] = icc_profile
    output_path.parent.mkdir(parents=True, exist_ok=True)
    img.save(output_path, **params)


def get_icc_profile(pil_img: Image.Image) -> Optional[bytes]:
    """Extract the ICC profile of a PIL Image, or None if it has none."""
    return pil_img.info.get("icc_profile")


def is_supported(path: Path) -> bool:
    """Check whether the file extension is one alphafix can write back."""
    return path.suffix.lower() in SUPPORTED_SUFFIXES
