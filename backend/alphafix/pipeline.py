"""Main image processing pipeline."""
import json
import logging
from pathlib import Path
from typing import Optional, Dict, Any
import numpy as np
from PIL import Image

from alphafix.io import load_image_rgba, save_image_with_icc, get_icc_profile
from alphafix.alpha_fix import fix_alpha

logger = logging.getLogger(__name__)


def _append_jsonl(log_jsonl: Path, record: Dict[str, Any]) -> None:
    log_jsonl.parent.mkdir(parents=True, exist_ok=True)
    with open(log_jsonl, "a", encoding="utf-8") as f:
        f.write(json.dumps(record, ensure_ascii=False) + "\n")


def process_one(
    src: Path,
    dst: Path,
    opaque: bool = False,
    seed_all: bool = True,
    log_jsonl: Optional[Path] = None,
) -> Dict[str, Any]:
    """
    Fix alpha bleeding in a single image file.

    Pipeline steps:
    1. Load image and extract its ICC profile
    2. Skip images without an alpha channel (nothing to bleed)
    3. Bleed opaque colors into transparent pixels
    4. Save with ICC profile preservation

    Args:
        src: Source image path
        dst: Destination image path (may equal src)
        opaque: Make bled pixels fully opaque
        seed_all: Seed every transparent neighbor of the opaque region
        log_jsonl: Optional path to log JSONL file

    Returns:
        Dictionary with processing metadata

    Raises:
        RuntimeError: If the image cannot be loaded, fixed or saved
    """
    try:
        pil = load_image_rgba(src)
        logger.info("Opened image, path: %s", src)
        icc = get_icc_profile(pil)
        meta: Dict[str, Any] = {
            "src": str(src),
            "w": pil.width,
            "h": pil.height,
        }

        if pil.mode != "RGBA":
            logger.warning("No alpha channel, skipping: %s", src)
            meta.update({"ok": True, "skipped": True})
        else:
            logger.info("Fixing image, path: %s", dst)
            arr = np.array(pil)
            stats = fix_alpha(arr, opaque=opaque, seed_all=seed_all)
            fixed = Image.fromarray(arr)
            save_image_with_icc(fixed, dst, icc)
            logger.info("Saved image, path: %s", dst)
            meta.update({
                "dst": str(dst),
                "ok": True,
                "skipped": False,
                "opaque": opaque,
                **stats._asdict(),
            })

        if log_jsonl:
            _append_jsonl(log_jsonl, meta)

        return meta

    except Exception as e:
        error_msg = f"{src}: {e}"
        error_meta = {
            "src": str(src),
            "error": str(e),
            "ok": False
        }

        if log_jsonl:
            try:
                _append_jsonl(log_jsonl, error_meta)
            except OSError:
                logger.warning("Can't write log, path: %s", log_jsonl)

        # Re-raise with context
        raise RuntimeError(error_msg) from e
