"""Output path derivation."""
from pathlib import Path
from typing import Optional, Union

OPAQUE_SUFFIX = "_opaque"


def get_save_path(
    path: Union[str, Path],
    directory: Optional[Union[str, Path]] = None,
    append: Optional[str] = None,
    opaque: bool = False,
) -> Path:
    """
    Derive where a fixed image is written.

    Without any option the input is overwritten in place. Otherwise the file
    goes to ``directory`` (or stays next to the input) and its stem gets
    ``append`` and, in opaque mode, ``_opaque`` added. The extension is kept.

    Args:
        path: Input image path
        directory: Optional output directory
        append: Optional text appended to the file stem
        opaque: Whether bled pixels are made opaque

    Returns:
        Output path
    """
    path = Path(path)
    if directory is None and not append and not opaque:
        return path

    parent = Path(directory) if directory is not None else path.parent
    stem = path.stem
    if append:
        stem += append
    if opaque:
        stem += OPAQUE_SUFFIX
    return parent / (stem + path.suffix)
