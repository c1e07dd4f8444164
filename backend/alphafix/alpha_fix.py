"""Alpha bleeding: propagate opaque colors into fully transparent pixels.

Transparent pixels usually carry black or undefined RGB data. Resampling
filters blend that data into visible edges and produce dark halos. The
functions here fill every transparent pixel that is 8-connected to an opaque
region with the average color of its already resolved neighbors, one
breadth-first layer at a time.
"""
import enum
import logging
from typing import Iterator, List, NamedTuple, Tuple

import numpy as np
from PIL import Image

logger = logging.getLogger(__name__)

Coord = Tuple[int, int]

# Moore neighborhood as (dx, dy), starting east
NEIGHBORS: Tuple[Coord, ...] = (
    (1, 0),
    (1, -1),
    (0, -1),
    (-1, -1),
    (-1, 0),
    (-1, 1),
    (0, 1),
    (1, 1),
)


class PixelState(enum.IntEnum):
    """Lifecycle of a pixel during one bleed run."""
    unresolved = 0
    queued = 1
    resolved = 2


class BleedError(ValueError):
    """Raised when the bitmap or state grid breaks the bleed contract."""


class BleedStats(NamedTuple):
    """Summary of one bleed run."""
    rounds: int
    seeded: int
    bled: int
    unreachable: int


def _check_bitmap(bitmap: np.ndarray) -> None:
    if not isinstance(bitmap, np.ndarray):
        raise BleedError(f"bitmap must be a numpy array, got {type(bitmap).__name__}")
    if bitmap.ndim != 3 or bitmap.shape[2] != 4:
        raise BleedError(f"bitmap must have shape (height, width, 4), got {bitmap.shape}")
    if bitmap.dtype != np.uint8:
        raise BleedError(f"bitmap must be uint8, got {bitmap.dtype}")
    if not bitmap.flags.writeable:
        raise BleedError("bitmap is read-only")


def _check_alpha(alpha: int) -> None:
    if isinstance(alpha, (bool, np.bool_)) or not isinstance(alpha, (int, np.integer)):
        raise BleedError(f"alpha must be an integer, got {alpha!r}")
    if not 0 <= alpha <= 255:
        raise BleedError(f"alpha must be within 0..255, got {alpha}")


def neighbors(x: int, y: int, width: int, height: int) -> Iterator[Coord]:
    """Yield the in-bounds Moore neighbors of (x, y) in NEIGHBORS order."""
    for dx, dy in NEIGHBORS:
        x1 = x + dx
        y1 = y + dy
        if 0 <= x1 < width and 0 <= y1 < height:
            yield x1, y1


def classify(bitmap: np.ndarray) -> np.ndarray:
    """
    Build the state grid for a bitmap.

    Pixels with alpha > 0 are resolved (their color is final), every other
    pixel starts unresolved.

    Args:
        bitmap: RGBA array of shape (height, width, 4)

    Returns:
        uint8 array of shape (height, width) holding PixelState values
    """
    alpha = bitmap[..., 3]
    states = np.full(alpha.shape, PixelState.unresolved, dtype=np.uint8)
    states[alpha > 0] = PixelState.resolved
    return states


def seed_frontier(states: np.ndarray, seed_all: bool = True) -> List[Coord]:
    """
    Queue the transparent pixels that touch a resolved pixel.

    Resolved pixels are scanned in row-major order. With ``seed_all`` every
    unresolved neighbor is queued; without it only the first one found per
    resolved pixel is, which leaves the rest for the propagator to discover.

    Args:
        states: State grid from classify(), updated in place
        seed_all: Queue all unresolved neighbors instead of the first only

    Returns:
        Initial wavefront as a list of (x, y) coordinates
    """
    height, width = states.shape
    frontier: List[Coord] = []
    # argwhere walks the grid row by row
    for y, x in np.argwhere(states == PixelState.resolved).tolist():
        for x1, y1 in neighbors(x, y, width, height):
            if states[y1, x1] == PixelState.unresolved:
                states[y1, x1] = PixelState.queued
                frontier.append((x1, y1))
                if not seed_all:
                    break
    return frontier


def propagate(
    bitmap: np.ndarray,
    states: np.ndarray,
    frontier: List[Coord],
    alpha: int,
) -> int:
    """
    Resolve the wavefront layer by layer until nothing is left to discover.

    Each queued pixel gets the integer-truncated mean RGB of its resolved
    neighbors and the given alpha. Unresolved neighbors found on the way form
    the next layer. A layer is marked resolved only once all of its pixels
    have been averaged, so no pixel ever averages over a sibling from its own
    layer. A pixel without any resolved neighbor keeps its color.

    Args:
        bitmap: RGBA array, modified in place
        states: State grid, modified in place
        frontier: Initial wavefront (all entries must be queued)
        alpha: Alpha written to every bled pixel

    Returns:
        Number of rounds run
    """
    if states.shape != bitmap.shape[:2]:
        raise BleedError(
            f"state grid {states.shape} does not match bitmap {bitmap.shape[:2]}"
        )
    _check_alpha(alpha)
    height, width = states.shape

    current: List[Coord] = list(frontier)
    pending: List[Coord] = []
    rounds = 0
    while current:
        for x, y in current:
            count = r = g = b = 0
            for x1, y1 in neighbors(x, y, width, height):
                state = states[y1, x1]
                if state == PixelState.resolved:
                    r1, g1, b1 = bitmap[y1, x1, :3].tolist()
                    r += r1
                    g += g1
                    b += b1
                    count += 1
                elif state == PixelState.unresolved:
                    states[y1, x1] = PixelState.queued
                    pending.append((x1, y1))
            if count > 0:
                bitmap[y, x] = (r // count, g // count, b // count, alpha)

        for x, y in current:
            states[y, x] = PixelState.resolved

        rounds += 1
        current, pending = pending, current
        pending.clear()
    return rounds


def fix_alpha(
    bitmap: np.ndarray,
    opaque: bool = False,
    seed_all: bool = True,
) -> BleedStats:
    """
    Bleed opaque colors into the transparent pixels of a bitmap, in place.

    Pixels with alpha > 0 are never modified. Transparent pixels reachable
    from them through 8-connected transparent pixels get a propagated color
    and alpha 0, or 255 when ``opaque`` is set. Unreachable pixels (every
    pixel of a fully transparent image, for instance) are left untouched.

    Args:
        bitmap: RGBA uint8 array of shape (height, width, 4)
        opaque: Make bled pixels fully opaque instead of transparent
        seed_all: Seed every transparent neighbor of the opaque region
            (False reproduces the legacy one-seed-per-pixel behavior)

    Returns:
        BleedStats for the run

    Raises:
        BleedError: If the bitmap is not a writeable RGBA uint8 array
    """
    _check_bitmap(bitmap)
    target_alpha = 255 if opaque else 0

    states = classify(bitmap)
    source_count = int((states == PixelState.resolved).sum())
    frontier = seed_frontier(states, seed_all=seed_all)
    logger.debug("Seeded %d pixels from %d opaque pixels", len(frontier), source_count)

    rounds = propagate(bitmap, states, frontier, target_alpha)

    bled = int((states == PixelState.resolved).sum()) - source_count
    unreachable = int((states == PixelState.unresolved).sum())
    stats = BleedStats(rounds, len(frontier), bled, unreachable)
    logger.debug(
        "Bled %d pixels in %d rounds, %d unreachable",
        stats.bled, stats.rounds, stats.unreachable,
    )
    return stats


def set_alpha(bitmap: np.ndarray, alpha: int) -> None:
    """Overwrite the alpha channel of every pixel, leaving colors untouched."""
    _check_bitmap(bitmap)
    _check_alpha(alpha)
    bitmap[..., 3] = alpha


def bleed_image(
    pil_img: Image.Image,
    opaque: bool = False,
    seed_all: bool = True,
) -> Image.Image:
    """
    Return a copy of an RGBA image with opaque colors bled into transparency.

    Args:
        pil_img: Input PIL Image (must be RGBA)
        opaque: Make bled pixels fully opaque
        seed_all: Seed every transparent neighbor of the opaque region

    Returns:
        Bled image, or the input unchanged if it is not RGBA
    """
    if pil_img.mode != "RGBA":
        return pil_img
    arr = np.array(pil_img)
    fix_alpha(arr, opaque=opaque, seed_all=seed_all)
    return Image.fromarray(arr)


def set_image_alpha(pil_img: Image.Image, alpha: int) -> Image.Image:
    """Return an RGBA copy of the image with a uniform alpha channel."""
    arr = np.array(pil_img.convert("RGBA"))
    set_alpha(arr, alpha)
    return Image.fromarray(arr)
