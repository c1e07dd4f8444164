"""Command line entry point: fix alpha bleeding in image files."""
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

from alphafix.paths import get_save_path
from alphafix.pipeline import process_one

logger = logging.getLogger("alphafix")


def _parse_args(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="alphafix",
        description="Bleed opaque colors into transparent pixels to avoid dark "
                    "halos when images are scaled.",
    )
    parser.add_argument("paths", nargs="+", help="paths of images to fix (png, webp, tga, tiff)")
    parser.add_argument("--dir", dest="directory", help="write fixed images to this directory")
    parser.add_argument("--append", help="append to the output filenames (avoids overwriting)")
    parser.add_argument(
        "--opaque",
        action="store_true",
        help="set bled pixels to opaque (useful to inspect the result)",
    )
    parser.add_argument(
        "--legacy-seeding",
        action="store_true",
        help="seed only one transparent neighbor per opaque pixel",
    )
    parser.add_argument("--log", dest="log_jsonl", type=Path, help="append JSONL metadata to this file")
    parser.add_argument("-y", "--yes", action="store_true", help="overwrite images without asking")
    parser.add_argument("--verbose", action="store_true", help="debug logging")
    return parser.parse_args(argv)


def _confirm(prompt: str) -> bool:
    try:
        answer = input(f"{prompt} [y/N] ")
    except EOFError:
        return False
    return answer.strip().lower() in ("y", "yes")


def main(argv: Optional[Sequence[str]] = None) -> int:
    args = _parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(message)s",
    )

    jobs: List[tuple] = []
    for path_str in args.paths:
        src = Path(path_str)
        dst = get_save_path(src, args.directory, args.append, args.opaque)
        jobs.append((src, dst))

    in_place = sum(1 for src, dst in jobs if src == dst)
    if in_place and not args.yes:
        if not _confirm(f"Overwrite {in_place} image(s) in place?"):
            logger.info("Aborted.")
            return 1

    failed = 0
    for src, dst in jobs:
        try:
            process_one(
                src,
                dst,
                opaque=args.opaque,
                seed_all=not args.legacy_seeding,
                log_jsonl=args.log_jsonl,
            )
        except RuntimeError as e:
            logger.warning("Can't process image: %s", e)
            failed += 1

    logger.info("Finished.")
    return 1 if failed else 0


if __name__ == "__main__":
    sys.exit(main())
