"""FastAPI application for alphafix."""
import logging
import os
from pathlib import Path
from fastapi import FastAPI, UploadFile, File, Form, HTTPException
from fastapi.responses import JSONResponse, FileResponse, Response
from fastapi.middleware.cors import CORSMiddleware
from alphafix.io import is_supported, SUPPORTED_SUFFIXES
from alphafix.paths import get_save_path
from alphafix.pipeline import process_one

logger = logging.getLogger(__name__)

app = FastAPI(
    title="alphafix",
    description="Bleed opaque colors into transparent pixels of uploaded images.",
    version="0.1.0"
)

# CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"]
)

# Directory setup
OUTPUT_DIR = Path(os.environ.get("ALPHAFIX_OUTPUT_DIR", "output"))
OUTPUT_DIR.mkdir(parents=True, exist_ok=True)

INPUT_DIR = Path(os.environ.get("ALPHAFIX_INPUT_DIR", "inputs"))
INPUT_DIR.mkdir(parents=True, exist_ok=True)

OUTPUT_SUFFIX = "_fix"


@app.post("/fix")
async def fix(
    file: UploadFile = File(...),
    opaque: bool = Form(False),
    legacy_seeding: bool = Form(False),
) -> JSONResponse:
    """
    Bleed opaque colors into the transparent pixels of an uploaded image.

    Args:
        file: Uploaded image file (png, webp, tga or tiff)
        opaque: Make bled pixels fully opaque (default: False)
        legacy_seeding: Seed only one transparent neighbor per opaque pixel

    Returns:
        JSON response with processing metadata
    """
    try:
        if not file.filename:
            raise HTTPException(status_code=400, detail="Filename is required")
        src_path = INPUT_DIR / Path(file.filename).name
        if not is_supported(src_path):
            raise HTTPException(
                status_code=400,
                detail=f"Unsupported file type, expected one of: {', '.join(SUPPORTED_SUFFIXES)}"
            )

        content = await file.read()
        if len(content) == 0:
            raise HTTPException(status_code=400, detail="Empty file")
        with src_path.open("wb") as f:
            f.write(content)

        output_path = get_save_path(
            src_path,
            directory=OUTPUT_DIR,
            append=OUTPUT_SUFFIX,
            opaque=opaque,
        )
        meta = process_one(
            src=src_path,
            dst=output_path,
            opaque=opaque,
            seed_all=not legacy_seeding,
        )

        return JSONResponse({"ok": True, "meta": meta})

    except HTTPException:
        raise
    except Exception as e:
        logger.warning("Fix failed: %s", e)
        return JSONResponse(
            {"ok": False, "error": str(e)},
            status_code=500
        )


@app.get("/download", response_model=None)
async def download(path: str) -> Response:
    """
    Download a fixed image file.

    Args:
        path: Path (or file name) of the result to download

    Returns:
        File response or error JSON
    """
    # Only files in OUTPUT_DIR are served
    p = OUTPUT_DIR / Path(path).name

    if not p.exists() or not p.is_file():
        return JSONResponse(
            {"ok": False, "error": "File not found"},
            status_code=404
        )

    return FileResponse(p)
