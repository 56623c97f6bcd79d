from __future__ import annotations

import logging
import time
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from fastapi import FastAPI, File, HTTPException, Query, Request, UploadFile
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel

from . import __version__
from .airlines import search_airlines
from .config import CORS_ORIGINS, HOST, OCR_MODEL, PORT
from .errors import ImageDecodeError, OCRError
from .explainer import emoji_legend, explain
from .extraction_engine import extractor
from .logging_utils import configure_logging, log_event, new_request_id
from .models import AirlineRecommendation, AnalysisResult, BookabilityResult, EmojiBadge
from .pipeline import FlightPointPipeline
from .resolver import resolve

# ------------------------------------------------------------------------------
# APP + LOGGING SETUP
# ------------------------------------------------------------------------------

configure_logging()
logger = logging.getLogger("pointpath.api")

app = FastAPI(title="PointPath", version=__version__)

app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_origin_regex=r"http://localhost:\d+",
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

pipeline = FlightPointPipeline()

logger.info("Starting PointPath server (ocr_model=%s)", OCR_MODEL)


class TextRequest(BaseModel):
    text: str = ""


# ------------------------------------------------------------------------------
# REQUEST LOGGING MIDDLEWARE (Loki-ready)
# ------------------------------------------------------------------------------

@app.middleware("http")
async def request_logging_middleware(request: Request, call_next):
    rid = new_request_id()
    start = time.time()

    log_event(
        logger,
        "http_request_started",
        method=request.method,
        path=request.url.path,
        client_ip=request.client.host if request.client else None,
        user_agent=request.headers.get("user-agent"),
        request_id=rid,
    )

    status_code = 500
    try:
        response = await call_next(request)
        status_code = response.status_code
        response.headers["X-Request-ID"] = rid
        return response
    finally:
        log_event(
            logger,
            "http_request_finished",
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=int((time.time() - start) * 1000),
            request_id=rid,
        )


async def _read_upload(file: UploadFile) -> bytes:
    data = await file.read()
    if not data:
        log_event(logger, "empty_upload", level=logging.WARNING, field_filename=file.filename)
        raise HTTPException(400, "Empty file")
    return data


async def _analyze_upload(data: bytes) -> AnalysisResult:
    try:
        return await pipeline.analyze_image(data)
    except ImageDecodeError as e:
        log_event(logger, "image_decode_failed", level=logging.WARNING, error=str(e))
        raise HTTPException(422, str(e))
    except OCRError as e:
        log_event(logger, "ocr_failed", level=logging.ERROR, error=str(e))
        raise HTTPException(502, str(e))


# ------------------------------------------------------------------------------
# ROUTES
# ------------------------------------------------------------------------------

@app.get("/health")
async def health() -> Dict[str, Any]:
    return {
        "status": "ok",
        "version": app.version,
        "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
    }


@app.post("/extract")
async def extract_text(body: TextRequest) -> Dict[str, Any]:
    """Flight fields from pasted text; unknown fields are omitted."""
    return extractor.extract(body.text).to_payload()


@app.post("/extract/image", response_model=AnalysisResult, response_model_by_alias=True)
async def extract_image(file: UploadFile = File(...)):
    log_event(
        logger,
        "screenshot_received",
        field_filename=file.filename,
        content_type=file.content_type,
    )
    data = await _read_upload(file)
    return await _analyze_upload(data)


@app.get("/partners/{airline}", response_model=BookabilityResult, response_model_by_alias=True)
async def partners(airline: str):
    return resolve(airline)


@app.get(
    "/recommendation/{airline}",
    response_model=AirlineRecommendation,
    response_model_by_alias=True,
)
async def recommendation(airline: str):
    result = resolve(airline)
    rec = explain(airline, result)
    if rec is None:
        raise HTTPException(404, result.message)
    return rec


@app.post("/analyze", response_model=AnalysisResult, response_model_by_alias=True)
async def analyze(body: TextRequest):
    return pipeline.analyze_text(body.text)


@app.get("/airlines")
async def airlines(q: Optional[str] = Query(None, description="Case-insensitive name filter")) -> List[str]:
    return search_airlines(q or "")


@app.get("/legend", response_model=List[EmojiBadge])
async def legend():
    return emoji_legend()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("pointpath.api:app", host=HOST, port=PORT)
