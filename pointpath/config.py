# config.py
import os
from dotenv import load_dotenv
load_dotenv()

from concurrent.futures import ThreadPoolExecutor
import google.generativeai as genai

import logging
from .logging_utils import configure_logging

configure_logging()
logger = logging.getLogger("pointpath.config")

GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")
if not GOOGLE_API_KEY:
    logger.warning("GOOGLE_API_KEY missing - screenshot OCR calls will fail")
else:
    genai.configure(api_key=GOOGLE_API_KEY)

OCR_MODEL = os.getenv("POINTPATH_OCR_MODEL", "gemini-2.0-flash")
OCR_TIMEOUT = int(os.getenv("OCR_TIMEOUT", "30"))
OCR_MAX_RETRIES = int(os.getenv("OCR_MAX_RETRIES", "3"))

MAX_WORKERS = int(os.getenv("MAX_WORKERS", str(min(32, (os.cpu_count() or 4) * 2))))
thread_pool = ThreadPoolExecutor(max_workers=MAX_WORKERS)

CORS_ORIGINS = [
    o.strip()
    for o in os.getenv("CORS_ORIGINS", "http://localhost:3000").split(",")
    if o.strip()
]
HOST = os.getenv("HOST", "0.0.0.0")
PORT = int(os.getenv("PORT", "8001"))

logger.info(
    f"Config: ocr_model={OCR_MODEL}, timeout={OCR_TIMEOUT}s, workers={MAX_WORKERS}"
)
