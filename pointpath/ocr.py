# ocr.py
from __future__ import annotations

import asyncio
import logging
from typing import Optional

import google.generativeai as genai
from PIL import Image
from tenacity import retry, retry_if_exception_type, stop_after_attempt, wait_exponential

from .config import OCR_MAX_RETRIES, OCR_MODEL, OCR_TIMEOUT, thread_pool
from .errors import ImageDecodeError, OCRError
from .image_processing import ScreenshotPreprocessor
from .logging_utils import get_logger
from .prompts import OCR_SYSTEM_PROMPT, OCR_TRANSCRIBE_PROMPT

logger = get_logger("pointpath.ocr")


class ScreenshotReader:
    """Screenshot -> plain text via Gemini vision. One request in flight per call."""

    def __init__(self, model_name: Optional[str] = None) -> None:
        self.model_name = model_name or OCR_MODEL
        self.preprocessor = ScreenshotPreprocessor()

    async def transcribe(self, image_bytes: bytes) -> str:
        logger.start_timer("ocr_total")
        loop = asyncio.get_running_loop()

        try:
            # OpenCV work is CPU-bound; keep it off the event loop
            image, vtype = await loop.run_in_executor(
                thread_pool, self.preprocessor.prepare, image_bytes
            )
            text = await self._generate(image)
        except (OCRError, ImageDecodeError):
            raise
        except Exception as e:
            logger.event("ocr_failed", level=logging.ERROR, model=self.model_name, error=str(e))
            raise OCRError(f"OCR engine failed: {e}") from e
        finally:
            duration = logger.end_timer("ocr_total")

        logger.event(
            "ocr_finished",
            model=self.model_name,
            version=vtype,
            chars=len(text),
            duration_ms=int(duration * 1000),
        )
        return text

    @retry(
        stop=stop_after_attempt(OCR_MAX_RETRIES),
        wait=wait_exponential(multiplier=1, min=4, max=10),
        retry=retry_if_exception_type(Exception),
        reraise=True,
    )
    async def _generate(self, image: Image.Image) -> str:
        model = genai.GenerativeModel(self.model_name, system_instruction=OCR_SYSTEM_PROMPT)
        logger.event("ocr_call_started", level=logging.DEBUG, model=self.model_name)

        response = await asyncio.wait_for(
            model.generate_content_async(
                [OCR_TRANSCRIBE_PROMPT, image],
                generation_config=genai.types.GenerationConfig(temperature=0),
            ),
            timeout=OCR_TIMEOUT,
        )

        try:
            text = (response.text or "").strip()
        except ValueError:
            # Blocked or empty candidates
            text = ""
        if not text:
            raise OCRError("OCR engine returned no text")
        return text
