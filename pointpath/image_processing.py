# image_processing.py
from typing import Any, Dict, Tuple

import cv2
import numpy as np
from PIL import Image

import logging
logger = logging.getLogger(__name__)

from .errors import ImageDecodeError


class ScreenshotPreprocessor:
    """Pick the screenshot view most likely to OCR cleanly (original / enhanced / sharpened / binary)."""

    @staticmethod
    def decode(image_bytes: bytes) -> np.ndarray:
        if not image_bytes:
            raise ImageDecodeError("Empty image")
        img = cv2.imdecode(np.frombuffer(image_bytes, np.uint8), cv2.IMREAD_COLOR)
        if img is None:
            raise ImageDecodeError("Unable to decode image file")
        return img

    @staticmethod
    def analyze_image(img: np.ndarray) -> Dict[str, Any]:
        gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
        lap_var = float(cv2.Laplacian(gray, cv2.CV_64F).var())
        contrast = float(gray.std())
        h, w = img.shape[:2]
        info = {
            "sharpness": lap_var,
            "contrast": contrast,
            "width": w,
            "height": h,
            "needs_enhancement": lap_var < 100 or contrast < 35,
            "is_very_blurry": lap_var < 50,
            "is_low_contrast": contrast < 25,
        }
        logger.info(
            f"Screenshot analysis: sharp={info['sharpness']:.1f}, "
            f"contrast={info['contrast']:.1f}, size={w}x{h}"
        )
        return info

    @staticmethod
    def _enhance(img: np.ndarray) -> np.ndarray:
        gray = cv2.cvtColor(img, cv2.COLOR_BGR2GRAY)
        clahe = cv2.createCLAHE(clipLimit=3.0, tileGridSize=(8, 8))
        return clahe.apply(gray)

    @staticmethod
    def _sharpen(enhanced: np.ndarray) -> np.ndarray:
        denoised = cv2.fastNlMeansDenoising(enhanced, None, 10, 7, 21)
        kernel = np.array([[-1, -1, -1], [-1, 9, -1], [-1, -1, -1]])
        return cv2.filter2D(denoised, -1, kernel)

    @staticmethod
    def _binarize(enhanced: np.ndarray) -> np.ndarray:
        _, binary = cv2.threshold(enhanced, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)
        return binary

    @classmethod
    def choose_view(cls, img: np.ndarray) -> Tuple[np.ndarray, str]:
        """
        Build the single view the OCR call will see.

        binary beats sharpened beats enhanced beats original; only the
        winning view is computed.
        """
        analysis = cls.analyze_image(img)
        if not analysis["needs_enhancement"]:
            return img, "original"

        enhanced = cls._enhance(img)
        if analysis["is_low_contrast"]:
            view, vtype = cls._binarize(enhanced), "binary"
        elif analysis["is_very_blurry"]:
            view, vtype = cls._sharpen(enhanced), "sharpened"
        else:
            view, vtype = enhanced, "enhanced"
        return cv2.cvtColor(view, cv2.COLOR_GRAY2BGR), vtype

    @classmethod
    def prepare(cls, image_bytes: bytes) -> Tuple[Image.Image, str]:
        """Decode, pick the view and hand it back as a PIL image."""
        img = cls.decode(image_bytes)
        chosen, vtype = cls.choose_view(img)
        rgb = cv2.cvtColor(chosen, cv2.COLOR_BGR2RGB)
        return Image.fromarray(rgb), vtype
