import cv2
import numpy as np
import pytest

from pointpath.errors import ImageDecodeError
from pointpath.image_processing import ScreenshotPreprocessor


def _png(img: np.ndarray) -> bytes:
    ok, buffer = cv2.imencode(".png", img)
    assert ok
    return buffer.tobytes()


def _noise() -> np.ndarray:
    return np.random.default_rng(0).integers(0, 256, (120, 160, 3), dtype=np.uint8)


def _flat() -> np.ndarray:
    return np.full((120, 160, 3), 128, dtype=np.uint8)


def _ramp() -> np.ndarray:
    row = np.linspace(0, 255, 160).astype(np.uint8)
    gray = np.tile(row, (120, 1))
    return cv2.cvtColor(gray, cv2.COLOR_GRAY2BGR)


def test_decode_rejects_garbage():
    with pytest.raises(ImageDecodeError):
        ScreenshotPreprocessor.decode(b"definitely not an image")


def test_decode_rejects_empty_bytes():
    with pytest.raises(ImageDecodeError):
        ScreenshotPreprocessor.decode(b"")


def test_sharp_screenshot_is_left_alone():
    img = ScreenshotPreprocessor.decode(_png(_noise()))
    info = ScreenshotPreprocessor.analyze_image(img)
    assert info["needs_enhancement"] is False
    view, vtype = ScreenshotPreprocessor.choose_view(img)
    assert vtype == "original"
    assert view is img


def test_flat_screenshot_gets_binarised():
    view, vtype = ScreenshotPreprocessor.choose_view(_flat())
    assert vtype == "binary"
    assert view.shape == (120, 160, 3)
    assert set(np.unique(view)) <= {0, 255}


def test_only_the_chosen_view_is_built(monkeypatch):
    def fail(*args, **kwargs):
        raise AssertionError("sharpening ran for a binarised screenshot")

    monkeypatch.setattr(ScreenshotPreprocessor, "_sharpen", staticmethod(fail))
    assert ScreenshotPreprocessor.choose_view(_flat())[1] == "binary"


def test_blurry_but_contrasty_screenshot_gets_sharpened():
    info = ScreenshotPreprocessor.analyze_image(_ramp())
    assert info["is_very_blurry"] is True
    assert info["is_low_contrast"] is False
    assert ScreenshotPreprocessor.choose_view(_ramp())[1] == "sharpened"


def test_prepare_returns_rgb_pil_image():
    image, vtype = ScreenshotPreprocessor.prepare(_png(_noise()))
    assert vtype == "original"
    assert image.size == (160, 120)
    assert image.mode == "RGB"
