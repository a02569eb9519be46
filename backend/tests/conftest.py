"""
Test configuration and fixtures for the Color.io palette service.
"""
import base64
import io

import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app
from colorio.utils.metrics import reset_metrics as reset_global_metrics


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    reset_global_metrics()


def solid_rgba(width, height, rgb, alpha=255):
    """Flat RGBA bytes for a single-color image."""
    image = np.zeros((height, width, 4), dtype=np.uint8)
    image[:, :, :3] = rgb
    image[:, :, 3] = alpha
    return image.tobytes()


def stacked_rgba(width, bands):
    """
    Flat RGBA bytes of horizontal color bands.

    Args:
        width: image width
        bands: sequence of (rgb, row_count) from top to bottom
    """
    rows = []
    for rgb, row_count in bands:
        band = np.zeros((row_count, width, 4), dtype=np.uint8)
        band[:, :, :3] = rgb
        band[:, :, 3] = 255
        rows.append(band)
    return np.concatenate(rows, axis=0).tobytes()


def encode_png(array):
    """PNG bytes for an (H, W, C) uint8 array."""
    buffer = io.BytesIO()
    Image.fromarray(array).save(buffer, format="PNG")
    return buffer.getvalue()


@pytest.fixture
def make_rgba():
    return solid_rgba


@pytest.fixture
def make_bands():
    return stacked_rgba


@pytest.fixture
def png_b64():
    """Factory for base64 PNGs of a solid RGBA color."""
    def _build(width, height, rgb, alpha=255):
        array = np.frombuffer(solid_rgba(width, height, rgb, alpha), dtype=np.uint8)
        png = encode_png(array.reshape(height, width, 4))
        return base64.b64encode(png).decode("ascii")
    return _build
