"""
Test configuration and fixtures for PicBy color search tests.
"""
import numpy as np
import pytest
from fastapi.testclient import TestClient
from PIL import Image

# Import the main app
from main import app

CYAN = (0, 255, 255)
RED = (255, 0, 0)
GREEN = (0, 204, 0)
BLUE = (0, 0, 255)
GRAY = (128, 128, 128)  # quantizes to 999999, which no family claims


def solid_pixels(color, width=20, height=20) -> np.ndarray:
    """Uniform RGB pixel array."""
    pixels = np.zeros((height, width, 3), dtype=np.uint8)
    pixels[:, :] = color
    return pixels


def write_image(path, pixels: np.ndarray, fmt: str = None):
    """Save an RGB array to disk with Pillow."""
    Image.fromarray(pixels).save(str(path), format=fmt)
    return path


@pytest.fixture
def test_client():
    """Create test client for the FastAPI app."""
    return TestClient(app)


@pytest.fixture(autouse=True)
def reset_metrics():
    """Reset metrics before each test."""
    from picby.utils.metrics import reset_metrics
    reset_metrics()


@pytest.fixture
def make_image(tmp_path):
    """Factory writing a solid-color image into the test directory."""
    def _make(name, color, width=20, height=20, fmt=None):
        return write_image(tmp_path / name, solid_pixels(color, width, height), fmt)
    return _make


@pytest.fixture
def image_folder(tmp_path):
    """
    Folder with one cyan and one red image plus entries that must be skipped:
    a text file, a corrupt PNG and a sub-directory.
    """
    folder = tmp_path / "images"
    folder.mkdir()
    write_image(folder / "cyan.png", solid_pixels(CYAN, 30, 20))
    write_image(folder / "red.png", solid_pixels(RED, 25, 25))
    (folder / "notes.txt").write_text("not an image")
    (folder / "broken.png").write_bytes(b"\x89PNG\r\n\x1a\n corrupt")
    (folder / "nested.png").mkdir()
    return folder
