"""
Unit tests for image decoding and folder enumeration.
"""

import numpy as np
import pytest

from picby.services.imaging import (
    Decoded, FolderAccessError, ImageDecodeError, PixelImage, Unsupported,
    decoded_image, decoder_for, list_folder, open_image, try_decode
)

from conftest import CYAN, GREEN, RED


class TestDecoderDispatch:
    """Test extension to decoder mapping"""

    def test_supported_extensions(self):
        assert decoder_for("a.jpg") == "JPEG"
        assert decoder_for("a.jpeg") == "JPEG"
        assert decoder_for("a.bmp") == "BMP"
        assert decoder_for("a.gif") == "GIF"
        assert decoder_for("a.png") == "PNG"

    def test_extension_case_is_ignored(self):
        assert decoder_for("/tmp/PHOTO.JPG") == "JPEG"

    def test_unsupported_extension(self):
        with pytest.raises(ImageDecodeError):
            decoder_for("a.webp")
        with pytest.raises(ImageDecodeError):
            decoder_for("no_extension")


class TestOpenImage:
    """Test decoding into PixelImage"""

    def test_png_roundtrip_pixels(self, make_image):
        path = make_image("cyan.png", CYAN, width=7, height=3)
        image = open_image(str(path))
        assert (image.width, image.height) == (7, 3)
        assert image.pixel_at(6, 2) == CYAN

    def test_bmp_and_gif(self, make_image):
        bmp = open_image(str(make_image("red.bmp", RED, fmt="BMP")))
        gif = open_image(str(make_image("red.gif", RED, fmt="GIF")))
        assert bmp.pixel_at(0, 0) == RED
        assert gif.pixel_at(0, 0) == RED

    def test_jpeg_decodes_to_rgb(self, make_image):
        image = open_image(str(make_image("green.jpg", GREEN, fmt="JPEG")))
        r, g, b = image.pixel_at(5, 5)
        assert abs(g - 204) < 10 and r < 10 and b < 10

    def test_corrupt_file(self, tmp_path):
        path = tmp_path / "broken.png"
        path.write_bytes(b"\x89PNG\r\n\x1a\n not really")
        with pytest.raises(ImageDecodeError) as exc_info:
            open_image(str(path))
        assert exc_info.value.path == str(path)

    def test_wrong_decoder_for_content(self, make_image, tmp_path):
        """A PNG named .gif is rejected by the GIF decoder"""
        png = make_image("real.png", RED)
        disguised = tmp_path / "fake.gif"
        disguised.write_bytes(png.read_bytes())
        with pytest.raises(ImageDecodeError):
            open_image(str(disguised))

    def test_directory_and_missing_file(self, tmp_path):
        (tmp_path / "folder.png").mkdir()
        with pytest.raises(ImageDecodeError):
            open_image(str(tmp_path / "folder.png"))
        with pytest.raises(ImageDecodeError):
            open_image(str(tmp_path / "missing.png"))

    def test_rgba_is_read_as_rgb(self, tmp_path):
        from PIL import Image
        rgba = np.zeros((4, 4, 4), dtype=np.uint8)
        rgba[:, :] = (0, 255, 255, 10)
        path = tmp_path / "alpha.png"
        Image.fromarray(rgba).save(str(path))
        assert open_image(str(path)).pixel_at(1, 1) == CYAN


class TestTryDecode:
    """Test the non-raising decode used by folder scans"""

    def test_decoded(self, make_image):
        result = try_decode(str(make_image("cyan.png", CYAN)))
        assert isinstance(result, Decoded)
        assert result.image.pixel_at(0, 0) == CYAN

    def test_unsupported(self, tmp_path):
        path = tmp_path / "notes.txt"
        path.write_text("hello")
        result = try_decode(str(path))
        assert isinstance(result, Unsupported)
        assert "unsupported extension" in result.reason


class TestDecodedImage:
    """Test image release around a block"""

    def test_released_after_block(self, make_image):
        with decoded_image(str(make_image("red.png", RED))) as image:
            assert image.width == 20
        assert image.width == 0

    def test_released_on_error(self, make_image):
        with pytest.raises(RuntimeError):
            with decoded_image(str(make_image("red.png", RED))) as image:
                raise RuntimeError("boom")
        assert image.width == 0 and image.height == 0


class TestPixelImage:

    def test_rejects_non_rgb_arrays(self):
        with pytest.raises(ValueError):
            PixelImage(np.zeros((4, 4), dtype=np.uint8))

    def test_grid_is_strided(self):
        pixels = np.arange(5 * 4 * 3, dtype=np.uint8).reshape(5, 4, 3)
        grid = PixelImage(pixels).grid(2)
        assert grid.shape == (3, 2, 3)
        assert tuple(grid[1, 1]) == tuple(pixels[2, 2])


class TestListFolder:
    """Test folder enumeration"""

    def test_lists_files_and_directories(self, image_folder):
        entries = list_folder(str(image_folder))
        names = {entry.identifier for entry in entries}
        assert names == {"cyan.png", "red.png", "notes.txt", "broken.png", "nested.png"}
        nested = next(entry for entry in entries if entry.identifier == "nested.png")
        assert nested.is_dir

    def test_missing_folder(self, tmp_path):
        with pytest.raises(FolderAccessError):
            list_folder(str(tmp_path / "missing"))

    def test_file_is_not_a_folder(self, make_image):
        with pytest.raises(FolderAccessError):
            list_folder(str(make_image("red.png", RED)))

    def test_empty_path(self):
        with pytest.raises(FolderAccessError):
            list_folder("")
