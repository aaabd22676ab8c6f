"""
PicBy Imaging Utilities
Handles image decoding, pixel access and folder enumeration for the color core.
"""
import os
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator, List, Tuple, Union

import numpy as np
from PIL import Image

from picby.config import config


class ImageDecodeError(Exception):
    """Raised when a path cannot be decoded as a supported raster image."""

    def __init__(self, path: str, reason: str):
        super().__init__(f"Failed to decode image '{path}': {reason}")
        self.path = path
        self.reason = reason


class FolderAccessError(Exception):
    """Raised when a folder does not exist or cannot be listed."""

    def __init__(self, path: str, reason: str = "not a readable directory"):
        super().__init__(f"Cannot access folder '{path}': {reason}")
        self.path = path
        self.reason = reason


class PixelImage:
    """
    Decoded RGB raster exposing width, height and a pixel accessor.

    Wraps an (height, width, 3) uint8 array. ``grid`` returns the strided
    view visited by a sampling pass with the given step.
    """

    def __init__(self, pixels: np.ndarray, source: str = ""):
        if pixels.ndim != 3 or pixels.shape[2] != 3:
            raise ValueError(f"Expected (H, W, 3) pixel array, got shape {pixels.shape}")
        self._pixels = pixels
        self.source = source

    @property
    def width(self) -> int:
        return int(self._pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self._pixels.shape[0])

    def pixel_at(self, x: int, y: int) -> Tuple[int, int, int]:
        r, g, b = self._pixels[y, x]
        return int(r), int(g), int(b)

    def grid(self, step: int) -> np.ndarray:
        return self._pixels[::step, ::step]

    def close(self) -> None:
        self._pixels = np.zeros((0, 0, 3), dtype=np.uint8)


@dataclass(frozen=True)
class Decoded:
    image: PixelImage


@dataclass(frozen=True)
class Unsupported:
    path: str
    reason: str


DecodeResult = Union[Decoded, Unsupported]


@dataclass(frozen=True)
class FolderEntry:
    identifier: str
    path: str
    is_dir: bool


def decoder_for(path: str) -> str:
    """
    Pick the Pillow decoder for a path from its extension.

    Args:
        path: Image file path

    Returns:
        Pillow format name (JPEG, BMP, GIF or PNG)

    Raises:
        ImageDecodeError: If the extension is not a supported raster format
    """
    ext = os.path.splitext(path)[1].lstrip('.').lower()
    fmt = config.SUPPORTED_EXTENSIONS.get(ext)
    if fmt is None:
        raise ImageDecodeError(path, f"unsupported extension '{ext}'")
    return fmt


def open_image(path: str) -> PixelImage:
    """
    Decode an image file into an RGB pixel grid.

    Args:
        path: Image file path

    Returns:
        PixelImage holding the decoded RGB pixels

    Raises:
        ImageDecodeError: For unsupported extensions, non-files and corrupt data
    """
    fmt = decoder_for(path)

    if not os.path.isfile(path):
        raise ImageDecodeError(path, "not a regular file")

    try:
        with Image.open(path, formats=[fmt]) as pil_image:
            # Palette, greyscale and alpha images are read through their RGB value
            if pil_image.mode != 'RGB':
                pil_image = pil_image.convert('RGB')
            rgb_array = np.array(pil_image, dtype=np.uint8)
    except Exception as e:
        raise ImageDecodeError(path, str(e)) from e

    return PixelImage(rgb_array, source=path)


def try_decode(path: str) -> DecodeResult:
    """Decode without raising; failures come back as ``Unsupported``."""
    try:
        return Decoded(open_image(path))
    except ImageDecodeError as e:
        return Unsupported(path, e.reason)


@contextmanager
def decoded_image(path: str) -> Iterator[PixelImage]:
    """Open an image for the duration of a block and release it afterwards."""
    image = open_image(path)
    try:
        yield image
    finally:
        image.close()


def list_folder(folder_path: str) -> List[FolderEntry]:
    """
    List folder entries in directory enumeration order.

    Args:
        folder_path: Directory to enumerate

    Returns:
        Entries in the order the filesystem yields them (unsorted)

    Raises:
        FolderAccessError: If the folder is missing or cannot be read
    """
    if not folder_path or not os.path.isdir(folder_path):
        raise FolderAccessError(folder_path, "not a directory")

    try:
        with os.scandir(folder_path) as it:
            return [
                FolderEntry(
                    identifier=entry.name,
                    path=entry.path,
                    is_dir=entry.is_dir(),
                )
                for entry in it
            ]
    except OSError as e:
        raise FolderAccessError(folder_path, str(e)) from e
