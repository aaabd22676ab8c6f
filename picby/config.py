"""
PicBy Configuration
Manages environment variables and defaults for the color search service.
"""
import os
from typing import Dict


class Config:
    """Configuration class for PicBy services."""

    # Sampling defaults
    DEFAULT_GRANULARITY: int = int(os.environ.get("PICBY_DEFAULT_GRANULARITY", "5"))

    # Folder scanned when a search does not name one
    IMAGES_FOLDER: str = os.environ.get("PICBY_IMAGES_FOLDER", "")

    # Worker threads for folder scans (1 = sequential)
    SCAN_WORKERS: int = int(os.environ.get("PICBY_SCAN_WORKERS", "1"))

    # Logging and metrics
    LOG_LEVEL: str = os.environ.get("PICBY_LOG_LEVEL", "INFO")
    METRICS_ENABLED: bool = bool(int(os.environ.get("PICBY_METRICS_ENABLED", "1")))

    # Extension -> Pillow decoder
    SUPPORTED_EXTENSIONS: Dict[str, str] = {
        "jpg": "JPEG",
        "jpeg": "JPEG",
        "bmp": "BMP",
        "gif": "GIF",
        "png": "PNG",
    }

    @classmethod
    def set_default_images_folder(cls, folder_path: str) -> None:
        """Set the folder used by searches that do not pass one."""
        cls.IMAGES_FOLDER = folder_path or ""


# Global config instance
config = Config()
