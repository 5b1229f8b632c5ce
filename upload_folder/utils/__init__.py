"""
工具模組

包含各種輔助功能和工具類別。
"""

from .file_utils import FileUtils
from .image_tools import (
    ImageProbe,
    ImageTranscoder,
    ImageToolError,
    MagickImageProbe,
    MagickImageTranscoder,
    PillowImageProbe,
    PillowImageTranscoder,
    create_image_probe,
    create_image_transcoder,
)
from .logger import setup_logger, get_logger

__all__ = [
    "FileUtils",
    "ImageProbe",
    "ImageTranscoder",
    "ImageToolError",
    "MagickImageProbe",
    "MagickImageTranscoder",
    "PillowImageProbe",
    "PillowImageTranscoder",
    "create_image_probe",
    "create_image_transcoder",
    "setup_logger",
    "get_logger",
]
