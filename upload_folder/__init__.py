"""
upload-folder - 上傳資料夾到Cloudflare R2並選擇封面圖片的工具

將資料夾第一層的檔案逐一上傳到R2，可選擇先轉為WebP，並以中繼資料標記圖片尺寸與封面。
"""

__version__ = "1.0.0"

from .config import Config, ConfigError, load_config
from .r2_client import R2Client, R2ClientError
from .folder_uploader import FolderUploader, FolderUploadError, UploadTarget
from .cover_selector import CoverSelector, ConsoleCoverSelector, NamedCoverSelector
from .progress_tracker import ProgressTracker
from .utils import FileUtils, ImageProbe, ImageTranscoder, ImageToolError

__all__ = [
    "Config",
    "ConfigError",
    "load_config",
    "R2Client",
    "R2ClientError",
    "FolderUploader",
    "FolderUploadError",
    "UploadTarget",
    "CoverSelector",
    "ConsoleCoverSelector",
    "NamedCoverSelector",
    "ProgressTracker",
    "FileUtils",
    "ImageProbe",
    "ImageTranscoder",
    "ImageToolError",
]
