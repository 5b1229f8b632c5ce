"""
進度追蹤器模組

提供上傳進度的追蹤功能。
"""

from dataclasses import dataclass
from datetime import datetime
from typing import List, Optional
from tqdm import tqdm

from .utils.logger import get_logger


@dataclass
class ProgressStats:
    """進度統計資訊"""
    total_files: int = 0
    uploaded_files: int = 0
    total_bytes: int = 0
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None

    @property
    def elapsed_time(self) -> float:
        """已用時間（秒）"""
        if self.start_time is None:
            return 0.0
        end = self.end_time or datetime.now()
        return (end - self.start_time).total_seconds()


class ProgressTracker:
    """進度追蹤器"""

    def __init__(self, show_progress: bool = True):
        """
        初始化進度追蹤器

        Args:
            show_progress: 是否顯示進度條
        """
        self.show_progress = show_progress
        self.logger = get_logger(__name__)

        self.stats = ProgressStats()
        self.uploaded_keys: List[str] = []
        self.progress_bar: Optional[tqdm] = None

    def initialize(self, total_files: int) -> None:
        """
        初始化追蹤器

        Args:
            total_files: 要上傳的檔案數量
        """
        self.stats = ProgressStats(total_files=total_files, start_time=datetime.now())
        self.uploaded_keys = []

        if self.show_progress:
            self.progress_bar = tqdm(
                total=total_files,
                desc="上傳進度",
                unit="檔案",
                bar_format="{l_bar}{bar}| {n_fmt}/{total_fmt} [{elapsed}<{remaining}]"
            )

    def complete_file(self, key: str, size: int, is_cover: bool = False) -> None:
        """
        記錄完成上傳的檔案

        Args:
            key: 物件金鑰
            size: 上傳的位元組數
            is_cover: 是否為封面
        """
        self.stats.uploaded_files += 1
        self.stats.total_bytes += size
        self.uploaded_keys.append(key)

        message = f"✅ 已上傳 {key}{'（封面）' if is_cover else ''}"
        # 不受日誌等級影響，且不打斷進度條
        tqdm.write(message)
        self.logger.debug(message)

        if self.progress_bar is not None:
            self.progress_bar.update(1)

    def finalize(self) -> None:
        """結束追蹤並關閉進度條"""
        self.stats.end_time = datetime.now()

        if self.progress_bar is not None:
            self.progress_bar.close()
            self.progress_bar = None

    def get_summary(self) -> dict:
        """
        取得處理摘要

        Returns:
            dict: 處理摘要資訊
        """
        return {
            'total_files': self.stats.total_files,
            'uploaded_files': self.stats.uploaded_files,
            'total_bytes': self.stats.total_bytes,
            'elapsed_time': self.stats.elapsed_time,
        }
