"""
檔案工具模組

提供檔案處理相關的輔助功能。
"""

import mimetypes
import os
from pathlib import Path
from typing import List, Optional


DEFAULT_CONTENT_TYPE = "application/octet-stream"


class FileUtils:
    """檔案工具類別"""

    @staticmethod
    def list_files(directory: Path) -> List[Path]:
        """
        列出目錄第一層的檔案

        不遞迴，子目錄與符號連結會被略過。

        Args:
            directory: 目錄路徑

        Returns:
            List[Path]: 依檔名排序的檔案路徑列表
        """
        if not directory.exists() or not directory.is_dir():
            return []

        return sorted(path for path in directory.iterdir() if path.is_file() and not path.is_symlink())

    @staticmethod
    def get_content_type(file_path: Path) -> str:
        """
        取得檔案的Content-Type

        Args:
            file_path: 檔案路徑

        Returns:
            str: Content-Type，無法判斷時為application/octet-stream
        """
        content_type, _ = mimetypes.guess_type(file_path.name)
        return content_type or DEFAULT_CONTENT_TYPE

    @staticmethod
    def get_remote_prefix(directory: Path) -> str:
        """取得遠端金鑰前綴（資料夾名稱），不解析符號連結"""
        return Path(os.path.abspath(directory)).name

    @staticmethod
    def build_remote_key(directory: Path, file_path: Path, extension: Optional[str] = None) -> str:
        """
        產生遠端物件金鑰

        Args:
            directory: 上傳的資料夾
            file_path: 檔案路徑
            extension: 替換用的副檔名（例如".webp"），None表示保留原檔名

        Returns:
            str: <資料夾名稱>/<檔名>
        """
        filename = file_path.name
        if extension is not None:
            filename = file_path.with_suffix(extension).name
        return f"{FileUtils.get_remote_prefix(directory)}/{filename}"
