"""
封面選擇模組

讓使用者從資料夾的檔案中選出一個作為封面。
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Callable, List, Optional


class CoverSelector(ABC):
    """封面選擇器"""

    @abstractmethod
    def select(self, files: List[Path]) -> Path:
        """
        選擇封面

        Args:
            files: 候選檔案清單

        Returns:
            Path: 被選中的檔案，必須是files中的一個
        """


class ConsoleCoverSelector(CoverSelector):
    """在終端機上以編號清單讓使用者選擇"""

    def __init__(
        self,
        message: str = "請選擇封面圖片",
        input_func: Optional[Callable[[str], str]] = None,
        output_func: Optional[Callable[[str], None]] = None
    ):
        self.message = message
        self._input = input_func or input
        self._output = output_func or print

    def select(self, files: List[Path]) -> Path:
        if not files:
            raise ValueError("沒有可選擇的檔案")

        self._output(f"\n{self.message}:")
        for i, file_path in enumerate(files, 1):
            self._output(f"  {i:2d}. {file_path.name}")

        while True:
            response = self._input(f"{self.message} [1-{len(files)}]: ").strip()
            if response.isdigit() and 1 <= int(response) <= len(files):
                return files[int(response) - 1]
            self._output(f"無效的選擇: {response!r}，請輸入 1 到 {len(files)} 之間的數字")


class NamedCoverSelector(CoverSelector):
    """依檔名直接選擇，不需互動"""

    def __init__(self, filename: str):
        self.filename = filename

    def select(self, files: List[Path]) -> Path:
        for file_path in files:
            if file_path.name == self.filename:
                return file_path
        raise ValueError(f"資料夾中找不到封面檔案: {self.filename}")
