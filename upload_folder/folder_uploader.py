"""
資料夾上傳模組

協調整個資料夾的封面選擇、轉檔與上傳流程。
"""

import tempfile
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, List, Optional
import aiofiles

from .config import Config
from .cover_selector import CoverSelector
from .progress_tracker import ProgressTracker
from .r2_client import R2Client
from .utils.file_utils import FileUtils
from .utils.image_tools import (
    TRANSCODE_CONTENT_TYPE,
    TRANSCODE_EXTENSION,
    ImageProbe,
    ImageTranscoder,
)
from .utils.logger import get_logger


class FolderUploadError(Exception):
    """資料夾上傳錯誤"""
    pass


@dataclass
class UploadTarget:
    """單個檔案的上傳資訊"""
    source_path: Path
    upload_path: Path
    key: str
    content_type: str
    width: str
    height: str
    is_cover: bool = False

    @property
    def metadata(self) -> Dict[str, str]:
        """R2物件中繼資料"""
        return {
            "width": self.width,
            "height": self.height,
            "cover": "true" if self.is_cover else "false",
        }


class FolderUploader:
    """資料夾上傳器"""

    def __init__(
        self,
        config: Config,
        storage: R2Client,
        image_probe: ImageProbe,
        cover_selector: CoverSelector,
        transcoder: Optional[ImageTranscoder] = None,
        progress_tracker: Optional[ProgressTracker] = None
    ):
        """
        初始化資料夾上傳器

        Args:
            config: 配置物件
            storage: R2儲存客戶端
            image_probe: 圖片尺寸查詢工具
            cover_selector: 封面選擇器
            transcoder: 轉檔工具，None表示不轉檔
            progress_tracker: 進度追蹤器
        """
        self.config = config
        self.storage = storage
        self.image_probe = image_probe
        self.cover_selector = cover_selector
        self.transcoder = transcoder
        self.progress_tracker = progress_tracker or ProgressTracker(
            show_progress=config.show_progress
        )
        self.logger = get_logger(__name__)

    @property
    def transcoding(self) -> bool:
        return self.transcoder is not None

    def scan_files(self, folder: Path) -> List[Path]:
        """
        掃描資料夾第一層的檔案

        Args:
            folder: 資料夾路徑

        Returns:
            List[Path]: 檔案清單

        Raises:
            FolderUploadError: 資料夾不存在或沒有任何檔案
        """
        if not folder.exists() or not folder.is_dir():
            raise FolderUploadError(f"資料夾不存在: {folder}")

        files = FileUtils.list_files(folder)
        if not files:
            raise FolderUploadError(f"資料夾中沒有任何檔案: {folder}")

        self.logger.info(f"找到 {len(files)} 個檔案")
        return files

    def select_cover(self, files: List[Path]) -> Path:
        """
        讓使用者選擇封面

        Raises:
            FolderUploadError: 選擇結果不在檔案清單中
        """
        try:
            cover = self.cover_selector.select(files)
        except ValueError as e:
            raise FolderUploadError(str(e)) from e

        if cover not in files:
            raise FolderUploadError(f"選擇的封面不在資料夾中: {cover}")

        self.logger.info(f"封面: {cover.name}")
        return cover

    async def upload_folder(self, folder: Path) -> List[UploadTarget]:
        """
        上傳整個資料夾

        依檔名順序逐一上傳；任何檔案失敗都會中止整個流程，
        已上傳的檔案不會回復。

        Args:
            folder: 資料夾路徑

        Returns:
            List[UploadTarget]: 已上傳的檔案
        """
        files = self.scan_files(folder)
        cover = self.select_cover(files)

        uploaded = []
        self.progress_tracker.initialize(len(files))
        try:
            for file_path in files:
                target = await self.upload_file(folder, file_path, file_path == cover)
                uploaded.append(target)
        finally:
            self.progress_tracker.finalize()

        return uploaded

    async def upload_file(self, folder: Path, file_path: Path, is_cover: bool) -> UploadTarget:
        """
        上傳單個檔案（轉檔 + 取得尺寸 + 上傳）

        Args:
            folder: 檔案所在的資料夾
            file_path: 檔案路徑
            is_cover: 是否為封面

        Returns:
            UploadTarget: 上傳資訊
        """
        if not self.transcoding:
            return await self._upload(
                file_path,
                file_path,
                FileUtils.build_remote_key(folder, file_path),
                FileUtils.get_content_type(file_path),
                is_cover
            )

        with tempfile.TemporaryDirectory(prefix="upload-folder-") as scratch_dir:
            upload_path = await self.transcoder.transcode(
                file_path,
                Path(scratch_dir),
                self.config.transcode_quality
            )
            return await self._upload(
                file_path,
                upload_path,
                FileUtils.build_remote_key(folder, file_path, TRANSCODE_EXTENSION),
                TRANSCODE_CONTENT_TYPE,
                is_cover
            )

    async def _upload(
        self,
        source_path: Path,
        upload_path: Path,
        key: str,
        content_type: str,
        is_cover: bool
    ) -> UploadTarget:
        async with aiofiles.open(upload_path, 'rb') as file:
            body = await file.read()

        width, height = await self.image_probe.get_dimensions(upload_path)

        target = UploadTarget(
            source_path=source_path,
            upload_path=upload_path,
            key=key,
            content_type=content_type,
            width=width,
            height=height,
            is_cover=is_cover
        )

        await self.storage.put_object(key, body, content_type, target.metadata)
        self.progress_tracker.complete_file(key, len(body), is_cover)
        return target

    def get_processing_summary(self) -> dict:
        """取得處理摘要"""
        return self.progress_tracker.get_summary()
