"""
圖片工具模組

取得圖片尺寸及轉檔為WebP。提供呼叫ImageMagick外部指令與使用Pillow兩種實作。
"""

import asyncio
from abc import ABC, abstractmethod
from pathlib import Path
from typing import List, Tuple
from PIL import Image, UnidentifiedImageError

from ..config import Config
from .logger import get_logger


TRANSCODE_EXTENSION = ".webp"
TRANSCODE_CONTENT_TYPE = "image/webp"


class ImageToolError(Exception):
    """圖片工具錯誤"""
    pass


async def run_command(args: List[str]) -> Tuple[str, str]:
    """
    執行外部指令並等待完成

    Args:
        args: 指令與參數

    Returns:
        Tuple[str, str]: (標準輸出, 標準錯誤)

    Raises:
        ImageToolError: 指令不存在或結束代碼非零
    """
    try:
        process = await asyncio.create_subprocess_exec(
            *args,
            stdout=asyncio.subprocess.PIPE,
            stderr=asyncio.subprocess.PIPE
        )
    except FileNotFoundError as e:
        raise ImageToolError(f"找不到指令: {args[0]}") from e

    stdout, stderr = await process.communicate()
    stderr_text = stderr.decode(errors="replace").strip()

    if process.returncode != 0:
        raise ImageToolError(f"{Path(args[0]).name} failed: {stderr_text}")

    return stdout.decode(errors="replace"), stderr_text


class ImageProbe(ABC):
    """取得圖片尺寸"""

    @abstractmethod
    async def get_dimensions(self, path: Path) -> Tuple[str, str]:
        """
        取得圖片寬高

        Args:
            path: 圖片路徑

        Returns:
            Tuple[str, str]: (寬, 高)，以字串表示
        """


class ImageTranscoder(ABC):
    """將圖片轉為WebP"""

    @abstractmethod
    async def transcode(self, input_path: Path, output_dir: Path, quality: int = 80) -> Path:
        """
        轉檔

        Args:
            input_path: 原始圖片路徑
            output_dir: 輸出目錄，由呼叫端負責清理
            quality: 轉檔品質

        Returns:
            Path: 轉檔後的檔案路徑
        """

    @staticmethod
    def output_path_for(input_path: Path, output_dir: Path) -> Path:
        return output_dir / f"{input_path.stem}{TRANSCODE_EXTENSION}"


class MagickImageProbe(ImageProbe):
    """使用ImageMagick identify取得圖片尺寸"""

    def __init__(self, command: str = "identify"):
        self.command = command
        self.logger = get_logger(__name__)

    async def get_dimensions(self, path: Path) -> Tuple[str, str]:
        stdout, _ = await run_command([self.command, "-format", "%w %h", str(path)])

        parts = stdout.strip().split()
        if len(parts) < 2 or not parts[0].isdigit() or not parts[1].isdigit():
            raise ImageToolError(f"無法解析圖片尺寸: {path} -> {stdout.strip()!r}")

        width, height = parts[0], parts[1]
        self.logger.debug(f"圖片尺寸: {path.name} {width}x{height}")
        return width, height


class MagickImageTranscoder(ImageTranscoder):
    """使用ImageMagick convert轉檔"""

    def __init__(self, command: str = "convert"):
        self.command = command
        self.logger = get_logger(__name__)

    async def transcode(self, input_path: Path, output_dir: Path, quality: int = 80) -> Path:
        output_path = self.output_path_for(input_path, output_dir)

        await run_command([
            self.command,
            str(input_path),
            "-quality",
            str(quality),
            str(output_path),
        ])

        self.logger.debug(f"轉檔完成: {input_path} -> {output_path}")
        return output_path


class PillowImageProbe(ImageProbe):
    """使用Pillow取得圖片尺寸"""

    async def get_dimensions(self, path: Path) -> Tuple[str, str]:
        width, height = await asyncio.get_running_loop().run_in_executor(
            None, self._read_size, path
        )
        return str(width), str(height)

    @staticmethod
    def _read_size(path: Path) -> Tuple[int, int]:
        try:
            with Image.open(path) as img:
                return img.size
        except (UnidentifiedImageError, OSError) as e:
            raise ImageToolError(f"無法取得圖片資訊: {path} - {str(e)}") from e


class PillowImageTranscoder(ImageTranscoder):
    """使用Pillow轉檔"""

    def __init__(self):
        self.logger = get_logger(__name__)

    async def transcode(self, input_path: Path, output_dir: Path, quality: int = 80) -> Path:
        output_path = self.output_path_for(input_path, output_dir)

        await asyncio.get_running_loop().run_in_executor(
            None, self._save_webp, input_path, output_path, quality
        )

        self.logger.debug(f"轉檔完成: {input_path} -> {output_path}")
        return output_path

    @staticmethod
    def _save_webp(input_path: Path, output_path: Path, quality: int) -> None:
        try:
            with Image.open(input_path) as img:
                # WebP只支援RGB與RGBA
                if img.mode not in ('RGB', 'RGBA'):
                    img = img.convert('RGBA' if 'A' in img.getbands() else 'RGB')
                img.save(output_path, format="WEBP", quality=quality)
        except (UnidentifiedImageError, OSError) as e:
            raise ImageToolError(f"圖片轉檔失敗: {input_path} - {str(e)}") from e


def create_image_probe(config: Config) -> ImageProbe:
    """根據配置建立圖片尺寸查詢工具"""
    if config.image_backend == "pillow":
        return PillowImageProbe()
    return MagickImageProbe(config.identify_command)


def create_image_transcoder(config: Config) -> ImageTranscoder:
    """根據配置建立轉檔工具"""
    if config.image_backend == "pillow":
        return PillowImageTranscoder()
    return MagickImageTranscoder(config.convert_command)
