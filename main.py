"""
upload-folder 主程式

上傳資料夾到Cloudflare R2並選擇封面圖片
"""

import asyncio
import sys
import argparse
from pathlib import Path
from typing import List, Optional

from upload_folder import __version__
from upload_folder.config import load_config, Config, ConfigError
from upload_folder.cover_selector import ConsoleCoverSelector, CoverSelector, NamedCoverSelector
from upload_folder.folder_uploader import FolderUploader, FolderUploadError
from upload_folder.r2_client import R2Client, R2ClientError
from upload_folder.utils.image_tools import (
    ImageToolError,
    create_image_probe,
    create_image_transcoder,
)
from upload_folder.utils.logger import setup_logger, get_logger


def setup_argument_parser() -> argparse.ArgumentParser:
    """設定命令行參數解析器"""
    parser = argparse.ArgumentParser(
        prog="upload-folder",
        description="Upload a folder to R2 and select a cover image",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用範例:
  upload-folder photos/2024-trip                 # 互動選擇封面後上傳
  upload-folder photos/2024-trip --cover a.jpg   # 直接指定封面
  upload-folder photos/2024-trip --transcode     # 轉為WebP後上傳
        """
    )

    parser.add_argument(
        "folder",
        type=str,
        help="要上傳的資料夾"
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )

    parser.add_argument(
        "--config",
        type=str,
        default=".env",
        help="配置檔案路徑 (預設: .env)"
    )

    parser.add_argument(
        "--cover",
        type=str,
        help="封面檔名，指定後不再互動選擇"
    )

    parser.add_argument(
        "--transcode",
        action="store_true",
        help="上傳前轉為WebP (覆蓋配置檔案設定)"
    )

    parser.add_argument(
        "--quality",
        type=int,
        help="WebP轉檔品質 1-100 (覆蓋配置檔案設定)"
    )

    parser.add_argument(
        "--image-backend",
        choices=["magick", "pillow"],
        help="圖片工具後端 (覆蓋配置檔案設定)"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="日誌等級 (覆蓋配置檔案設定)"
    )

    parser.add_argument(
        "--no-progress",
        action="store_true",
        help="不顯示進度條"
    )

    return parser


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """以命令行參數覆蓋配置"""
    overrides = {}
    if args.transcode:
        overrides["transcode"] = True
    if args.quality is not None:
        overrides["transcode_quality"] = args.quality
    if args.image_backend:
        overrides["image_backend"] = args.image_backend
    if args.log_level:
        overrides["log_level"] = args.log_level
    if args.no_progress:
        overrides["show_progress"] = False

    # 透過重新驗證確保數值範圍
    try:
        return Config(**{**config.model_dump(), **overrides})
    except ValueError as e:
        raise ConfigError(f"命令行參數無效: {str(e)}") from e


def create_cover_selector(args: argparse.Namespace) -> CoverSelector:
    if args.cover:
        return NamedCoverSelector(args.cover)
    return ConsoleCoverSelector()


async def main_async(args: argparse.Namespace) -> int:
    """
    主程式異步版本

    Args:
        args: 命令行參數

    Returns:
        int: 退出代碼
    """
    logger = get_logger()

    try:
        # 載入配置
        config = apply_overrides(load_config(args.config), args)

        # 設定日誌
        logger = setup_logger(
            log_file=config.log_file,
            log_level=config.log_level
        )

        folder = Path(args.folder)

        logger.info("=== upload-folder 啟動 ===")
        logger.info(f"資料夾: {folder}")
        logger.info(f"R2儲存桶: {config.r2_bucket}")
        if config.transcode:
            logger.info(f"轉檔: WebP (品質 {config.transcode_quality})")

        async with R2Client(config) as storage:
            uploader = FolderUploader(
                config,
                storage=storage,
                image_probe=create_image_probe(config),
                cover_selector=create_cover_selector(args),
                transcoder=create_image_transcoder(config) if config.transcode else None
            )
            await uploader.upload_folder(folder)

        summary = uploader.get_processing_summary()
        logger.info("=== 處理摘要 ===")
        logger.info(f"成功上傳: {summary['uploaded_files']}/{summary['total_files']}")
        logger.info(f"總大小: {summary['total_bytes'] / 1024:.1f} KB")
        logger.info(f"總用時: {summary['elapsed_time']:.2f} 秒")
        return 0

    except ConfigError as e:
        logger.error(f"配置錯誤: {str(e)}")
        return 1

    except FolderUploadError as e:
        logger.error(f"資料夾錯誤: {str(e)}")
        return 1

    except ImageToolError as e:
        logger.error(f"圖片工具錯誤: {str(e)}")
        return 1

    except R2ClientError as e:
        logger.error(f"R2上傳錯誤: {str(e)}")
        return 1

    except Exception as e:
        logger.error(f"未預期的錯誤: {str(e)}", exc_info=True)
        return 1


def main(argv: Optional[List[str]] = None) -> int:
    """
    主程式入口

    Returns:
        int: 退出代碼
    """
    parser = setup_argument_parser()
    args = parser.parse_args(argv)

    try:
        return asyncio.run(main_async(args))

    except KeyboardInterrupt:
        print("\n用戶中斷操作", file=sys.stderr)
        return 130


if __name__ == "__main__":
    sys.exit(main())
