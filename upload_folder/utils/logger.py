"""
日誌設定模組

提供統一的日誌配置和管理功能。
"""

import logging
import logging.handlers
from pathlib import Path
from typing import Optional


LOGGER_NAME = "upload_folder"
LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
DATE_FORMAT = '%Y-%m-%d %H:%M:%S'

# boto3與Pillow在DEBUG等級下輸出過多，只在除錯時開放
THIRD_PARTY_LOGGERS = ("boto3", "botocore", "s3transfer", "urllib3", "PIL")


def _create_file_handler(log_file: str, max_bytes: int, backup_count: int) -> logging.Handler:
    """建立輪轉日誌檔案處理器，必要時建立目錄"""
    log_path = Path(log_file)
    log_path.parent.mkdir(parents=True, exist_ok=True)

    return logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )


def setup_logger(
    name: str = LOGGER_NAME,
    log_file: Optional[str] = None,
    log_level: str = "INFO",
    max_bytes: int = 10 * 1024 * 1024,  # 10MB
    backup_count: int = 5
) -> logging.Logger:
    """
    設定日誌記錄器

    重複呼叫時會以新的設定取代既有的處理器。

    Args:
        name: 記錄器名稱
        log_file: 日誌檔案路徑，None表示只輸出到控制台
        log_level: 日誌等級
        max_bytes: 日誌檔案最大大小
        backup_count: 備份檔案數量

    Returns:
        logging.Logger: 配置好的記錄器
    """
    level = getattr(logging, log_level.upper())

    logger = logging.getLogger(name)
    logger.setLevel(level)

    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    handlers = [logging.StreamHandler()]
    if log_file:
        handlers.append(_create_file_handler(log_file, max_bytes, backup_count))

    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    for handler in handlers:
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    third_party_level = logging.DEBUG if level <= logging.DEBUG else logging.WARNING
    for third_party in THIRD_PARTY_LOGGERS:
        logging.getLogger(third_party).setLevel(third_party_level)

    return logger


def get_logger(name: Optional[str] = None) -> logging.Logger:
    """取得記錄器實例，預設為upload_folder"""
    return logging.getLogger(name or LOGGER_NAME)
