"""
配置管理模組

使用Pydantic進行環境變數驗證和配置管理。
"""

import os
from typing import Optional
from pydantic import BaseModel, Field, ValidationError, field_validator
from dotenv import load_dotenv


class ConfigError(Exception):
    """配置錯誤"""
    pass


class Config(BaseModel):
    """應用程式配置類別"""

    # Cloudflare R2 配置
    r2_endpoint: str = Field(..., description="R2端點URL")
    r2_access_key: str = Field(..., description="R2存取金鑰")
    r2_secret_key: str = Field(..., description="R2秘密存取金鑰")
    r2_bucket: str = Field(..., description="R2儲存桶名稱")
    r2_region: str = Field(default="auto", description="R2區域")

    # 轉檔配置
    transcode: bool = Field(default=False, description="是否在上傳前轉為WebP")
    transcode_quality: int = Field(default=80, ge=1, le=100, description="轉檔品質")

    # 圖片工具配置
    image_backend: str = Field(default="magick", description="圖片工具後端")
    identify_command: str = Field(default="identify", description="取得圖片尺寸的指令")
    convert_command: str = Field(default="convert", description="轉檔指令")

    # 日誌配置
    log_level: str = Field(default="INFO", description="日誌等級")
    log_file: Optional[str] = Field(default=None, description="日誌檔案路徑，空值表示只輸出到控制台")

    # 進度顯示配置
    show_progress: bool = Field(default=True, description="是否顯示進度")

    @field_validator('r2_endpoint', 'r2_access_key', 'r2_secret_key', 'r2_bucket')
    @classmethod
    def validate_required(cls, v):
        """驗證必填的R2設定"""
        if v is None or v.strip() == "":
            raise ValueError('must be set')
        return v.strip()

    @field_validator('log_level')
    @classmethod
    def validate_log_level(cls, v):
        """驗證日誌等級"""
        valid_levels = ['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']
        if v.upper() not in valid_levels:
            raise ValueError(f'log_level must be one of {valid_levels}')
        return v.upper()

    @field_validator('image_backend')
    @classmethod
    def validate_image_backend(cls, v):
        """驗證圖片工具後端"""
        valid_backends = ['magick', 'pillow']
        if v.lower() not in valid_backends:
            raise ValueError(f'image_backend must be one of {valid_backends}')
        return v.lower()

    @field_validator('log_file')
    @classmethod
    def validate_log_file(cls, v):
        if v is None or v.strip() == "":
            return None
        return v


def load_config(env_file: Optional[str] = None) -> Config:
    """
    載入配置

    Args:
        env_file: 環境變數檔案路徑，預設為.env

    Returns:
        Config: 配置物件

    Raises:
        ConfigError: 缺少必要設定或設定值無效
    """
    # 載入環境變數
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    try:
        return Config(
            r2_endpoint=os.getenv("R2_ENDPOINT", ""),
            r2_access_key=os.getenv("R2_ACCESS_KEY", ""),
            r2_secret_key=os.getenv("R2_SECRET_KEY", ""),
            r2_bucket=os.getenv("R2_BUCKET", ""),
            r2_region=os.getenv("R2_REGION", "auto"),
            transcode=os.getenv("TRANSCODE", "false").lower() == "true",
            transcode_quality=int(os.getenv("TRANSCODE_QUALITY", "80")),
            image_backend=os.getenv("IMAGE_BACKEND", "magick"),
            identify_command=os.getenv("IDENTIFY_COMMAND", "identify"),
            convert_command=os.getenv("CONVERT_COMMAND", "convert"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            log_file=os.getenv("LOG_FILE"),
            show_progress=os.getenv("SHOW_PROGRESS", "true").lower() == "true",
        )
    except ValidationError as e:
        invalid = [str(error["loc"][0]).upper() for error in e.errors()]
        raise ConfigError(f"配置無效或缺少環境變數: {', '.join(invalid)}") from e
    except ValueError as e:
        raise ConfigError(f"配置數值格式錯誤: {str(e)}") from e
