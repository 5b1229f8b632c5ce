"""
Cloudflare R2儲存客戶端模組

使用boto3 S3 API連接Cloudflare R2，提供單一的物件上傳操作。
"""

import asyncio
from typing import Dict, Optional
import boto3
from botocore.config import Config as BotoConfig
from botocore.exceptions import BotoCoreError, ClientError

from .config import Config
from .utils.logger import get_logger


class R2ClientError(Exception):
    """R2儲存錯誤"""
    pass


class R2Client:
    """Cloudflare R2儲存客戶端"""

    def __init__(self, config: Config):
        """
        初始化R2客戶端

        Args:
            config: 配置物件
        """
        self.config = config
        self.logger = get_logger(__name__)
        self._client = None

    def _initialize_client(self) -> None:
        """初始化S3客戶端"""
        try:
            # 只嘗試一次，不重試
            boto_config = BotoConfig(
                region_name=self.config.r2_region,
                retries={
                    'max_attempts': 1,
                    'mode': 'standard'
                }
            )

            self._client = boto3.client(
                's3',
                endpoint_url=self.config.r2_endpoint,
                aws_access_key_id=self.config.r2_access_key,
                aws_secret_access_key=self.config.r2_secret_key,
                config=boto_config
            )

            self.logger.debug("R2客戶端初始化成功")

        except (BotoCoreError, ValueError) as e:
            raise R2ClientError(f"R2客戶端初始化失敗: {str(e)}") from e

    async def put_object(
        self,
        key: str,
        body: bytes,
        content_type: str,
        metadata: Optional[Dict[str, str]] = None
    ) -> None:
        """
        上傳單個物件

        已存在的物件會被直接覆蓋。

        Args:
            key: R2中的物件金鑰
            body: 檔案內容
            content_type: Content-Type
            metadata: 字串對字串的中繼資料

        Raises:
            R2ClientError: 上傳失敗
        """
        if self._client is None:
            self._initialize_client()

        upload_args = {
            'Bucket': self.config.r2_bucket,
            'Key': key,
            'Body': body,
            'ContentType': content_type,
            'Metadata': metadata or {},
        }

        try:
            await asyncio.get_running_loop().run_in_executor(
                None,
                lambda: self._client.put_object(**upload_args)
            )
        except ClientError as e:
            error_code = e.response['Error']['Code']
            error_message = e.response['Error'].get('Message', '')
            raise R2ClientError(f"AWS錯誤 {error_code}: {error_message}") from e
        except BotoCoreError as e:
            raise R2ClientError(f"上傳錯誤: {str(e)}") from e

        self.logger.debug(f"物件上傳成功: {self.config.r2_bucket}/{key}")

    def close(self) -> None:
        """關閉客戶端，清理資源"""
        if self._client:
            self._client.close()
            self._client = None

    async def __aenter__(self):
        """異步上下文管理器入口"""
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """異步上下文管理器出口"""
        self.close()
