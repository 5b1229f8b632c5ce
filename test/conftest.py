"""
測試共用fixtures與測試替身
"""

import shutil
from pathlib import Path
from typing import Dict, List, Optional

import pytest
from PIL import Image

from upload_folder.config import Config
from upload_folder.cover_selector import CoverSelector
from upload_folder.utils.image_tools import ImageProbe, ImageToolError, ImageTranscoder


class FixedImageProbe(ImageProbe):
    """回傳固定尺寸；可指定某個檔名失敗"""

    def __init__(self, width: str = "800", height: str = "600", fail_on: Optional[str] = None):
        self.width = width
        self.height = height
        self.fail_on = fail_on
        self.calls: List[Path] = []

    async def get_dimensions(self, path: Path):
        self.calls.append(path)
        if self.fail_on is not None and path.name == self.fail_on:
            raise ImageToolError(f"identify failed: no decode delegate for {path.name}")
        return self.width, self.height


class CopyTranscoder(ImageTranscoder):
    """將原檔複製為.webp，記錄輸出路徑"""

    def __init__(self, fail_on: Optional[str] = None):
        self.fail_on = fail_on
        self.outputs: List[Path] = []

    async def transcode(self, input_path: Path, output_dir: Path, quality: int = 80) -> Path:
        if self.fail_on is not None and input_path.name == self.fail_on:
            raise ImageToolError("convert failed: improper image header")
        output_path = self.output_path_for(input_path, output_dir)
        shutil.copyfile(input_path, output_path)
        self.outputs.append(output_path)
        return output_path


class FixedCoverSelector(CoverSelector):
    """依檔名選擇封面"""

    def __init__(self, filename: str):
        self.filename = filename
        self.offered: List[Path] = []

    def select(self, files):
        self.offered = list(files)
        return next(f for f in files if f.name == self.filename)


class RecordingStorage:
    """記錄put_object呼叫的儲存替身"""

    def __init__(self):
        self.calls: List[Dict] = []
        self.objects: Dict[str, bytes] = {}

    async def put_object(self, key, body, content_type, metadata=None):
        self.calls.append({
            "key": key,
            "body": body,
            "content_type": content_type,
            "metadata": dict(metadata or {}),
        })
        self.objects[key] = body


@pytest.fixture
def config():
    """測試用配置"""
    return Config(
        r2_endpoint="https://test.r2.cloudflarestorage.com",
        r2_access_key="test_access_key",
        r2_secret_key="test_secret_key",
        r2_bucket="test-bucket",
        show_progress=False,
    )


@pytest.fixture
def r2_env(monkeypatch):
    """設定必要的R2環境變數"""
    monkeypatch.setenv("R2_ENDPOINT", "https://test.r2.cloudflarestorage.com")
    monkeypatch.setenv("R2_ACCESS_KEY", "test_access_key")
    monkeypatch.setenv("R2_SECRET_KEY", "test_secret_key")
    monkeypatch.setenv("R2_BUCKET", "test-bucket")
    for name in ("R2_REGION", "TRANSCODE", "TRANSCODE_QUALITY", "IMAGE_BACKEND",
                 "IDENTIFY_COMMAND", "CONVERT_COMMAND", "LOG_LEVEL", "LOG_FILE",
                 "SHOW_PROGRESS"):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def missing_env_file(tmp_path):
    """不存在的.env路徑"""
    return str(tmp_path / "missing.env")


def make_image(path: Path, size=(64, 48), color=(200, 30, 30)) -> Path:
    Image.new("RGB", size, color).save(path)
    return path


@pytest.fixture
def photo_folder(tmp_path):
    """含三個檔案與一個子目錄的資料夾"""
    folder = tmp_path / "trip"
    folder.mkdir()
    (folder / "a.jpg").write_bytes(b"jpeg-bytes")
    (folder / "b.png").write_bytes(b"png-bytes")
    (folder / "c.gif").write_bytes(b"gif-bytes")

    nested = folder / "nested"
    nested.mkdir()
    (nested / "ignored.jpg").write_bytes(b"nested")
    return folder
