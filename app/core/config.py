from functools import lru_cache
from pathlib import Path
from typing import Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

MEBIBYTE = 1024 * 1024


class Settings(BaseSettings):
    """إعدادات خدمة الضغط مع تحميل القيم من ملف .env عند توفره."""

    model_config = SettingsConfigDict(
        env_file=Path(__file__).resolve().parents[2] / ".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "Site Files Compression API"
    app_version: str = "0.1.0"
    log_level: str = "INFO"
    log_format: str = "[%(levelname)s] %(asctime)s | %(name)s | %(message)s"

    base_dir: Path = Field(default_factory=lambda: Path(__file__).resolve().parents[2])
    upload_dir: Optional[Path] = None
    compressed_dir: Optional[Path] = None

    target_size_bytes: int = Field(default=10 * MEBIBYTE, gt=0)
    max_upload_bytes: int = Field(default=50 * MEBIBYTE, gt=0)

    public_base_url: Optional[str] = None
    allow_origins: list[str] = Field(default_factory=lambda: ["*"])

    def configure_paths(self) -> None:
        """تهيئة مجلدات الرفع والملفات المضغوطة وإنشاؤها في حال غيابها."""
        self.upload_dir = (self.upload_dir or (self.base_dir / "uploads")).resolve()
        self.compressed_dir = (self.compressed_dir or (self.upload_dir / "compressed")).resolve()

        for directory in (self.upload_dir, self.compressed_dir):
            directory.mkdir(parents=True, exist_ok=True)


@lru_cache()
def get_settings() -> Settings:
    settings = Settings()
    settings.configure_paths()
    return settings
