from __future__ import annotations

import asyncio
import os
from dataclasses import dataclass, field
from pathlib import Path

from app.core.config import get_settings
from app.core.exceptions import CompressionError, InvalidCompressionInput
from app.core.logging import configure_logging
from app.services.generic_compressor import compress_generic
from app.services.image_compressor import compress_image
from app.services.pdf_compressor import compress_pdf
from app.storage.local import LocalStorage

logger = configure_logging()

IMAGE_TECHNIQUE = "image-optimization"
PDF_TECHNIQUE = "pdf-rasterization"
GZIP_TECHNIQUE = "gzip"


def _default_target_size() -> int:
    return get_settings().target_size_bytes


@dataclass(frozen=True)
class CompressionRequest:
    source_path: Path
    media_type: str
    original_name: str
    target_size_bytes: int = field(default_factory=_default_target_size)


@dataclass(frozen=True)
class CompressionResult:
    output_path: Path
    size_bytes: int
    technique: str
    original_size_bytes: int

    @property
    def message(self) -> str:
        return f"File compressed using {self.technique}"


def normalize_media_type(media_type: str | None) -> str:
    return (media_type or "").split(";", 1)[0].strip().lower()


class CompressionService:
    """توجيه الملف المرفوع إلى استراتيجية الضغط المناسبة بحسب نوعه المعلن."""

    def __init__(self, storage: LocalStorage | None = None) -> None:
        self.storage = storage or LocalStorage()

    def compress(self, request: CompressionRequest) -> CompressionResult:
        """
        ضغط الملف وإرجاع مسار الناتج وحجمه واسم التقنية المستخدمة.

        يُحذف الملف المؤقت الأصلي في حالتي النجاح والفشل، ولا يبقى أي ناتج جزئي
        عند الفشل. أي خطأ داخلي يُسجل ثم يُرفع كـ CompressionError عام.
        """
        source_path = Path(request.source_path)
        output_path: Path | None = None

        try:
            original_size = self._validate(request, source_path)
            media_type = normalize_media_type(request.media_type)

            if media_type.startswith("image/"):
                self._require_content(original_size, "image")
                output_path = self.storage.reserve_output(request.original_name, ".jpg")
                size = compress_image(source_path, output_path, request.target_size_bytes)
                technique = IMAGE_TECHNIQUE
            elif media_type == "application/pdf":
                self._require_content(original_size, "PDF")
                output_path = self.storage.reserve_output(request.original_name, ".pdf")
                size = compress_pdf(source_path, output_path, request.target_size_bytes)
                technique = PDF_TECHNIQUE
            else:
                extension = Path(request.original_name or "").suffix
                output_path = self.storage.reserve_output(request.original_name, f"{extension}.gz")
                size = compress_generic(source_path, output_path)
                technique = GZIP_TECHNIQUE
        except InvalidCompressionInput as exc:
            logger.warning("مدخلات ضغط غير صالحة للملف %s: %s", request.original_name, exc)
            self.storage.discard(output_path, source_path)
            raise
        except Exception as exc:
            logger.exception("فشل ضغط الملف %s", request.original_name)
            self.storage.discard(output_path, source_path)
            raise CompressionError("compression failed") from exc

        self.storage.discard(source_path)
        logger.info(
            "تم ضغط الملف %s باستخدام %s: %s -> %s بايت",
            request.original_name,
            technique,
            original_size,
            size,
        )
        return CompressionResult(
            output_path=output_path,
            size_bytes=size,
            technique=technique,
            original_size_bytes=original_size,
        )

    async def compress_async(self, request: CompressionRequest) -> CompressionResult:
        """تشغيل الضغط في خيط منفصل حتى لا تُحجب حلقة الأحداث."""
        return await asyncio.to_thread(self.compress, request)

    # ------------------------------------------------------------------
    @staticmethod
    def _validate(request: CompressionRequest, source_path: Path) -> int:
        if request.target_size_bytes <= 0:
            raise InvalidCompressionInput("target size must be positive")
        if not source_path.is_file() or not os.access(source_path, os.R_OK):
            raise InvalidCompressionInput(f"source is missing or unreadable: {source_path}")
        return source_path.stat().st_size

    @staticmethod
    def _require_content(size: int, kind: str) -> None:
        if size == 0:
            raise InvalidCompressionInput(f"empty {kind} file")
