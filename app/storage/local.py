import time
from pathlib import Path
from typing import List, Optional, Tuple
from uuid import uuid4

from fastapi import UploadFile

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.utils.file_utils import sanitize_name

logger = configure_logging()

CHUNK_SIZE = 1024 * 1024


class UploadTooLarge(Exception):
    """الملف المرفوع يتجاوز الحد الأقصى المسموح به."""


class LocalStorage:
    """خدمات التخزين المحلية للملفات المرفوعة مؤقتًا والملفات المضغوطة."""

    def __init__(
        self,
        upload_dir: Optional[Path] = None,
        compressed_dir: Optional[Path] = None,
        max_upload_bytes: Optional[int] = None,
    ) -> None:
        settings = get_settings()
        self.upload_dir = Path(upload_dir or settings.upload_dir)
        self.compressed_dir = Path(compressed_dir or settings.compressed_dir)
        self.max_upload_bytes = max_upload_bytes or settings.max_upload_bytes

        for directory in (self.upload_dir, self.compressed_dir):
            directory.mkdir(parents=True, exist_ok=True)

    # ------------------------------------------------------------------
    # الملفات المرفوعة
    # ------------------------------------------------------------------
    def save_upload(self, upload: UploadFile) -> Tuple[Path, int]:
        """حفظ الملف المرفوع على دفعات مع فرض الحد الأقصى للحجم."""
        suffix = Path(upload.filename or "").suffix
        target_path = self.upload_dir / f"temp-{int(time.time() * 1000)}-{uuid4().hex[:9]}{suffix}"

        written = 0
        upload.file.seek(0)
        try:
            with target_path.open("wb") as buffer:
                while True:
                    chunk = upload.file.read(CHUNK_SIZE)
                    if not chunk:
                        break
                    written += len(chunk)
                    if written > self.max_upload_bytes:
                        raise UploadTooLarge(f"upload exceeds {self.max_upload_bytes} bytes")
                    buffer.write(chunk)
        except Exception:
            self.discard(target_path)
            raise

        return target_path, written

    # ------------------------------------------------------------------
    # الملفات المضغوطة
    # ------------------------------------------------------------------
    def reserve_output(self, original_name: str, extension: str) -> Path:
        """
        حجز اسم ملف ناتج بالشكل {الاسم-المنقح}-{الطابع الزمني بالمللي ثانية}{الامتداد}.

        يُنشأ الملف فارغًا بشكل حصري، وعند التصادم يُزاد الطابع الزمني.
        """
        base_name = sanitize_name(original_name)
        timestamp = int(time.time() * 1000)
        while True:
            candidate = self.compressed_dir / f"{base_name}-{timestamp}{extension}"
            try:
                candidate.touch(exist_ok=False)
            except FileExistsError:
                timestamp += 1
                continue
            return candidate

    def list_outputs(self) -> List[Path]:
        return sorted(path for path in self.compressed_dir.glob("*") if path.is_file())

    @staticmethod
    def public_url(path: Path, base_url: str) -> str:
        return f"{base_url.rstrip('/')}/uploads/compressed/{path.name}"

    # ------------------------------------------------------------------
    # التنظيف
    # ------------------------------------------------------------------
    def discard(self, *paths: Optional[Path]) -> None:
        """حذف الملفات المؤقتة أو الجزئية دون السماح لأخطاء الحذف بإخفاء الخطأ الأصلي."""
        for path in paths:
            if not path:
                continue
            try:
                Path(path).unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("تعذر حذف الملف %s: %s", path, exc)
