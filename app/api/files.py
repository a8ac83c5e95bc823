from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from fastapi import APIRouter, Request
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from app.core.config import get_settings
from app.core.logging import configure_logging
from app.models import CompressedFileDescriptor, CompressedFileList
from app.storage.local import LocalStorage
from app.utils.file_utils import file_stats, format_bytes

router = APIRouter(prefix="/api/compress", tags=["Compression"])

logger = configure_logging()
settings = get_settings()
storage = LocalStorage()


def _page_count(path: Path) -> Optional[int]:
    try:
        return len(PdfReader(str(path)).pages)
    except (PdfReadError, OSError) as exc:
        logger.warning("تعذر قراءة عدد صفحات %s: %s", path.name, exc)
        return None


@router.get("/files", response_model=CompressedFileList, summary="قائمة الملفات المضغوطة المتاحة للتنزيل")
async def list_files(request: Request) -> CompressedFileList:
    base_url = settings.public_base_url or str(request.base_url)
    files: list[CompressedFileDescriptor] = []
    for path in storage.list_outputs():
        size_bytes, extension = file_stats(path)
        if size_bytes == 0:
            # ملف محجوز لعملية ضغط ما زالت جارية
            continue
        files.append(
            CompressedFileDescriptor(
                filename=path.name,
                size_bytes=size_bytes,
                size=format_bytes(size_bytes),
                download_url=storage.public_url(path, base_url),
                updated_at=datetime.fromtimestamp(path.stat().st_mtime, tz=timezone.utc),
                page_count=_page_count(path) if extension == "pdf" else None,
            )
        )

    return CompressedFileList(files=files)
