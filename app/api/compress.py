import asyncio
from typing import Optional

from fastapi import APIRouter, File, Form, HTTPException, Request, UploadFile, status

from app.core.config import get_settings
from app.core.exceptions import CompressionError, InvalidCompressionInput
from app.core.logging import configure_logging
from app.models import CompressionResponse
from app.services.compression_service import CompressionRequest, CompressionService
from app.storage.local import LocalStorage, UploadTooLarge
from app.utils.file_utils import format_bytes

router = APIRouter(prefix="/api/compress", tags=["Compression"])

logger = configure_logging()
settings = get_settings()
storage = LocalStorage()
compression_service = CompressionService(storage)


def _parse_target_size(raw: Optional[str]) -> Optional[int]:
    """قراءة الحجم المستهدف من حقل النموذج؛ أي قيمة غير عدد صحيح موجب تُرفض بـ 400."""
    if raw is None or not raw.strip():
        return None
    try:
        value = int(raw.strip())
    except ValueError:
        value = 0
    if value <= 0:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="target_size must be a positive number of bytes",
        )
    return value


@router.post(
    "",
    response_model=CompressionResponse,
    summary="رفع ملف وضغطه: الصور بسلم جودة، PDF بتحويل الصفحات إلى صور، وغيرها بـ gzip",
)
async def compress_upload(
    request: Request,
    file: Optional[UploadFile] = File(default=None),
    target_size: Optional[str] = Form(default=None, description="الحجم المستهدف بالبايت (اختياري)."),
) -> CompressionResponse:
    if file is None or not file.filename:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="No file uploaded")

    target_bytes = _parse_target_size(target_size)

    try:
        temp_path, original_size = await asyncio.to_thread(storage.save_upload, file)
    except UploadTooLarge:
        raise HTTPException(
            status_code=status.HTTP_413_REQUEST_ENTITY_TOO_LARGE,
            detail=f"File exceeds the {format_bytes(storage.max_upload_bytes)} upload limit",
        )

    logger.info("تم رفع ملف للضغط: %s (%s)", file.filename, file.content_type)

    compression_request = CompressionRequest(
        source_path=temp_path,
        media_type=file.content_type or "application/octet-stream",
        original_name=file.filename,
        target_size_bytes=target_bytes or settings.target_size_bytes,
    )

    try:
        result = await compression_service.compress_async(compression_request)
    except InvalidCompressionInput:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Invalid file for compression")
    except CompressionError:
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to compress file")

    base_url = settings.public_base_url or str(request.base_url)

    return CompressionResponse(
        original_size=format_bytes(original_size),
        compressed_size=format_bytes(result.size_bytes),
        url=storage.public_url(result.output_path, base_url),
        message=result.message,
    )
