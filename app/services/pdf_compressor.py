from __future__ import annotations

from dataclasses import dataclass
from io import BytesIO
from pathlib import Path

import fitz  # PyMuPDF
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from app.core.exceptions import InvalidCompressionInput
from app.core.logging import configure_logging
from app.services.image_compressor import fit_width
from app.utils.pdf_render import rasterize_page

logger = configure_logging()

KIB = 1024


@dataclass(frozen=True)
class PdfPreset:
    scale: float
    quality: int
    max_width: int


AGGRESSIVE_PRESET = PdfPreset(scale=1.0, quality=40, max_width=800)
BALANCED_PRESET = PdfPreset(scale=1.2, quality=60, max_width=1000)
GENEROUS_PRESET = PdfPreset(scale=1.5, quality=70, max_width=1200)


def select_preset(target_size: int, page_count: int) -> PdfPreset:
    """اختيار إعدادات العرض والجودة بحسب الميزانية التقريبية لكل صفحة."""
    if page_count < 1:
        raise ValueError("page_count must be >= 1")

    per_page = target_size / page_count
    if per_page < 100 * KIB:
        return AGGRESSIVE_PRESET
    if per_page < 300 * KIB:
        return BALANCED_PRESET
    return GENEROUS_PRESET


def compress_pdf(source_path: Path, output_path: Path, target_size: int) -> int:
    """
    ضغط ملف PDF بتحويل كل صفحة إلى صورة JPEG وإعادة بناء المستند.

    تُختار الإعدادات مرة واحدة قبل المعالجة ولا توجد محاولة ثانية أشد؛
    لذلك قد يتجاوز الناتج الحجم المستهدف في المستندات الكثيفة.
    النصوص والرسومات المتجهة تُفقد لأن كل صفحة تصبح صورة.

    Args:
        source_path: مسار ملف PDF الأصلي.
        output_path: مسار ملف PDF الناتج.
        target_size: الحجم المستهدف بالبايت.
    """
    try:
        document = fitz.open(source_path, filetype="pdf")
    except fitz.FileDataError as exc:
        raise InvalidCompressionInput("malformed PDF content") from exc

    with document:
        if document.needs_pass:
            raise InvalidCompressionInput("PDF is password protected")
        page_count = document.page_count
        if page_count < 1:
            raise InvalidCompressionInput("PDF has no pages")

        preset = select_preset(target_size, page_count)
        logger.info(
            "ضغط PDF: %s صفحة، الهدف %s بايت، المقياس %s، الجودة %s، العرض %s",
            page_count,
            target_size,
            preset.scale,
            preset.quality,
            preset.max_width,
        )

        pdf_canvas = canvas.Canvas(str(output_path))
        for index in range(page_count):
            with rasterize_page(document, index, preset.scale) as rendered:
                jpeg_bytes = _encode_page(rendered, preset)
            _append_image_page(pdf_canvas, jpeg_bytes)
        pdf_canvas.save()

    return output_path.stat().st_size


def _encode_page(rendered, preset: PdfPreset) -> bytes:
    buffer = BytesIO()
    resized = fit_width(rendered, preset.max_width)
    try:
        resized.save(buffer, format="JPEG", quality=preset.quality, optimize=True)
    finally:
        if resized is not rendered:
            resized.close()
    return buffer.getvalue()


def _append_image_page(pdf_canvas: canvas.Canvas, jpeg_bytes: bytes) -> None:
    """إضافة صفحة جديدة بحجم الصورة تمامًا (نقطة لكل بكسل) ورسم الصورة عليها."""
    image = ImageReader(BytesIO(jpeg_bytes))
    width, height = image.getSize()
    pdf_canvas.setPageSize((width, height))
    pdf_canvas.drawImage(image, 0, 0, width=width, height=height)
    pdf_canvas.showPage()
