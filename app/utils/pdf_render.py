from contextlib import contextmanager
from typing import Iterator

import fitz  # PyMuPDF
from PIL import Image


@contextmanager
def rasterize_page(document: fitz.Document, page_index: int, scale: float = 1.5) -> Iterator[Image.Image]:
    """
    تحويل صفحة PDF إلى صورة RGB مؤقتة وتحرير موارد العرض فور الخروج من السياق.

    Args:
        document: مستند PyMuPDF مفتوح.
        page_index: رقم الصفحة (يبدأ من 0).
        scale: معامل التكبير المستخدم عند العرض.
    """
    if page_index < 0 or page_index >= document.page_count:
        raise ValueError("page_index out of range")

    page = document.load_page(page_index)
    pixmap = None
    image = None
    try:
        pixmap = page.get_pixmap(matrix=fitz.Matrix(scale, scale), alpha=False)
        if pixmap.n != 3:  # pragma: no cover - مساحات ألوان غير RGB
            pixmap = fitz.Pixmap(fitz.csRGB, pixmap)
        image = Image.frombytes("RGB", (pixmap.width, pixmap.height), pixmap.samples)
        yield image
    finally:
        if image is not None:
            image.close()
        del pixmap, page
