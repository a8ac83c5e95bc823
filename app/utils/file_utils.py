import re
from pathlib import Path
from typing import Tuple

SIZE_UNITS = ("Bytes", "KB", "MB", "GB", "TB")

_UNSAFE_CHARS = re.compile(r"[^a-z0-9]", re.IGNORECASE)


def format_bytes(size: int, decimals: int = 2) -> str:
    """
    تحويل عدد البايتات إلى نص مقروء بوحدات ثنائية (1024).

    أمثلة: 0 -> "0 Bytes"، 1536 -> "1.5 KB"، 1048576 -> "1 MB".
    """
    if size < 0:
        raise ValueError("size must be >= 0")
    if size == 0:
        return "0 Bytes"

    decimals = max(decimals, 0)
    index = 0
    value = float(size)
    while value >= 1024 and index < len(SIZE_UNITS) - 1:
        value /= 1024
        index += 1

    text = f"{value:.{decimals}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return f"{text} {SIZE_UNITS[index]}"


def sanitize_name(original_name: str) -> str:
    """اسم أساسي آمن: بدون امتداد، كل محرف غير أبجدي رقمي يصبح _ وبأحرف صغيرة."""
    stem = Path(Path(original_name or "").name).stem
    cleaned = _UNSAFE_CHARS.sub("_", stem).lower()
    return cleaned or "file"


def file_stats(path: Path) -> Tuple[int, str]:
    """إرجاع حجم الملف بالبَيت ونوعه البسيط للاستخدام في الاستجابات."""
    size = path.stat().st_size if path.exists() else 0
    suffix = path.suffix.lower().lstrip(".")
    return size, suffix or "bin"
