from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Sequence

from PIL import Image, ImageOps, UnidentifiedImageError

from app.core.exceptions import InvalidCompressionInput
from app.core.logging import configure_logging

logger = configure_logging()

# يسمح بصور المسح الضوئي والبانوراما الكبيرة حتى 16383 × 16383 بكسل
MAX_IMAGE_PIXELS = 16383 * 16383
Image.MAX_IMAGE_PIXELS = MAX_IMAGE_PIXELS


@dataclass(frozen=True)
class QualityRung:
    max_width: int
    quality: int


# من الأكثر سخاءً إلى الأكثر شدة؛ كل درجة لا تتجاوز سابقتها في العرض أو الجودة.
IMAGE_LADDER: tuple[QualityRung, ...] = (
    QualityRung(max_width=5840, quality=90),
    QualityRung(max_width=1920, quality=85),
    QualityRung(max_width=1280, quality=70),
    QualityRung(max_width=800, quality=50),
)


def to_rgb(image: Image.Image) -> Image.Image:
    """تحويل الصورة إلى RGB مع دمج القناة الشفافة فوق خلفية بيضاء."""
    if image.mode in ("RGBA", "LA", "P"):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, (255, 255, 255))
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    if image.mode != "RGB":
        return image.convert("RGB")
    return image


def fit_width(image: Image.Image, max_width: int) -> Image.Image:
    """تصغير الصورة لتلائم العرض المحدد مع الحفاظ على النسبة ودون تكبير."""
    width, height = image.size
    if width <= max_width:
        return image
    new_height = max(1, round(height * max_width / width))
    return image.resize((max_width, new_height), Image.Resampling.LANCZOS)


def encode_rung(source_path: Path, output_path: Path, rung: QualityRung) -> int:
    """إعادة قراءة المصدر وترميزه كـ JPEG وفق درجة واحدة، وإرجاع الحجم الناتج."""
    try:
        original = Image.open(source_path)
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError) as exc:
        raise InvalidCompressionInput("unreadable image content") from exc

    with original:
        try:
            original.load()
        except OSError as exc:
            raise InvalidCompressionInput("truncated or corrupt image content") from exc

        ImageOps.exif_transpose(original, in_place=True)
        image = original
        # الصيغ ثنائية اللون والمفهرسة لا تدعم LANCZOS، فتُحوَّل قبل التصغير
        if image.mode == "1":
            image = image.convert("L")
        elif image.mode == "P":
            image = image.convert("RGBA")
        image = to_rgb(fit_width(image, rung.max_width))
        image.save(output_path, format="JPEG", quality=rung.quality, optimize=True)
    return output_path.stat().st_size


def compress_image(
    source_path: Path,
    output_path: Path,
    target_size: int,
    ladder: Sequence[QualityRung] = IMAGE_LADDER,
) -> int:
    """
    ضغط صورة نقطية بالمرور على سلم الجودة حتى يصبح الناتج ضمن الحجم المستهدف.

    يُعاد ترميز المصدر كاملًا في كل درجة. بعد آخر درجة يُعاد الناتج كما هو
    حتى لو بقي أكبر من الهدف.
    """
    if not ladder:
        raise ValueError("ladder must not be empty")

    size = 0
    for step, rung in enumerate(ladder, start=1):
        size = encode_rung(source_path, output_path, rung)
        logger.debug(
            "ضغط الصورة - الدرجة %s (عرض %s، جودة %s): %s بايت",
            step,
            rung.max_width,
            rung.quality,
            size,
        )
        if size <= target_size:
            break
    else:
        logger.info("استُنفد سلم الجودة دون بلوغ الهدف (%s > %s بايت).", size, target_size)

    return size
