"""
Shared fixtures for the compression service tests.

Images are synthesised with Pillow and PDFs with reportlab inside ``tmp_path``;
no binary fixtures live in the repository. The upload/compressed directories
used by the module-level API objects are redirected to a throwaway directory
before anything under ``app`` is imported.
"""

import os
import tempfile
from pathlib import Path
from typing import Callable, Sequence, Tuple

os.environ.setdefault("UPLOAD_DIR", tempfile.mkdtemp(prefix="compress-api-tests-"))

import pytest
from PIL import Image
from reportlab.lib.pagesizes import letter
from reportlab.pdfgen import canvas

from app.services.compression_service import CompressionService
from app.storage.local import LocalStorage

RED = (1, 0, 0)
GREEN = (0, 1, 0)
BLUE = (0, 0, 1)


def write_noise_image(path: Path, size: Tuple[int, int], mode: str = "RGB", fmt: str = "PNG") -> Path:
    """Random pixels compress badly, which keeps JPEG sizes well above small targets."""
    width, height = size
    channels = len(mode)
    image = Image.frombytes(mode, size, os.urandom(width * height * channels))
    image.save(path, format=fmt)
    return path


def write_color_pdf(path: Path, colors: Sequence[Tuple[float, float, float]]) -> Path:
    """One letter-sized page per colour, each filled edge to edge."""
    pdf = canvas.Canvas(str(path), pagesize=letter)
    width, height = letter
    for index, color in enumerate(colors, start=1):
        pdf.setFillColorRGB(*color)
        pdf.rect(0, 0, width, height, stroke=0, fill=1)
        pdf.setFillColorRGB(1, 1, 1)
        pdf.setFont("Helvetica-Bold", 36)
        pdf.drawString(72, 72, f"Page {index}")
        pdf.showPage()
    pdf.save()
    return path


@pytest.fixture
def storage(tmp_path: Path) -> LocalStorage:
    upload_dir = tmp_path / "uploads"
    return LocalStorage(upload_dir=upload_dir, compressed_dir=upload_dir / "compressed")


@pytest.fixture
def service(storage: LocalStorage) -> CompressionService:
    return CompressionService(storage)


@pytest.fixture
def upload_file(storage: LocalStorage) -> Callable[[str, bytes], Path]:
    """Place raw bytes in the upload directory the way the upload handler does."""

    def _write(name: str, data: bytes) -> Path:
        path = storage.upload_dir / f"temp-{name}"
        path.write_bytes(data)
        return path

    return _write


@pytest.fixture
def noise_png(storage: LocalStorage) -> Path:
    return write_noise_image(storage.upload_dir / "temp-noise.png", (2400, 1600))


@pytest.fixture
def color_pdf(storage: LocalStorage) -> Path:
    return write_color_pdf(storage.upload_dir / "temp-colors.pdf", [RED, GREEN, BLUE])
