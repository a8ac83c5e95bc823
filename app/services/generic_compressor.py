import gzip
import shutil
from pathlib import Path

COMPRESS_LEVEL = 9
CHUNK_SIZE = 1024 * 1024


def compress_generic(source_path: Path, output_path: Path) -> int:
    """ضغط gzip بأقصى مستوى مع تمرير البيانات على دفعات دون تحميل الملف كاملًا."""
    with source_path.open("rb") as source, gzip.open(output_path, "wb", compresslevel=COMPRESS_LEVEL) as target:
        shutil.copyfileobj(source, target, CHUNK_SIZE)
    return output_path.stat().st_size
