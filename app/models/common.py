from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel


class CompressedFileDescriptor(BaseModel):
    filename: str
    size_bytes: int
    size: str
    download_url: str
    updated_at: datetime
    page_count: Optional[int] = None


class CompressedFileList(BaseModel):
    files: List[CompressedFileDescriptor]
