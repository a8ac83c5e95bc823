from .common import CompressedFileDescriptor, CompressedFileList
from .compress import CompressionResponse

__all__ = [
    "CompressedFileDescriptor",
    "CompressedFileList",
    "CompressionResponse",
]
