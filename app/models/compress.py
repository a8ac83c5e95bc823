from pydantic import BaseModel, Field


class CompressionResponse(BaseModel):
    original_size: str = Field(..., description="حجم الملف الأصلي بصيغة مقروءة.")
    compressed_size: str = Field(..., description="حجم الملف المضغوط بصيغة مقروءة.")
    url: str = Field(..., description="رابط تنزيل الملف المضغوط.")
    message: str = Field(..., description="وصف التقنية المستخدمة في الضغط.")
