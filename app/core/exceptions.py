"""استثناءات خدمة الضغط."""


class CompressionError(Exception):
    """فشل عام في عملية الضغط، وهو الخطأ الوحيد الذي يصل إلى المستدعي."""


class InvalidCompressionInput(CompressionError):
    """مدخلات غير صالحة: ملف مفقود أو فارغ أو حجم هدف غير موجب."""
