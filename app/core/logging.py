import logging
from logging import Logger

from .config import get_settings

# مكتبات الترميز تطبع تفاصيل كل مقطع PNG/JPEG على مستوى DEBUG
NOISY_LOGGERS = ("PIL", "fitz", "pypdf")


def _resolve_level(name: str) -> int:
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else logging.INFO


def configure_logging() -> Logger:
    """
    تهيئة مسجل خدمة الضغط مرة واحدة وإرجاعه.

    تحذيرات Python (مثل تحذير Pillow من الصور الضخمة) تُوجَّه إلى نفس
    المعالج، ومسجلات مكتبات الصور وPDF تُرفع إلى WARNING.
    """
    settings = get_settings()

    logger = logging.getLogger(settings.app_name)
    if logger.handlers:
        return logger

    logger.setLevel(_resolve_level(settings.log_level))

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(settings.log_format))
    logger.addHandler(handler)
    logger.propagate = False

    logging.captureWarnings(True)
    warnings_logger = logging.getLogger("py.warnings")
    if not warnings_logger.handlers:
        warnings_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    return logger
