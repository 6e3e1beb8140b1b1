# app/core/logger.py
import logging
import os
import sys
from logging.handlers import RotatingFileHandler

from app.core.config import settings

LOG_LEVEL = settings.LOG_LEVEL.upper()

formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")

console_handler = logging.StreamHandler(sys.stdout)
console_handler.setLevel(LOG_LEVEL)
console_handler.setFormatter(formatter)

handlers: list[logging.Handler] = [console_handler]

# archivo rotativo sólo si LOG_FILE está configurado
if settings.LOG_FILE:
    log_dir = os.path.dirname(settings.LOG_FILE)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)
    file_handler = RotatingFileHandler(
        filename=settings.LOG_FILE,
        maxBytes=5 * 1024 * 1024,  # 5MB
        backupCount=3,
    )
    file_handler.setLevel(LOG_LEVEL)
    file_handler.setFormatter(formatter)
    handlers.append(file_handler)

logger = logging.getLogger("healthbridge")
logger.setLevel(LOG_LEVEL)
for h in handlers:
    logger.addHandler(h)
logger.propagate = False


def get_module_logger(name: str) -> logging.Logger:
    """Logger hijo de "healthbridge" (hereda handlers y nivel)."""
    return logger.getChild(name)
