import logging
from logging.handlers import TimedRotatingFileHandler
from pathlib import Path

from healthguardian.config.settings import settings

_BASE_LOGGER_NAME = "healthguardian"
_CONFIGURED = False


def _resolve_log_level(level_name: str) -> int:
    level = getattr(logging, (level_name or "").strip().upper(), None)
    if isinstance(level, int):
        return level
    return logging.INFO


def _add_file_handler(base_logger: logging.Logger) -> None:
    try:
        log_dir = Path(settings.LOG_DIR)
        log_dir.mkdir(parents=True, exist_ok=True)
        handler = TimedRotatingFileHandler(
            filename=str(log_dir / settings.LOG_FILE_NAME),
            when="midnight",
            backupCount=max(settings.LOG_FILE_BACKUP_COUNT, 0),
            encoding="utf-8",
        )
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        base_logger.addHandler(handler)
    except OSError as exc:
        base_logger.warning("[logger] Failed to configure file logging at '%s': %s", settings.LOG_DIR, exc)


def configure_logging() -> None:
    global _CONFIGURED
    if _CONFIGURED:
        return

    base_logger = logging.getLogger(_BASE_LOGGER_NAME)
    base_logger.setLevel(_resolve_log_level(settings.LOG_LEVEL))
    if not base_logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(settings.LOG_FORMAT))
        base_logger.addHandler(handler)
        if settings.LOG_DIR:
            _add_file_handler(base_logger)

    _CONFIGURED = True


def get_logger(name: str | None = None) -> logging.Logger:
    configure_logging()
    base_logger = logging.getLogger(_BASE_LOGGER_NAME)
    if not name:
        return base_logger
    if name == _BASE_LOGGER_NAME or name.startswith(_BASE_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return base_logger.getChild(name)
