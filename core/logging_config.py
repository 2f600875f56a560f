import logging.config

from core.config_loader import settings


def configure_logging(level: str | None = None) -> None:
    logging.config.dictConfig({
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "formatter": "default",
            },
        },
        "root": {
            "handlers": ["console"],
            "level": level or settings.LOG_LEVEL,
        },
        "loggers": {
            "sqlalchemy.engine": {
                "level": "INFO" if settings.SQL_ECHO else "WARNING",
            },
        },
    })
