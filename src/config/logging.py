import logging.config


def setup_logging(level: str = "INFO") -> None:
    """Configure application-wide logging.

    Installs a single console handler on the root logger and keeps the
    noisy SQLAlchemy engine logger at WARNING regardless of the
    application level.

    Args:
        level (str): Log level name for the application loggers.
    """
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "default": {
                    "format": "%(asctime)s %(levelname)s [%(name)s] %(message)s"
                }
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "formatter": "default",
                }
            },
            "root": {
                "handlers": ["console"],
                "level": level.upper(),
            },
            "loggers": {
                "sqlalchemy.engine": {"level": "WARNING"},
            },
        }
    )
