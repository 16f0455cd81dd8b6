import logging
import logging.config


def setup_logging(level: str = "INFO") -> None:
    """Configure console logging for the API process."""
    level = level.upper()
    logging.config.dictConfig(
        {
            "version": 1,
            "disable_existing_loggers": False,
            "formatters": {
                "detailed": {
                    "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                    "datefmt": "%Y-%m-%d %H:%M:%S",
                },
            },
            "handlers": {
                "console": {
                    "class": "logging.StreamHandler",
                    "level": level,
                    "formatter": "detailed",
                    "stream": "ext://sys.stdout",
                },
            },
            "loggers": {
                "": {"level": "WARNING", "handlers": ["console"]},
                "welfare_registry": {"level": level, "handlers": ["console"], "propagate": False},
                "uvicorn": {"level": "INFO", "handlers": ["console"], "propagate": False},
            },
        }
    )
    logging.getLogger(__name__).debug("logging configured at %s", level)
