"""
Logging configuration that keeps credentials out of log output
"""

import logging
import logging.config
import re
from typing import Any, Dict

BEARER_PATTERN = re.compile(r"(Bearer\s+)[^\s,;'\"]+", re.IGNORECASE)
REDACTED = "[REDACTED]"


class TokenRedactionFilter(logging.Filter):
    """Filter that masks bearer tokens in log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Rewrite the record message with tokens replaced."""
        message = record.getMessage()
        redacted = BEARER_PATTERN.sub(rf"\g<1>{REDACTED}", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True  # Never drop records, only rewrite them


def get_logging_config(level: str = "INFO") -> Dict[str, Any]:
    """Get logging configuration with token redaction."""
    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "token_redaction_filter": {
                "()": TokenRedactionFilter
            }
        },
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
            }
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["token_redaction_filter"]
            }
        },
        "loggers": {
            "typeauth": {
                "handlers": ["default"],
                "level": level,
                "propagate": False
            },
            "httpx": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            },
            "httpcore": {
                "handlers": ["default"],
                "level": "WARNING",
                "propagate": False
            }
        },
        "root": {
            "level": level,
            "handlers": ["default"]
        }
    }


def configure_logging(level: str = "INFO") -> None:
    """Apply the Typeauth logging configuration."""
    logging.config.dictConfig(get_logging_config(level))
