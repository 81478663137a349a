"Handles logging configuration for project"
import logging.config
from typing import Dict, Any

def setup_logging(level: str = "INFO", json_logs: bool = False) -> None:
    """Initialize logging configuration"""
    log_config: Dict[str, Any] = {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "default": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
            },
            "json": {
                "()": "pythonjsonlogger.json.JsonFormatter",
                "format": "%(asctime)s %(name)s %(levelname)s %(message)s",
            },
        },
        "handlers": {
            "console": {
                "class": "logging.StreamHandler",
                "level": level.upper(),
                "formatter": "json" if json_logs else "default",
            },
        },
        "root": {"level": level.upper(), "handlers": ["console"]},
        # socket.io and engine.io are chatty at INFO
        "loggers": {
            "socketio": {"level": "WARNING"},
            "engineio": {"level": "WARNING"},
        },
    }

    #Sets logging configuration across files
    logging.config.dictConfig(log_config)
