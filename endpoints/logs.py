import logging
import logging.handlers
import json
import os
from typing import Optional, Dict, Any
from config import settings
import traceback

class Logger:
    def __init__(self, log_file: Optional[str] = None, max_log_days: int = 7):
        """
        Initialize the chat logger with JSON formatting, optional daily file rotation and dynamic log level.
        """
        # Configure logger
        self.logger = logging.getLogger("ChatRelayLogger")
        self.logger.setLevel(getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO))
        self.logger.propagate = False

        # Remove existing handlers to avoid duplication
        self.logger.handlers.clear()

        # JSON formatter
        formatter = logging.Formatter(
            json.dumps({
                "timestamp": "%(asctime)s",
                "level": "%(levelname)s",
                "action": "%(message)s",
                "connection_id": "%(connection_id)s",
                "username": "%(username)s",
                "context": "%(context)s"
            }, ensure_ascii=False)
        )

        # Stream handler for stdout
        stream_handler = logging.StreamHandler()
        stream_handler.setFormatter(formatter)
        self.logger.addHandler(stream_handler)

        if log_file:
            # Ensure log directory exists
            log_dir = os.path.dirname(log_file)
            if log_dir:
                os.makedirs(log_dir, exist_ok=True)
            # File handler with daily rotation
            file_handler = logging.handlers.TimedRotatingFileHandler(
                filename=log_file,
                when="midnight",
                interval=1,
                backupCount=max_log_days,
                encoding="utf-8"
            )
            file_handler.setFormatter(formatter)
            self.logger.addHandler(file_handler)

    def log_action(
        self,
        action: str,
        level: str = "INFO",
        connection_id: str = "",
        username: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Log a chat action with its connection and session context.
        """
        context_str = json.dumps(context or {}, ensure_ascii=False)

        self.logger.log(
            level=getattr(logging, level.upper(), logging.INFO),
            msg=action,
            extra={
                "connection_id": connection_id or "-",
                "username": username if username is not None else "anonymous",
                "context": context_str
            }
        )

    def log_error(
        self,
        action: str,
        error: Exception,
        connection_id: str = "",
        username: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None
    ):
        """
        Log an error with stack trace.
        """
        context = dict(context or {})
        context["error"] = str(error)
        context["stack_trace"] = "".join(traceback.format_tb(error.__traceback__)) if error.__traceback__ else "N/A"
        self.log_action(action, "ERROR", connection_id, username, context)

# Singleton logger instance
logger_instance = Logger(log_file=settings.LOG_FILE)

# Convenience functions for use in other modules
def log_action(action: str, connection_id: str = "", username: Optional[str] = None, context: Optional[Dict[str, Any]] = None, level: str = "INFO"):
    logger_instance.log_action(action, level, connection_id, username, context)

def log_error(action: str, error: Exception, connection_id: str = "", username: Optional[str] = None, context: Optional[Dict[str, Any]] = None):
    logger_instance.log_error(action, error, connection_id, username, context)
