"""Logging configuration utilities."""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime
from pathlib import Path

from membercard.config.logging_filters import SensitiveDataFilter
from membercard.config.types import AppConfig


class JsonFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def __init__(self, include_timestamp: bool = True):
        """Initialize formatter.
        
        Args:
            include_timestamp: Whether to include timestamp in output
        """
        self.include_timestamp = include_timestamp
        super().__init__()

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        data = {
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage()
        }

        if self.include_timestamp:
            data['timestamp'] = datetime.fromtimestamp(record.created).isoformat()

        if record.exc_info:
            data['exception'] = self.formatException(record.exc_info)

        if hasattr(record, 'extra_fields'):
            data.update(record.extra_fields)

        return json.dumps(data, default=str)

class ColoredFormatter(logging.Formatter):
    """Formatter that adds color to console output."""

    COLORS = {
        'DEBUG': '\033[36m',     # Cyan
        'INFO': '\033[32m',      # Green
        'WARNING': '\033[33m',   # Yellow
        'ERROR': '\033[31m',     # Red
        'CRITICAL': '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with color."""
        color = self.COLORS.get(record.levelname, self.RESET)
        timestamp = datetime.fromtimestamp(record.created).strftime('%Y-%m-%d %H:%M:%S,%f')[:-3]
        msg = record.getMessage()
        
        context = ""
        if hasattr(record, 'extra_fields'):
            fields = [f"\n    {key}: {value}" for key, value in record.extra_fields.items()]
            if fields:
                context = " |" + "".join(fields)
        
        if record.exc_info:
            msg = f"{msg}\n{self.formatException(record.exc_info)}"
        
        return f"{color}{timestamp} - {record.name} - {record.levelname} - {msg}{context}{self.RESET}"

def get_console_handler(formatter: logging.Formatter) -> logging.StreamHandler:
    """Create console handler.
    
    Args:
        formatter: Formatter to use
        
    Returns:
        Configured console handler
    """
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setFormatter(formatter)
    return console_handler

def get_file_handler(
    log_file: str | Path,
    formatter: logging.Formatter,
    max_bytes: int,
    backup_count: int
) -> logging.handlers.RotatingFileHandler:
    """Create rotating file handler.
    
    Args:
        log_file: Path to log file
        formatter: Formatter to use
        max_bytes: Maximum file size in bytes
        backup_count: Number of backup files to keep
        
    Returns:
        Configured file handler
    """
    log_dir = os.path.dirname(log_file)
    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=max_bytes,
        backupCount=backup_count,
        encoding='utf-8'
    )
    file_handler.setFormatter(formatter)
    return file_handler

def setup_logging(config: AppConfig | None = None, verbose: bool = False, log_file: str | None = None) -> None:
    """Set up logging configuration.

    Args:
        config: Application configuration supplying level and log file
        verbose: Force DEBUG level on the console
        log_file: Log file path overriding the configured one
    """
    level_name = config.log_level if config else 'WARNING'
    level = logging.DEBUG if verbose else getattr(logging, level_name.upper(), logging.WARNING)
    
    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()
    
    sensitive_filter = SensitiveDataFilter()
    
    console_handler = get_console_handler(ColoredFormatter())
    console_handler.setLevel(level)
    console_handler.addFilter(sensitive_filter)
    root_logger.addHandler(console_handler)
    
    log_file = log_file or (config.log_file if config else None)
    if log_file:
        max_size = config.log_max_size if config else 10
        backup_count = config.log_backup_count if config else 5
        file_handler = get_file_handler(
            log_file,
            JsonFormatter(include_timestamp=True),
            max_size * 1024 * 1024,
            backup_count
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.addFilter(sensitive_filter)
        root_logger.addHandler(file_handler)
    
    # Keep third-party libraries quiet unless debugging
    for library in ('urllib3', 'requests'):
        logging.getLogger(library).setLevel(logging.DEBUG if verbose else logging.WARNING)
    
    root_logger.debug("Logging configured", extra={'extra_fields': {'level': logging.getLevelName(level)}})
