"""Logging utilities for the GCP stats toolkit"""

import logging
from typing import Iterable, Optional
from ..config.settings import PipelineConfig

# httpx logs every request at INFO, which would repeat each metadata lookup
NOISY_LOGGERS = ('httpx', 'httpcore', 'google.auth', 'urllib3')


def setup_logging(config: PipelineConfig, quiet: Iterable[str] = NOISY_LOGGERS) -> None:
    """
    Setup logging configuration for the toolkit
    
    Args:
        config: Pipeline configuration
        quiet: Third-party logger names capped at WARNING
    """
    logging.basicConfig(
        level=getattr(logging, config.log_level.upper()),
        format=config.log_format
    )
    for name in quiet:
        logging.getLogger(name).setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger with the specified name
    
    Args:
        name: Logger name
        
    Returns:
        Logger instance
    """
    return logging.getLogger(name)


class LoggerMixin:
    """Mixin class giving components a logger named after their class"""
    
    def __init__(self, logger_name: Optional[str] = None):
        self.logger = get_logger(logger_name or self.__class__.__name__)
    
    def log_info(self, message: str, *args, **kwargs):
        """Log info message"""
        self.logger.info(message, *args, **kwargs)
    
    def log_warning(self, message: str, *args, **kwargs):
        """Log warning message"""
        self.logger.warning(message, *args, **kwargs)
    
    def log_error(self, message: str, *args, **kwargs):
        """Log error message"""
        self.logger.error(message, *args, **kwargs)
    
    def log_debug(self, message: str, *args, **kwargs):
        """Log debug message"""
        self.logger.debug(message, *args, **kwargs)
