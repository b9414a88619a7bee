"""Utilities module for the GCP stats toolkit"""

from .exceptions import (
    ToolkitError, NotFoundError, InvalidArgumentError, InvalidFormatError,
    MetadataError, QueryTemplateError, SpannerQueryError, BigQueryError
)
from .logging import setup_logging, get_logger, LoggerMixin

__all__ = [
    'ToolkitError',
    'NotFoundError',
    'InvalidArgumentError',
    'InvalidFormatError',
    'MetadataError',
    'QueryTemplateError',
    'SpannerQueryError',
    'BigQueryError',
    'setup_logging',
    'get_logger',
    'LoggerMixin'
]
