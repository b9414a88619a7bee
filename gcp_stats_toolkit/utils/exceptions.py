"""Custom exceptions for the GCP stats toolkit"""


class ToolkitError(Exception):
    """Base exception for all toolkit errors"""
    
    default_code = None
    
    def __init__(self, message: str, error_code: str = None, details: dict = None):
        super().__init__(message)
        self.error_code = error_code or self.default_code
        self.details = details or {}
    
    def __str__(self):
        if self.error_code:
            return f"[{self.error_code}] {super().__str__()}"
        return super().__str__()


class NotFoundError(ToolkitError):
    """Required identity value is absent from both metadata and environment"""
    default_code = 'NOT_FOUND'


class InvalidArgumentError(ToolkitError):
    """Malformed input to a parsing operation"""
    default_code = 'INVALID_ARGUMENT'


class InvalidFormatError(ToolkitError):
    """Value has an unexpected shape"""
    default_code = 'INVALID_FORMAT'


class MetadataError(ToolkitError):
    """Exception raised when the metadata server cannot answer"""
    default_code = 'METADATA_ERROR'
    
    @property
    def status_code(self):
        return self.details.get('status_code')


class QueryTemplateError(ToolkitError):
    """Exception raised while building a query statement"""
    default_code = 'QUERY_TEMPLATE_ERROR'


class SpannerQueryError(ToolkitError):
    """Exception raised during Spanner query execution or row decoding"""
    default_code = 'SPANNER_QUERY_ERROR'


class BigQueryError(ToolkitError):
    """Exception raised during BigQuery operations"""
    default_code = 'BIGQUERY_ERROR'
