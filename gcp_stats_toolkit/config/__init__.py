"""Configuration module for the GCP stats toolkit"""

from .settings import PipelineConfig, get_default_config
from .constants import QUERY_STATS_COLUMNS, QUERY_STATS_SQL, SOURCE_TABLES

__all__ = [
    'PipelineConfig',
    'get_default_config',
    'QUERY_STATS_COLUMNS',
    'QUERY_STATS_SQL',
    'SOURCE_TABLES'
]
