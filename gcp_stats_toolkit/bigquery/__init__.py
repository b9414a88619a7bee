"""BigQuery operations module for the GCP stats toolkit"""

from .schema import QUERY_STATS_SCHEMA
from .writer import QueryStatsWriter

__all__ = [
    'QUERY_STATS_SCHEMA',
    'QueryStatsWriter'
]
