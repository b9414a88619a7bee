"""Cloud Spanner query statistics module for the GCP stats toolkit"""

from .models import Granularity, QueryStat, to_insert_id
from .reader import QueryStatsReader, build_query_stats_statement

__all__ = [
    'Granularity',
    'QueryStat',
    'to_insert_id',
    'QueryStatsReader',
    'build_query_stats_statement'
]
