"""Reader for the Cloud Spanner query statistics views"""

from typing import List, Optional

from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.cloud.spanner_v1.database import Database

from ..config.constants import ERROR_MESSAGES, QUERY_STATS_COLUMNS, QUERY_STATS_SQL
from ..utils.exceptions import QueryTemplateError, SpannerQueryError
from ..utils.logging import LoggerMixin
from .models import Granularity, QueryStat


def build_query_stats_statement(granularity: Granularity, template: str = QUERY_STATS_SQL) -> str:
    """
    Render the SELECT for one statistics view
    
    Raises:
        QueryTemplateError: If the template cannot be rendered
    """
    try:
        return template.format(
            columns=',\n  '.join(QUERY_STATS_COLUMNS),
            table=granularity.table
        )
    except (AttributeError, IndexError, KeyError, ValueError) as e:
        raise QueryTemplateError(
            ERROR_MESSAGES['template_failed'].format(table=granularity, error=str(e)),
            details={'granularity': str(granularity)}
        ) from e


class QueryStatsReader(LoggerMixin):
    """Reads query statistics rows through a single-use read-only snapshot"""
    
    def __init__(self, database: Database, template: str = QUERY_STATS_SQL):
        super().__init__()
        self.database = database
        self.template = template
    
    def get_query_stats(self, granularity: Granularity,
                        timeout: Optional[float] = None) -> List[QueryStat]:
        """
        Fetch every row of the view selected by granularity
        
        Args:
            granularity: Aggregation window to read
            timeout: Deadline in seconds for the query
            
        Returns:
            All rows, decoded
            
        Raises:
            QueryTemplateError: If the statement cannot be built
            SpannerQueryError: If the query or row decoding fails
        """
        sql = build_query_stats_statement(granularity, self.template)
        table = granularity.table
        self.log_info(f"Querying Spanner statistics view: {table}")
        self.log_debug(f"Query: {sql}")
        
        stats = []
        try:
            with self.database.snapshot() as snapshot:
                rows = snapshot.execute_sql(sql, retry=None, timeout=timeout)
                for row in rows:
                    try:
                        stats.append(QueryStat.from_row(row))
                    except (TypeError, ValueError) as e:
                        raise SpannerQueryError(
                            ERROR_MESSAGES['decode_failed'].format(table=table, error=str(e)),
                            details={'table': table, 'row': list(row)}
                        ) from e
        except (GoogleAPICallError, RetryError) as e:
            raise SpannerQueryError(
                ERROR_MESSAGES['query_failed'].format(table=table, error=str(e)),
                details={'table': table}
            ) from e
        
        self.log_info(f"Read {len(stats)} rows from {table}")
        return stats
