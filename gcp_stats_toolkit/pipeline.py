"""
Query statistics copy service

Reads one of the spanner_sys.query_stats_top_* views and streams the rows into
a BigQuery table. Client handles are built by the caller and injected.
"""

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import List, Optional, Union

from google.cloud import bigquery
from google.cloud.spanner_v1.database import Database

from .bigquery import QueryStatsWriter
from .config import PipelineConfig, get_default_config
from .spanner import Granularity, QueryStat, QueryStatsReader
from .utils import LoggerMixin


@dataclass
class CopyResult:
    """Summary of one copy run"""
    source_table: str
    destination_table: str
    rows_fetched: int
    insert_ids: List[str]
    elapsed: timedelta


class QueryStatsCopyService(LoggerMixin):
    """Copies Spanner query statistics into BigQuery"""
    
    def __init__(self, database: Database, bq_client: bigquery.Client,
                 config: Optional[PipelineConfig] = None):
        super().__init__()
        self.config = config or get_default_config()
        self.reader = QueryStatsReader(database)
        self.writer = QueryStatsWriter(bq_client)
    
    def get_query_stats(self, granularity: Granularity,
                        timeout: Optional[float] = None) -> List[QueryStat]:
        """Read one statistics view; timeout defaults to config.query_timeout"""
        if timeout is None:
            timeout = self.config.query_timeout
        return self.reader.get_query_stats(granularity, timeout=timeout)
    
    def to_bigquery(self, dataset: Union[bigquery.DatasetReference, str], table: str,
                    stats: List[QueryStat], timeout: Optional[float] = None) -> List[str]:
        """Insert records; timeout defaults to config.insert_timeout"""
        if timeout is None:
            timeout = self.config.insert_timeout
        return self.writer.to_bigquery(dataset, table, stats, timeout=timeout)
    
    def copy(self, granularity: Granularity, dataset: Union[bigquery.DatasetReference, str],
             table: str, query_timeout: Optional[float] = None,
             insert_timeout: Optional[float] = None) -> CopyResult:
        """
        Fetch one statistics view and insert it into the destination table
        
        Args:
            granularity: Source aggregation window
            dataset: Destination dataset
            table: Destination table name
            query_timeout: Deadline for the source query (config default if None)
            insert_timeout: Deadline for the insert (config default if None)
            
        Returns:
            CopyResult for the run
        """
        start_time = datetime.now()
        if isinstance(dataset, str):
            dataset = bigquery.DatasetReference.from_string(dataset)
        destination = f"{dataset.project}.{dataset.dataset_id}.{table}"
        self.log_info("=" * 60)
        self.log_info(f"COPYING QUERY STATS: {granularity.table} -> {destination}")
        self.log_info("=" * 60)
        
        try:
            stats = self.get_query_stats(granularity, query_timeout)
            insert_ids = self.to_bigquery(dataset, table, stats, insert_timeout)
        except Exception as e:
            self.log_error(f"Query stats copy failed: {str(e)}")
            raise
        
        result = CopyResult(
            source_table=granularity.table,
            destination_table=destination,
            rows_fetched=len(stats),
            insert_ids=insert_ids,
            elapsed=datetime.now() - start_time
        )
        self._log_summary(result)
        return result
    
    def _log_summary(self, result: CopyResult) -> None:
        self.log_info("=" * 40)
        self.log_info("COPY SUMMARY")
        self.log_info("=" * 40)
        self.log_info(f"Source: {result.source_table}")
        self.log_info(f"Destination: {result.destination_table}")
        self.log_info(f"Rows fetched: {result.rows_fetched}")
        self.log_info(f"Rows submitted: {len(result.insert_ids)}")
        self.log_info(f"Execution time: {result.elapsed}")
