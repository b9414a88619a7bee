"""BigQuery writer for copied query statistics"""

from typing import List, Optional, Sequence, Union

from google.api_core.exceptions import GoogleAPICallError, RetryError
from google.cloud import bigquery

from ..config.constants import ERROR_MESSAGES
from ..spanner.models import QueryStat
from ..utils.exceptions import BigQueryError
from ..utils.logging import LoggerMixin
from .schema import QUERY_STATS_SCHEMA


class QueryStatsWriter(LoggerMixin):
    """Streams query statistics into a BigQuery table, deduplicated by insert id"""
    
    def __init__(self, client: bigquery.Client):
        super().__init__()
        self.client = client
    
    def to_bigquery(self, dataset: Union[bigquery.DatasetReference, str], table: str,
                    stats: Sequence[QueryStat], timeout: Optional[float] = None) -> List[str]:
        """
        Insert all records as a single streaming insert
        
        Args:
            dataset: Destination dataset, as a reference or "project.dataset"
            table: Destination table name
            stats: Records to insert
            timeout: Deadline in seconds for the insert call
            
        Returns:
            Insert ids submitted, in record order
            
        Raises:
            BigQueryError: If the call fails or any row is rejected
        """
        if isinstance(dataset, str):
            dataset = bigquery.DatasetReference.from_string(dataset)
        table_ref = dataset.table(table)
        table_name = f"{table_ref.project}.{table_ref.dataset_id}.{table_ref.table_id}"
        
        if not stats:
            self.log_warning(f"No records to insert into {table_name}")
            return []
        
        insert_ids = [stat.to_insert_id() for stat in stats]
        rows = [stat.to_bigquery_row() for stat in stats]
        
        self.log_info(f"Inserting {len(rows)} rows into {table_name}")
        try:
            errors = self.client.insert_rows(
                table_ref,
                rows,
                selected_fields=QUERY_STATS_SCHEMA,
                row_ids=insert_ids,
                retry=None,
                timeout=timeout
            )
        except (GoogleAPICallError, RetryError) as e:
            raise BigQueryError(
                ERROR_MESSAGES['insert_failed'].format(table=table_name, error=str(e)),
                details={'table': table_name}
            ) from e
        
        if errors:
            raise BigQueryError(
                ERROR_MESSAGES['insert_row_errors'].format(count=len(errors), table=table_name),
                details={'table': table_name, 'errors': errors}
            )
        
        self.log_info(f"Successfully inserted {len(rows)} rows into {table_name}")
        return insert_ids
