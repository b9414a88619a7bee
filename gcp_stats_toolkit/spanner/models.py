"""Query statistics records read from the spanner_sys views"""

import calendar
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional, Sequence

from ..config.constants import (
    DESTINATION_SCHEMA_DEFINITION, ERROR_MESSAGES, INSERT_ID_SEPARATOR, QUERY_STATS_COLUMNS,
    SOURCE_TABLES
)
from ..utils.exceptions import InvalidArgumentError


class Granularity(Enum):
    """Aggregation window of a query statistics view"""
    MINUTE = 'minute'
    TEN_MINUTE = '10minute'
    HOUR = 'hour'
    
    @property
    def table(self) -> str:
        return SOURCE_TABLES[self.value]
    
    @classmethod
    def parse(cls, value: str) -> 'Granularity':
        try:
            return cls(value)
        except ValueError as e:
            raise InvalidArgumentError(
                ERROR_MESSAGES['unknown_granularity'].format(
                    value=value, choices=[g.value for g in cls]
                ),
                details={'input_argument': value}
            ) from e


def to_insert_id(interval_end: datetime, text_fingerprint: int) -> str:
    """
    Build the BigQuery insert id for one (interval, query) pair
    
    Naive datetimes are taken as UTC. Seconds are floored, so the id is
    stable for any sub-second precision the source reports.
    """
    seconds = calendar.timegm(interval_end.utctimetuple())
    return f"{seconds}{INSERT_ID_SEPARATOR}{text_fingerprint}"


@dataclass
class QueryStat:
    """One row of spanner_sys.query_stats_top_*"""
    
    interval_end: datetime  # End of the interval the executions occurred in
    text: str  # Query text, truncated to approximately 64KB
    text_truncated: bool
    text_fingerprint: int  # Hash of the query text
    execution_count: int
    avg_latency_seconds: float
    avg_rows: float
    avg_bytes: float
    avg_rows_scanned: float
    avg_cpu_seconds: float
    insert_id: Optional[str] = None
    
    @classmethod
    def from_row(cls, row: Sequence[Any]) -> 'QueryStat':
        """
        Decode a result row ordered as QUERY_STATS_COLUMNS
        
        Raises:
            ValueError: If the row has the wrong width or an interval_end
                that is not a timestamp
            TypeError: If a numeric column holds a non-numeric value
        """
        if len(row) != len(QUERY_STATS_COLUMNS):
            raise ValueError(f"expected {len(QUERY_STATS_COLUMNS)} columns, got {len(row)}")
        values = dict(zip(QUERY_STATS_COLUMNS, row))
        if not isinstance(values['interval_end'], datetime):
            raise ValueError(f"interval_end is not a timestamp: {values['interval_end']!r}")
        
        return cls(
            interval_end=values['interval_end'],
            text=str(values['text']),
            text_truncated=bool(values['text_truncated']),
            text_fingerprint=int(values['text_fingerprint']),
            execution_count=int(values['execution_count']),
            avg_latency_seconds=float(values['avg_latency_seconds']),
            avg_rows=float(values['avg_rows']),
            avg_bytes=float(values['avg_bytes']),
            avg_rows_scanned=float(values['avg_rows_scanned']),
            avg_cpu_seconds=float(values['avg_cpu_seconds'])
        )
    
    def to_insert_id(self) -> str:
        """Compute the insert id and keep it on the record"""
        self.insert_id = to_insert_id(self.interval_end, self.text_fingerprint)
        return self.insert_id
    
    def to_bigquery_row(self) -> Dict[str, Any]:
        return {column: getattr(self, attr) for column, _, attr in DESTINATION_SCHEMA_DEFINITION}
