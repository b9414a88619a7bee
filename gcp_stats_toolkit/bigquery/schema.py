"""Destination table schema for copied query statistics"""

from google.cloud import bigquery
from ..config.constants import DESTINATION_SCHEMA_DEFINITION

QUERY_STATS_SCHEMA = [
    bigquery.SchemaField(name, field_type, mode='REQUIRED')
    for name, field_type, _ in DESTINATION_SCHEMA_DEFINITION
]
