"""Constants for the GCP stats toolkit"""

# Environment variables read when running outside Google Cloud
PROJECT_ENV_VARS = ('GOOGLE_CLOUD_PROJECT', 'GCLOUD_PROJECT')
SERVICE_ACCOUNT_ENV_VAR = 'GCLOUD_SERVICE_ACCOUNT'
REGION_ENV_VAR = 'INSTANCE_REGION'
ZONE_ENV_VAR = 'INSTANCE_ZONE'
INSTANCE_ATTRIBUTE_ENV_PREFIX = 'INSTANCE_'
PROJECT_ATTRIBUTE_ENV_PREFIX = 'PROJECT_'

# Metadata server
METADATA_HOST_ENV_VAR = 'GCE_METADATA_HOST'
METADATA_HOST = 'metadata.google.internal'
METADATA_IP = '169.254.169.254'
METADATA_URL_TEMPLATE = 'http://{host}/computeMetadata/v1/{path}'
METADATA_HEADERS = {'Metadata-Flavor': 'Google'}

METADATA_PATHS = {
    'project_id': 'project/project-id',
    'service_account_email': 'instance/service-accounts/default/email',
    'zone': 'instance/zone',
    'instance_attribute': 'instance/attributes/{key}',
    'project_attribute': 'project/attributes/{key}'
}

ZONE_PATH_FORMAT = 'projects/[NUMERIC_PROJECT_ID]/zones/[ZONE]'
SERVICE_ACCOUNT_ID_TEMPLATE = 'projects/{project}/serviceAccounts/{email}'

# Spanner query statistics views, one per aggregation window
SOURCE_TABLES = {
    'minute': 'spanner_sys.query_stats_top_minute',
    '10minute': 'spanner_sys.query_stats_top_10minute',
    'hour': 'spanner_sys.query_stats_top_hour'
}

QUERY_STATS_COLUMNS = (
    'text',
    'text_truncated',
    'text_fingerprint',
    'interval_end',
    'execution_count',
    'avg_latency_seconds',
    'avg_rows',
    'avg_bytes',
    'avg_rows_scanned',
    'avg_cpu_seconds'
)

QUERY_STATS_SQL = """
SELECT
  {columns}
FROM {table}
"""

INSERT_ID_SEPARATOR = '-_-'

# Destination table layout: (column name, BigQuery type, record attribute)
DESTINATION_SCHEMA_DEFINITION = (
    ('IntervalEnd', 'TIMESTAMP', 'interval_end'),
    ('Text', 'STRING', 'text'),
    ('TextTruncated', 'BOOLEAN', 'text_truncated'),
    ('TextFingerprint', 'INTEGER', 'text_fingerprint'),
    ('ExecuteCount', 'INTEGER', 'execution_count'),
    ('AvgLatencySeconds', 'FLOAT', 'avg_latency_seconds'),
    ('AvgRows', 'FLOAT', 'avg_rows'),
    ('AvgBytes', 'FLOAT', 'avg_bytes'),
    ('AvgRowsScanned', 'FLOAT', 'avg_rows_scanned'),
    ('AvgCPUSeconds', 'FLOAT', 'avg_cpu_seconds')
)

# Default values
DEFAULT_VALUES = {
    'log_level': 'INFO',
    'log_format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    'metadata_timeout': 5.0,
    'metadata_probe_timeout': 1.0,
    'query_timeout': 60.0,
    'insert_timeout': 60.0
}

# Environment overrides for PipelineConfig
CONFIG_ENV_VARS = {
    'log_level': 'STATS_COPY_LOG_LEVEL',
    'metadata_timeout': 'STATS_COPY_METADATA_TIMEOUT',
    'query_timeout': 'STATS_COPY_QUERY_TIMEOUT',
    'insert_timeout': 'STATS_COPY_INSERT_TIMEOUT'
}

# Error messages
ERROR_MESSAGES = {
    'project_env_not_found': "project id environment variable is not found. Set $GOOGLE_CLOUD_PROJECT",
    'project_metadata_empty': "project id is not found in metadata server",
    'invalid_zone_path': "required format : " + ZONE_PATH_FORMAT + ". input={value}",
    'invalid_service_account': "invalid ServiceAccountEmail. email={email}",
    'metadata_request_failed': "failed metadata request. path={path}: {error}",
    'metadata_timeout': "metadata request timed out. path={path}",
    'metadata_bad_status': "metadata server response is {status}:{body}. path={path}",
    'unknown_granularity': "unknown granularity: {value}. Expected one of {choices}",
    'template_failed': "failed to build query stats statement for {table}: {error}",
    'query_failed': "failed to query {table}: {error}",
    'decode_failed': "failed to decode row from {table}: {error}",
    'insert_failed': "failed to insert query stats into {table}: {error}",
    'insert_row_errors': "{count} rows rejected by {table}"
}
