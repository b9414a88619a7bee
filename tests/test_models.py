from datetime import datetime, timedelta, timezone

import pytest

from gcp_stats_toolkit.spanner import Granularity, QueryStat, to_insert_id
from gcp_stats_toolkit.utils import InvalidArgumentError
from tests.conftest import INTERVAL_END, make_row


def test_granularity_maps_to_fixed_views():
    assert Granularity.MINUTE.table == "spanner_sys.query_stats_top_minute"
    assert Granularity.TEN_MINUTE.table == "spanner_sys.query_stats_top_10minute"
    assert Granularity.HOUR.table == "spanner_sys.query_stats_top_hour"


def test_granularity_parse_rejects_free_form_names():
    assert Granularity.parse("10minute") is Granularity.TEN_MINUTE
    with pytest.raises(InvalidArgumentError, match="unknown granularity"):
        Granularity.parse("spanner_sys.query_stats_top_minute; DROP TABLE x")


def test_insert_id_format():
    assert to_insert_id(INTERVAL_END, 42) == "1577934245-_-42"
    assert to_insert_id(INTERVAL_END, -7) == "1577934245-_--7"


def test_insert_id_is_deterministic_and_fingerprint_sensitive():
    assert to_insert_id(INTERVAL_END, 1) == to_insert_id(INTERVAL_END, 1)
    assert to_insert_id(INTERVAL_END, 1) != to_insert_id(INTERVAL_END, 2)


def test_insert_id_ignores_sub_second_precision_and_timezone_representation():
    jst = timezone(timedelta(hours=9))
    same_instant = INTERVAL_END.astimezone(jst) + timedelta(microseconds=999)
    naive_utc = INTERVAL_END.replace(tzinfo=None)
    assert to_insert_id(same_instant, 5) == to_insert_id(INTERVAL_END, 5)
    assert to_insert_id(naive_utc, 5) == to_insert_id(INTERVAL_END, 5)


def test_from_row_decodes_all_columns():
    stat = QueryStat.from_row(make_row(fingerprint=99, text="SELECT * FROM Singers"))
    assert stat.text == "SELECT * FROM Singers"
    assert stat.text_truncated is False
    assert stat.text_fingerprint == 99
    assert stat.interval_end == INTERVAL_END
    assert stat.execution_count == 10
    assert stat.avg_latency_seconds == 0.5
    assert stat.avg_cpu_seconds == 0.25
    assert stat.insert_id is None


def test_to_insert_id_stores_the_id():
    stat = QueryStat.from_row(make_row(fingerprint=3))
    assert stat.to_insert_id() == "1577934245-_-3"
    assert stat.insert_id == "1577934245-_-3"


@pytest.mark.parametrize("row, error", [
    (make_row()[:-1], ValueError),
    (["q", False, 1, "2020-01-02", 1, 0.0, 0.0, 0.0, 0.0, 0.0], ValueError),
    (["q", False, 1, INTERVAL_END, None, 0.0, 0.0, 0.0, 0.0, 0.0], TypeError),
])
def test_from_row_rejects_malformed_rows(row, error):
    with pytest.raises(error):
        QueryStat.from_row(row)


def test_bigquery_row_uses_destination_column_names():
    row = QueryStat.from_row(make_row(fingerprint=8)).to_bigquery_row()
    assert row == {
        "IntervalEnd": INTERVAL_END,
        "Text": "SELECT 1",
        "TextTruncated": False,
        "TextFingerprint": 8,
        "ExecuteCount": 10,
        "AvgLatencySeconds": 0.5,
        "AvgRows": 1.0,
        "AvgBytes": 8.0,
        "AvgRowsScanned": 2.0,
        "AvgCPUSeconds": 0.25,
    }


def test_naive_datetime_example_matches_epoch():
    assert to_insert_id(datetime(1970, 1, 1, 0, 0, 1), 0) == "1-_-0"
