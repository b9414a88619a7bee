from gcp_stats_toolkit.config import PipelineConfig, get_default_config


def test_defaults():
    config = get_default_config()
    assert config.log_level == "INFO"
    assert config.query_timeout == 60.0
    assert config.metadata_probe_timeout == 1.0


def test_from_env_overrides_selected_values():
    config = PipelineConfig.from_env({
        "STATS_COPY_LOG_LEVEL": "debug",
        "STATS_COPY_QUERY_TIMEOUT": "5",
        "STATS_COPY_INSERT_TIMEOUT": "",
    })
    assert config.log_level == "debug"
    assert config.query_timeout == 5.0
    assert config.insert_timeout == 60.0


def test_dict_round_trip():
    config = PipelineConfig(metadata_timeout=2.5)
    assert PipelineConfig.from_dict(config.to_dict()) == config
