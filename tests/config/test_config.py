import logging

import pytest

from step_report.config.config_dataclass import TrackerConfig
from step_report.tracking.tracker import StepTracker


def test_defaults():
    config = TrackerConfig()
    assert config.unexplained_open_step == "raise"
    assert config.log_level == "INFO"
    assert config.log_level_number == logging.INFO
    assert config.indent_marker == "==="


def test_log_level_is_normalised():
    assert TrackerConfig(log_level="debug").log_level_number == logging.DEBUG


@pytest.mark.parametrize(
    "kwargs",
    [
        {"unexplained_open_step": "ignore"},
        {"log_level": "LOUD"},
        {"log_level": 10},
        {"log_level": None},
    ],
)
def test_invalid_values(kwargs):
    with pytest.raises(ValueError):
        TrackerConfig(**kwargs)


def test_from_yaml(tmp_path):
    path = tmp_path / "tracker.yaml"
    path.write_text("unexplained_open_step: attach\nlog_level: debug\n")

    config = TrackerConfig.from_yaml(path)

    assert config.unexplained_open_step == "attach"
    assert config.log_level == "DEBUG"
    assert config.indent_marker == "==="


def test_from_empty_yaml(tmp_path):
    path = tmp_path / "tracker.yaml"
    path.write_text("")

    assert TrackerConfig.from_yaml(path) == TrackerConfig()


def test_from_yaml_unknown_key(tmp_path):
    path = tmp_path / "tracker.yaml"
    path.write_text("number_separator: '-'\n")

    with pytest.raises(ValueError, match="number_separator"):
        TrackerConfig.from_yaml(path)


def test_from_yaml_numeric_log_level(tmp_path):
    path = tmp_path / "tracker.yaml"
    path.write_text("log_level: 10\n")

    with pytest.raises(ValueError, match="expecting a level name"):
        TrackerConfig.from_yaml(path)


def test_from_yaml_not_a_mapping(tmp_path):
    path = tmp_path / "tracker.yaml"
    path.write_text("- raise\n- attach\n")

    with pytest.raises(ValueError, match="mapping"):
        TrackerConfig.from_yaml(path)


def test_config_drives_tracker_logging(run_result, caplog):
    config = TrackerConfig(log_level="DEBUG", indent_marker="--")
    tracker = StepTracker(run_result, config)

    with caplog.at_level(logging.DEBUG, logger="step_report.tracking.tracker"):
        tracker.open("outer")
        tracker.open("inner")

    assert [(r.levelno, r.getMessage()) for r in caplog.records] == [
        (logging.DEBUG, "  ▶️  1 outer"),
        (logging.DEBUG, "--  ▶️  1.1 inner"),
    ]
