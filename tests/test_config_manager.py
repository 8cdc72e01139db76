import json

import pytest

from LatexMath import MathEngine, config_manager


@pytest.fixture
def temp_config(tmp_path, monkeypatch):
    path = tmp_path / "config.json"
    monkeypatch.setattr(config_manager, "config_json", path)
    config_manager.reload()
    yield path
    config_manager.reload()


def test_shipped_defaults():
    config_manager.reload()
    assert config_manager.load_setting_value("significant_digits") == 10
    assert config_manager.load_setting_value("darkmode") is False
    assert config_manager.load_setting_value("no_such_key") is None


def test_missing_file_falls_back_to_defaults(temp_config):
    assert config_manager.load_setting_value("all") == config_manager.DEFAULT_SETTINGS


def test_invalid_json_falls_back_to_defaults(temp_config):
    temp_config.write_text("{not json", encoding="utf-8")
    config_manager.reload()
    assert config_manager.load_setting_value("answer_tolerance") == 1e-9


def test_partial_file_is_merged_over_defaults(temp_config):
    temp_config.write_text(json.dumps({"significant_digits": 4}), encoding="utf-8")
    config_manager.reload()
    assert config_manager.load_setting_value("significant_digits") == 4
    assert config_manager.load_setting_value("integer_tolerance") == 1e-10
    assert MathEngine.format_value(2 / 3) == "0.6667"


def test_save_setting_round_trip(temp_config):
    settings = config_manager.load_setting_value("all")
    settings["darkmode"] = True
    assert config_manager.save_setting(settings) == settings
    assert config_manager.load_setting_value("darkmode") is True
    assert json.loads(temp_config.read_text(encoding="utf-8"))["darkmode"] is True


def test_all_returns_a_copy(temp_config):
    settings = config_manager.load_setting_value("all")
    settings["debug"] = True
    assert config_manager.load_setting_value("debug") is False
