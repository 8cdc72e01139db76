# config_manager.py
import functools
import json
from pathlib import Path

config_json = Path(__file__).resolve().parent / "config.json"


DEFAULT_SETTINGS = {
    "significant_digits": 10,
    "integer_tolerance": 1e-10,
    "fraction_max_denominator": 100,
    "answer_tolerance": 1e-9,
    "darkmode": False,
    "copy_after_evaluate": False,
    "debug": False,
}


@functools.lru_cache(maxsize=1)
def _read_settings():
    settings_dict = dict(DEFAULT_SETTINGS)
    try:
        with open(config_json, 'r', encoding='utf-8') as f:
            settings_dict.update(json.load(f))

    except (FileNotFoundError, json.JSONDecodeError):
        pass

    return settings_dict


def load_setting_value(key_value):
    """Return one setting, or a copy of all settings for key_value == "all"."""
    settings_dict = _read_settings()

    if key_value == "all":
        return dict(settings_dict)

    else:
        return settings_dict.get(key_value, DEFAULT_SETTINGS.get(key_value))


def reload():
    _read_settings.cache_clear()


def save_setting(settings_dict):
    try:
        with open(config_json, 'w', encoding='utf-8') as f:
            json.dump(settings_dict, f, indent=4)

    except OSError:
        return {}

    reload()
    return settings_dict
