"""Tests for settings loading."""

from __future__ import annotations

import json
import logging

import pytest

from fractal_explorer.config import SETTINGS_PATH, Settings, load_settings


def _write(path, data) -> str:
    path.write_text(json.dumps(data))
    return str(path)


def test_packaged_settings_load() -> None:
    settings = load_settings(SETTINGS_PATH)
    assert settings == Settings()


def test_missing_file_uses_defaults(tmp_path, caplog) -> None:
    with caplog.at_level(logging.WARNING, logger="fractal_explorer.config"):
        settings = load_settings(str(tmp_path / "missing.json"))
    assert settings == Settings()
    assert "Could not load" in caplog.text


def test_malformed_file_uses_defaults(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{not json")
    assert load_settings(str(path)) == Settings()


def test_values_override_defaults(tmp_path) -> None:
    path = _write(tmp_path / "settings.json",
                  {"size": 400, "zoom_scale": 0.25, "workers": 3, "fractal": "Tricorn"})
    settings = load_settings(path)
    assert settings.size == 400
    assert settings.zoom_scale == 0.25
    assert settings.workers == 3
    assert settings.fractal == "Tricorn"
    assert settings.log_level == "INFO"


def test_unknown_keys_are_ignored(tmp_path, caplog) -> None:
    path = _write(tmp_path / "settings.json", {"size": 200, "colour": "red"})
    with caplog.at_level(logging.WARNING, logger="fractal_explorer.config"):
        settings = load_settings(path)
    assert settings.size == 200
    assert "colour" in caplog.text


@pytest.mark.parametrize(
    "data",
    [
        {"size": 0},
        {"size": "big"},
        {"zoom_scale": 0},
        {"zoom_scale": -1.0},
        {"workers": 0},
        {"fractal": "Julia"},
        {"log_level": "LOUD"},
    ],
)
def test_invalid_values_raise(tmp_path, data) -> None:
    path = _write(tmp_path / "settings.json", data)
    with pytest.raises(ValueError):
        load_settings(path)


def test_workers_default_to_executor_choice() -> None:
    settings = Settings()
    assert settings.workers is None
    settings.validate()
