from __future__ import annotations

import json
from pathlib import Path

import pytest

from micro_spark.config import EmitterSettings, build_settings_from_dict, coerce_settings, load_settings
from micro_spark.exceptions import ConfigurationError, EmitterError


def test_settings_defaults() -> None:
    settings = EmitterSettings()
    assert settings.max_listeners is None
    assert settings.enable_event_history is False
    assert settings.history_limit == 100
    assert settings.resolve_callable_args is False


def test_build_settings_rejects_invalid_values() -> None:
    with pytest.raises(ConfigurationError):
        build_settings_from_dict({"max_listeners": 0})
    with pytest.raises(ConfigurationError):
        build_settings_from_dict({"unknown": True})
    with pytest.raises(EmitterError):
        build_settings_from_dict(["not", "a", "mapping"])  # type: ignore[arg-type]


def test_load_settings_json(tmp_path: Path) -> None:
    path = tmp_path / "emitter.json"
    path.write_text(json.dumps({"max_listeners": 5, "enable_event_history": True}))

    settings = load_settings(path)

    assert settings.max_listeners == 5
    assert settings.enable_event_history is True


def test_load_settings_yaml(tmp_path: Path) -> None:
    path = tmp_path / "emitter.yaml"
    path.write_text("resolve_callable_args: true\nhistory_limit: 3\n")

    settings = load_settings(path)

    assert settings.resolve_callable_args is True
    assert settings.history_limit == 3


def test_load_settings_empty_yaml_uses_defaults(tmp_path: Path) -> None:
    path = tmp_path / "empty.yml"
    path.write_text("")
    assert load_settings(path) == EmitterSettings()


def test_load_settings_errors(tmp_path: Path) -> None:
    with pytest.raises(ConfigurationError):
        load_settings(tmp_path / "missing.json")

    broken = tmp_path / "broken.json"
    broken.write_text("{not json")
    with pytest.raises(ConfigurationError):
        load_settings(broken)

    listing = tmp_path / "list.yaml"
    listing.write_text("- a\n- b\n")
    with pytest.raises(ConfigurationError):
        load_settings(listing)


def test_coerce_settings() -> None:
    settings = EmitterSettings(max_listeners=2)
    assert coerce_settings(settings) is settings
    assert coerce_settings(None) == EmitterSettings()
    assert coerce_settings({"max_listeners": 2}) == settings


def test_load_settings_accepts_string_path(tmp_path: Path) -> None:
    path = tmp_path / "emitter.yml"
    path.write_text("max_listeners: 4\n")

    assert load_settings(str(path)).max_listeners == 4
    with pytest.raises(ConfigurationError):
        load_settings(str(tmp_path / "missing.yml"))
