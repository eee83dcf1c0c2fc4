import os
from pathlib import Path

import pytest
from pydantic import ValidationError

from plang.config.settings import EvalSettings, load_settings


def test_defaults(monkeypatch) -> None:
    for name in ("PLANG_LOOP_MODE", "PLANG_LOOP_ITERATIONS", "PLANG_LOOP_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    settings = EvalSettings()
    assert settings.loop_mode == "fixed"
    assert settings.loop_iterations == 4
    assert settings.loop_limit is None


def test_environment_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PLANG_LOOP_MODE", "conditional")
    monkeypatch.setenv("PLANG_LOOP_LIMIT", "50")
    settings = EvalSettings()
    assert settings.loop_mode == "conditional"
    assert settings.loop_limit == 50


def test_load_settings_ignores_none_overrides(monkeypatch) -> None:
    monkeypatch.setenv("PLANG_LOOP_ITERATIONS", "9")
    assert load_settings(loop_iterations=None).loop_iterations == 9
    assert load_settings(loop_iterations=2).loop_iterations == 2


@pytest.mark.parametrize(
    "kwargs",
    [{"loop_mode": "forever"}, {"loop_iterations": -1}, {"loop_limit": 0}],
)
def test_invalid_values_rejected(kwargs) -> None:
    with pytest.raises(ValidationError):
        EvalSettings(**kwargs)


def test_ambient_configuration_is_isolated(tmp_path) -> None:
    assert not [name for name in os.environ if name.upper().startswith("PLANG_")]
    assert Path.cwd() == tmp_path
    assert EvalSettings().loop_mode == "fixed"
