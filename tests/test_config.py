import json

from jellymark.config import EngineSettings, load_settings, save_settings
from jellymark.styles import ReaderTheme
from jellymark.utils import resource_loader


def test_defaults():
    settings = EngineSettings()

    assert settings.settle_delays_ms == (200, 500)
    assert settings.ancestor_max_depth == 10
    assert settings.theme == ReaderTheme("blue", False)


def test_save_and_load(tmp_path):
    path = tmp_path / "nested" / "settings.json"
    settings = EngineSettings(palette="rose", night_mode=True, settle_delays_ms=(100,))

    assert save_settings(settings, path) is True
    loaded = load_settings(path)

    assert loaded == settings
    assert json.loads(path.read_text(encoding="utf-8"))["settle_delays_ms"] == [100]


def test_invalid_values_keep_defaults():
    settings = EngineSettings.from_dict({
        "wave_step": -1,
        "ancestor_max_depth": "deep",
        "night_mode": "yes",
        "settle_delays_ms": "200",
        "palette": 3,
        "unknown": True,
        "underline_thickness": 3,
    })

    assert settings.wave_step == 4.0
    assert settings.ancestor_max_depth == 10
    assert settings.night_mode is False
    assert settings.settle_delays_ms == (200, 500)
    assert settings.palette == "blue"
    assert settings.underline_thickness == 3.0


def test_missing_or_broken_file_gives_defaults(tmp_path):
    broken = tmp_path / "settings.json"
    broken.write_text("[1, 2", encoding="utf-8")

    assert load_settings(tmp_path / "missing.json") == EngineSettings()
    assert load_settings(broken) == EngineSettings()


def test_config_dir_honors_xdg(tmp_path, monkeypatch):
    monkeypatch.setattr(resource_loader.os, "name", "posix")
    monkeypatch.setattr(resource_loader.sys, "platform", "linux")
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))

    config_dir = resource_loader.get_config_dir()

    assert config_dir == tmp_path / "Jellymark"
    assert config_dir.is_dir()
