"""
Engine settings, stored as JSON in the user's config directory.
"""
import json
import logging
from dataclasses import asdict, dataclass, fields
from pathlib import Path
from typing import Optional, Tuple

from .styles.models import ReaderTheme
from .utils.resource_loader import get_config_dir

log = logging.getLogger(__name__)

SETTINGS_FILE = "settings.json"


@dataclass
class EngineSettings:
    """Tunables of the overlay engine."""

    # Repaint passes after a rebuild, in ms after the rebuild
    settle_delays_ms: Tuple[int, ...] = (200, 500)

    # Wavy stroke geometry
    wave_step: float = 4.0
    wave_amplitude: float = 1.5

    # Underline bar / wavy baseline inset from the box bottom
    underline_thickness: float = 2.0

    # How far up the item tree a pointer target may be from its container
    ancestor_max_depth: int = 10

    palette: str = "blue"
    night_mode: bool = False

    @property
    def theme(self) -> ReaderTheme:
        return ReaderTheme(palette_key=self.palette, night_mode=self.night_mode)

    @classmethod
    def from_dict(cls, data: dict) -> "EngineSettings":
        """
        Build settings from a dictionary, keeping defaults for bad values.

        Args:
            data: Parsed JSON object

        Returns:
            EngineSettings instance
        """
        settings = cls()
        known = {f.name: f for f in fields(cls)}
        for key, value in data.items():
            if key not in known:
                log.debug("Ignoring unknown setting %r", key)
                continue
            default = getattr(settings, key)
            try:
                setattr(settings, key, _coerce(value, default))
            except (TypeError, ValueError):
                log.warning("Invalid value %r for setting %r, keeping %r", value, key, default)
        return settings

    def to_dict(self) -> dict:
        data = asdict(self)
        data['settle_delays_ms'] = list(self.settle_delays_ms)
        return data


def _coerce(value, default):
    if isinstance(default, bool):
        if not isinstance(value, bool):
            raise TypeError("expected a boolean")
        return value
    if isinstance(default, tuple):
        if isinstance(value, (str, bytes)):
            raise TypeError("expected a list of delays")
        delays = tuple(int(v) for v in value)
        if any(d < 0 for d in delays):
            raise ValueError("negative delay")
        return delays
    if isinstance(default, int):
        result = int(value)
        if result <= 0:
            raise ValueError("must be positive")
        return result
    if isinstance(default, float):
        result = float(value)
        if result <= 0:
            raise ValueError("must be positive")
        return result
    if isinstance(default, str):
        if not isinstance(value, str):
            raise TypeError("expected a string")
        return value
    return value


def settings_path() -> Path:
    return get_config_dir() / SETTINGS_FILE


def load_settings(path: Optional[Path] = None) -> EngineSettings:
    """
    Load engine settings.

    Args:
        path: Optional settings file; defaults to the user config directory

    Returns:
        Loaded settings, or defaults when the file is missing or unreadable
    """
    path = Path(path) if path is not None else settings_path()
    if not path.exists():
        return EngineSettings()

    try:
        with open(path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, ValueError) as e:
        log.warning("Failed to read settings from %s: %s", path, e)
        return EngineSettings()

    if not isinstance(data, dict):
        log.warning("Settings file %s does not contain an object", path)
        return EngineSettings()
    return EngineSettings.from_dict(data)


def save_settings(settings: EngineSettings, path: Optional[Path] = None) -> bool:
    """
    Save engine settings.

    Returns:
        True if save was successful
    """
    path = Path(path) if path is not None else settings_path()
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=2)
        return True
    except OSError as e:
        log.warning("Failed to save settings to %s: %s", path, e)
        return False
