"""Persistent manager preferences and the helpers used to present them."""

from __future__ import annotations

import json
import logging
import os
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Any

log = logging.getLogger(__name__)

MULTIPLICATION_KEY = "multiplicationEnabled"
MAX_COPIES_KEY = "maxMascotsPerCharacter"
BACKGROUND_KEY = "windowedModeBackground"
USER_SCALE_KEY = "userScale"

DEFAULT_BACKGROUND = "#FF0000"
DEFAULT_MAX_COPIES = 1
DEFAULT_USER_SCALE = 1.0

MAX_COPIES_PRESETS: tuple[tuple[int, str], ...] = (
    (1, "1"),
    (3, "3"),
    (6, "6"),
    (9, "9"),
    (0, "Unlimited"),
)
SCALE_PRESETS: tuple[tuple[float, str], ...] = (
    (0.25, "0.25x"),
    (0.50, "0.50x"),
    (0.75, "0.75x"),
    (1.00, "1.00x"),
    (1.25, "1.25x"),
    (1.50, "1.50x"),
    (1.75, "1.75x"),
    (2.00, "2.00x"),
)
PRESET_TOLERANCE = 0.01

SLIDER_MIN = 100
SLIDER_MAX = 10000
SLIDER_STEPS_PER_UNIT = 1000.0

MASCOT_SUFFIX = ".mascot"
README_NAME = "README.txt"
README_TEXT = (
    "Manually importing shimeji by copying its contents into this folder may\n"
    "cause problems. You should use the import dialog in Shijima-Qt unless you\n"
    "have a good reason not to.\n"
)

_HEX_COLOR = re.compile(r"#([0-9A-Fa-f]{3}|[0-9A-Fa-f]{6})")


def _breeding_for(max_copies: int) -> bool:
    return max_copies == 0 or max_copies > 1


@dataclass
class ManagerSettings:
    """The user's choices in the manager's Settings menu."""

    multiplication_enabled: bool = True
    max_mascots_per_character: int = DEFAULT_MAX_COPIES
    windowed_mode_background: str = DEFAULT_BACKGROUND
    user_scale: float = DEFAULT_USER_SCALE

    def set_max_copies(self, value: int) -> bool:
        """Set the per-character limit (0 is unlimited) and return the breeding flag.

        Multiplication follows the limit: it is on when more than one copy,
        or any number of copies, is allowed.
        """
        if value < 0:
            raise ValueError(f"max copies must not be negative: {value}")
        self.max_mascots_per_character = value
        self.multiplication_enabled = _breeding_for(value)
        return self.multiplication_enabled

    def set_user_scale(self, scale: float) -> None:
        if not scale > 0:
            raise ValueError(f"scale must be positive: {scale}")
        self.user_scale = float(scale)

    def set_multiplication(self, enabled: bool) -> None:
        self.multiplication_enabled = bool(enabled)

    def to_dict(self) -> dict[str, Any]:
        return {
            MULTIPLICATION_KEY: self.multiplication_enabled,
            MAX_COPIES_KEY: self.max_mascots_per_character,
            BACKGROUND_KEY: self.windowed_mode_background,
            USER_SCALE_KEY: self.user_scale,
        }


def load_settings(path: str | os.PathLike[str]) -> ManagerSettings:
    """Read settings from a JSON file; missing or unusable values get defaults."""
    settings = ManagerSettings()
    try:
        raw = json.loads(Path(path).read_text(encoding="utf-8"))
    except FileNotFoundError:
        return settings
    except (OSError, ValueError) as ex:
        log.warning("could not read settings from %s: %s", path, ex)
        return settings
    if not isinstance(raw, dict):
        log.warning("settings file %s does not hold an object", path)
        return settings

    enabled = raw.get(MULTIPLICATION_KEY)
    if isinstance(enabled, bool):
        settings.multiplication_enabled = enabled

    copies = raw.get(MAX_COPIES_KEY)
    if isinstance(copies, int) and not isinstance(copies, bool) and copies >= 0:
        settings.max_mascots_per_character = copies

    background = raw.get(BACKGROUND_KEY)
    if isinstance(background, str):
        try:
            settings.windowed_mode_background = color_to_string(*parse_color(background))
        except ValueError:
            log.warning("ignoring invalid background colour: %s", background)

    scale = raw.get(USER_SCALE_KEY)
    if isinstance(scale, (int, float)) and not isinstance(scale, bool) and scale > 0:
        settings.user_scale = float(scale)

    return settings


def save_settings(settings: ManagerSettings, path: str | os.PathLike[str]) -> None:
    """Write settings as JSON, creating the parent directory if needed."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(settings.to_dict(), indent=2), encoding="utf-8")


def color_to_string(red: int, green: int, blue: int) -> str:
    """Format a colour as ``#RRGGBB``; each channel keeps its low eight bits."""
    return "#%02X%02X%02X" % (red & 0xFF, green & 0xFF, blue & 0xFF)


def parse_color(text: str) -> tuple[int, int, int]:
    """Parse ``#RGB`` or ``#RRGGBB`` into red, green and blue."""
    match = _HEX_COLOR.fullmatch(text.strip())
    if match is None:
        raise ValueError(f"invalid colour: {text!r}")
    digits = match.group(1)
    if len(digits) == 3:
        digits = "".join(ch * 2 for ch in digits)
    return int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16)


def scale_text(scale: float) -> str:
    return "%.3fx" % scale


def custom_scale_text(scale: float) -> str:
    return f"Custom... ({scale_text(scale)})"


def slider_to_scale(value: int) -> float:
    return value / SLIDER_STEPS_PER_UNIT


def scale_to_slider(scale: float) -> int:
    """Slider position for ``scale``, held within the slider's range."""
    return min(max(int(scale * SLIDER_STEPS_PER_UNIT), SLIDER_MIN), SLIDER_MAX)


def preset_checked(current: float, preset: float) -> bool:
    return abs(current - preset) < PRESET_TOLERANCE


def prepare_mascots_dir(path: str | os.PathLike[str]) -> Path:
    """Create the mascots folder and its README, leaving an existing README alone."""
    directory = Path(os.path.normpath(path))
    directory.mkdir(parents=True, exist_ok=True)
    readme = directory / README_NAME
    try:
        with readme.open("x", encoding="utf-8") as handle:
            handle.write(README_TEXT)
    except FileExistsError:
        pass
    return directory


def mascot_names_in(path: str | os.PathLike[str]) -> list[str]:
    """Names of the ``<name>.mascot`` folders in ``path``, sorted ignoring case."""
    names = [
        entry.name[: -len(MASCOT_SUFFIX)]
        for entry in Path(path).iterdir()
        if entry.is_dir()
        and entry.name.endswith(MASCOT_SUFFIX)
        and len(entry.name) > len(MASCOT_SUFFIX)
    ]
    return sorted(names, key=lambda name: (name.casefold(), name))