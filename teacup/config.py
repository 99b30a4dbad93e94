"""Program options and config file loading."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, fields
from typing import Any

from .renderer import DEFAULT_FPS, clamp_fps

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = os.path.expanduser("~/.teacup.json")

MOUSE_MODES = ("cell", "all")


@dataclass
class ProgramOptions:
    """Runtime options for a Program.

    Attributes:
        alt_screen: Run in the alternate screen buffer
        mouse_mode: "cell" (press/release/drag), "all" (every motion), or
            None/False for no mouse reporting
        fps: Frame rate for the renderer, clamped to 1-120
        report_focus: Enable focus in/out reporting
        bracketed_paste: Enable bracketed paste (on by default)
    """

    alt_screen: bool = False
    mouse_mode: str | bool | None = None
    fps: float = DEFAULT_FPS
    report_focus: bool = False
    bracketed_paste: bool = True

    def __post_init__(self) -> None:
        if self.mouse_mode is False:
            self.mouse_mode = None
        if self.mouse_mode is not None and self.mouse_mode not in MOUSE_MODES:
            raise ValueError(f"mouse_mode must be one of {MOUSE_MODES} or None, got {self.mouse_mode!r}")
        self.fps = clamp_fps(self.fps)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> ProgramOptions:
        """Build options from a mapping, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            logger.warning("Ignoring unknown program options: %s", ", ".join(unknown))
        return cls(**{key: value for key, value in data.items() if key in known})


def load_config(path: str = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    """Load config from disk. Returns empty dict if not found or invalid."""
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return data if isinstance(data, dict) else {}
    except FileNotFoundError:
        return {}
    except (OSError, ValueError):
        logger.warning("Could not read config file %s", path, exc_info=True)
        return {}


def load_options(path: str = DEFAULT_CONFIG_PATH, **overrides: Any) -> ProgramOptions:
    """Options from a JSON config file, with keyword overrides applied on top.

    Overrides set to None are ignored so argparse defaults don't mask the
    file's values.
    """
    data = load_config(path)
    data.update({key: value for key, value in overrides.items() if value is not None})
    return ProgramOptions.from_dict(data)
