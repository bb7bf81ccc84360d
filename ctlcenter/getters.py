"""Queries of the current audio, brightness, radio and notification state."""

from __future__ import annotations

import re
import subprocess
import sys
from collections.abc import Sequence

from ctlcenter.utils import read_int_from_file

BRIGHTNESS_PATH = "/sys/class/backlight/intel_backlight/brightness"
MAX_BRIGHTNESS_PATH = "/sys/class/backlight/intel_backlight/max_brightness"

_VOLUME_COMMAND = ("wpctl", "get-volume", "@DEFAULT_AUDIO_SINK@")
_LEADING_FLOAT = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def _command_output(argv: Sequence[str]) -> str:
    """Standard output of a command, or an empty string if it cannot start."""
    try:
        completed = subprocess.run(
            list(argv),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            text=True,
            check=False,
        )
    except OSError as error:
        print(f"command failed: {error}", file=sys.stderr)
        return ""
    return completed.stdout or ""


def _first_line(output: str) -> str | None:
    lines = output.splitlines()
    return lines[0] if lines else None


def _field(line: str, index: int) -> str:
    fields = line.split()
    return fields[index] if index < len(fields) else ""


def _leading_float(text: str) -> float:
    match = _LEADING_FLOAT.match(text)
    return float(match.group(1)) if match else 0.0


def get_level_audio() -> int:
    """Volume of the default sink in percent."""
    line = _first_line(_command_output(_VOLUME_COMMAND))
    if line is None:
        return 0
    return int(_leading_float(_field(line, 1)) * 100)


def get_state_audio_mute() -> bool:
    """Whether the default sink is muted."""
    line = _first_line(_command_output(_VOLUME_COMMAND))
    return line is not None and "[MUTED]" in line


def get_level_brightness() -> int:
    """Backlight brightness in percent of its maximum."""
    try:
        brightness = read_int_from_file(BRIGHTNESS_PATH)
        max_brightness = read_int_from_file(MAX_BRIGHTNESS_PATH)
    except (OSError, ValueError) as error:
        print(f"Error: {error}", file=sys.stderr)
        return 0
    if brightness < 0 or max_brightness <= 0:
        print("Error: invalid brightness values", file=sys.stderr)
        return 0
    return (brightness * 100) // max_brightness


def get_state_bluetooth() -> bool:
    """Whether bluetooth is not soft-blocked."""
    output = _command_output(("rfkill", "list", "bluetooth"))
    for line in output.splitlines():
        if "Soft blocked" in line:
            return _field(line, 2) != "yes"
    return False


def get_state_dunst() -> bool:
    """Whether notifications are shown, i.e. dunst is not paused."""
    line = _first_line(_command_output(("dunstctl", "is-paused")))
    return line is not None and line != "true"


def get_state_wifi() -> bool:
    """Whether the wifi radio is enabled."""
    lines = _command_output(("nmcli", "-fields", "WIFI", "g")).splitlines()
    if len(lines) < 2:
        return False
    return _field(lines[1], 0) == "enabled"