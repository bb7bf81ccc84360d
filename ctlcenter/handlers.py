"""Reactions to pointer events and to clicks on the panel's widgets."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import Optional

from ctlcenter.config import PADDING, POS_X, POS_Y, App, Widget, WidgetId, WidgetType
from ctlcenter.getters import (
    get_state_audio_mute,
    get_state_bluetooth,
    get_state_dunst,
    get_state_wifi,
)
from ctlcenter.utils import execute_command_args, set_value

SLIDER_UPDATE_INTERVAL_MS = 35


def _trunc_div(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero."""
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(value, high))


def _knob_x(widget: Widget) -> int:
    return widget.x + _trunc_div(
        widget.slider_value * (widget.width - widget.knob), widget.max_value
    )


class _Throttle:
    """Lets an action through at most once per interval."""

    def __init__(self, interval_ms: int) -> None:
        self.interval_ms = interval_ms
        self.last: Optional[float] = None

    def ready(self) -> bool:
        now = time.monotonic()
        if self.last is None or int((now - self.last) * 1000) > self.interval_ms:
            self.last = now
            return True
        return False


_slider_throttle = _Throttle(SLIDER_UPDATE_INTERVAL_MS)


def on_bluetooth_clicked(widget: Widget) -> None:
    """Toggle the bluetooth radio and refresh the button label."""
    action = "block" if get_state_bluetooth() else "unblock"
    execute_command_args(["rfkill", action, "bluetooth"])
    set_value(widget, get_state_bluetooth)


def on_brightness_changed(value: int) -> None:
    """Set the backlight to ``value`` percent."""
    execute_command_args(
        ["brightnessctl", "--class=backlight", "--min-value=1", "set", f"{value}%"]
    )


def on_music_next_clicked(widget: Widget) -> None:
    """Skip to the next track."""
    execute_command_args(["playerctl", "next"])


def on_music_playpause_clicked(widget: Widget) -> None:
    """Toggle playback."""
    execute_command_args(["playerctl", "play-pause"])


def on_music_prev_clicked(widget: Widget) -> None:
    """Go back to the previous track."""
    execute_command_args(["playerctl", "previous"])


def on_notify_clicked(widget: Widget) -> None:
    """Pause or resume notifications and tell the status bar."""
    execute_command_args(["dunstctl", "set-paused", "toggle"])
    execute_command_args(["pkill", "-RTMIN+3", "dwmblocks"])
    set_value(widget, get_state_dunst)


def on_volume_changed(value: int) -> None:
    """Set the default sink's volume to ``value`` percent."""
    execute_command_args(
        ["wpctl", "set-volume", "-l", "1.2", "@DEFAULT_AUDIO_SINK@", f"{value}%"]
    )


def on_volume_button_click(widget: Widget) -> None:
    """Toggle mute of the default sink and refresh the button label."""
    execute_command_args(["wpctl", "set-mute", "@DEFAULT_AUDIO_SINK@", "toggle"])
    set_value(widget, get_state_audio_mute)


def on_wifi_clicked(widget: Widget) -> None:
    """Toggle the wifi radio and refresh the button label."""
    action = "off" if get_state_wifi() else "on"
    execute_command_args(["nmcli", "radio", "wifi", action])
    set_value(widget, get_state_wifi)


_BUTTON_HANDLERS: dict[WidgetId, Callable[[Widget], None]] = {
    WidgetId.BUTTON_VOLUME_MUTE: on_volume_button_click,
    WidgetId.BUTTON_WIFI: on_wifi_clicked,
    WidgetId.BUTTON_BLUETOOTH: on_bluetooth_clicked,
    WidgetId.BUTTON_NOTIFY: on_notify_clicked,
    WidgetId.BUTTON_PLAYER_PREV: on_music_prev_clicked,
    WidgetId.BUTTON_PLAYER_PLAY_PAUSE: on_music_playpause_clicked,
    WidgetId.BUTTON_PLAYER_NEXT: on_music_next_clicked,
}

_SLIDER_HANDLERS: dict[WidgetId, Callable[[int], None]] = {
    WidgetId.SLIDER_BRIGHTNESS: on_brightness_changed,
    WidgetId.SLIDER_VOLUME: on_volume_changed,
}


def handler_button(widget: Widget) -> None:
    """Run the action bound to a button."""
    handler = _BUTTON_HANDLERS.get(widget.id)
    if handler is not None:
        handler(widget)


def handler_slider(widget: Widget) -> None:
    """Apply a slider's current value."""
    handler = _SLIDER_HANDLERS.get(widget.id)
    if handler is not None:
        handler(widget.slider_value)


def handle_button_press(app: App, x: int, y: int, x_root: int, y_root: int) -> bool:
    """React to a pointer press; return True if the panel should close."""
    if (
        x_root >= app.width + POS_X
        or x_root <= POS_X
        or y_root <= POS_Y
        or y_root >= app.height + POS_Y
    ):
        return True

    for widget in app.widgets:
        if not widget.hovered:
            continue
        if widget.type is WidgetType.BUTTON:
            app.dragging_id = widget.id
            app.dragging_type = widget.type
            handler_button(widget)
        elif widget.type is WidgetType.SLIDER:
            app.dragging_id = widget.id
            app.dragging_type = widget.type
            knob_x = _knob_x(widget)
            if knob_x <= x <= knob_x + widget.knob:
                widget.drag_offset_x = x - knob_x
            else:
                value = _trunc_div(
                    (x - widget.x - widget.knob // 2) * widget.max_value,
                    widget.width - widget.knob,
                )
                widget.slider_value = _clamp(value, 0, widget.max_value)
                handler_slider(widget)
                widget.drag_offset_x = widget.knob // 2
    return False


def handle_motion_notify(app: App, x: int) -> bool:
    """Move the dragged slider's knob to the pointer; never asks to close."""
    widget = app.widgets[app.dragging_id]
    if widget.type is WidgetType.SLIDER:
        value = _trunc_div(
            (x - widget.drag_offset_x - widget.x) * widget.max_value,
            widget.width - widget.knob,
        )
        widget.slider_value = _clamp(value, 0, widget.max_value)
        if _slider_throttle.ready():
            handler_slider(widget)
    return False


def _hover(app: App, widget: Widget, inside: bool) -> bool:
    dragged = app.dragging_id == widget.id and app.dragging_type == widget.type
    return dragged or (app.dragging_id == WidgetId.NONE and inside)


def update_hover_state(app: App, mouse_x: int, mouse_y: int) -> None:
    """Mark the widgets under the pointer, or the one being dragged, as hovered."""
    for widget in app.widgets:
        if widget.type is WidgetType.BUTTON:
            top = widget.y - app.font.ascent - PADDING
            bottom = top + widget.height + 2 * PADDING
            left = widget.x - PADDING
            right = left + widget.width + 2 * PADDING
        elif widget.type is WidgetType.SLIDER:
            top = widget.y - widget.height // 2
            bottom = widget.y + widget.height // 2
            left = widget.x
            right = widget.x + widget.width
        else:
            continue
        inside = left <= mouse_x <= right and top <= mouse_y <= bottom
        widget.hovered = _hover(app, widget, inside)