"""Placement of the panel's rows of buttons, labels and sliders."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Optional

from ctlcenter.config import PADDING, App, ColorRole, Widget, WidgetId, WidgetType
from ctlcenter.getters import (
    get_level_audio,
    get_level_brightness,
    get_state_audio_mute,
    get_state_bluetooth,
    get_state_dunst,
    get_state_wifi,
)

LAYOUT_ORIGIN_X = 20
LAYOUT_ORIGIN_Y = 20
LAYOUT_SPACING_X = 10
LAYOUT_SPACING_Y = 10
SLIDER_HEIGHT = 14
SLIDER_DEFAULT_WIDTH = 200
SLIDER_MEASURE_WIDTH = 100

State = Optional[Callable[[], object]]


def get_text_width(app: App, valid: str, invalid: str) -> int:
    """Width of the wider of two labels."""
    return max(app.font.text_width(valid), app.font.text_width(invalid))


def _pick_text(state: State, valid: str, invalid: str) -> str:
    ok = state() if state is not None else True
    return valid if ok else invalid


@dataclass
class Layout:
    """Cursor that places widgets left to right, row by row."""

    x: int = LAYOUT_ORIGIN_X
    y: int = LAYOUT_ORIGIN_Y
    row_height: int = 0

    def _advance(self, width: int, is_last: bool, height: int) -> None:
        self.x += width + 2 * PADDING
        if not is_last:
            self.x += LAYOUT_SPACING_X
        self.row_height = max(self.row_height, height)

    def add_button(
        self,
        app: App,
        widget_id: WidgetId,
        state: State,
        valid_data: str,
        invalid_data: str,
        override_width: int,
        is_last: bool,
    ) -> Widget:
        """Place a button showing ``valid_data`` or ``invalid_data``."""
        width = (
            override_width
            if override_width > 0
            else get_text_width(app, valid_data, invalid_data)
        )
        height = app.font.height
        widget = Widget(
            type=WidgetType.BUTTON,
            id=WidgetId(widget_id),
            x=self.x,
            y=self.y + height,
            width=width,
            height=height,
            text=_pick_text(state, valid_data, invalid_data),
            valid_label=valid_data,
            invalid_label=invalid_data,
            normal_color=ColorRole.NORM_FG,
            normal_back=ColorRole.NORM_BG,
            hover_color=ColorRole.HOVER_FG,
            hover_back=ColorRole.HOVER_BG,
        )
        app.widgets[widget.id] = widget
        self._advance(width, is_last, height + 2 * PADDING)
        return widget

    def add_label(
        self,
        app: App,
        widget_id: WidgetId,
        state: State,
        valid_data: str,
        invalid_data: str,
        override_width: int,
        is_last: bool,
    ) -> Widget:
        """Place a static text label; its size is measured when drawn."""
        width = (
            override_width
            if override_width > 0
            else get_text_width(app, valid_data, invalid_data)
        )
        height = app.font.height
        widget = Widget(
            type=WidgetType.LABEL,
            id=WidgetId(widget_id),
            x=self.x,
            y=self.y + height,
            normal_color=ColorRole.NORM_FG,
            text=_pick_text(state, valid_data, invalid_data),
        )
        app.widgets[widget.id] = widget
        self._advance(width, is_last, height + 2 * PADDING)
        return widget

    def add_slider(
        self,
        app: App,
        widget_id: WidgetId,
        value: int,
        max_value: int,
        override_width: int,
        is_last: bool,
    ) -> Widget:
        """Place a horizontal slider holding ``value`` out of ``max_value``."""
        width = override_width if override_width > 0 else SLIDER_DEFAULT_WIDTH
        slider_y = self.y + app.font.ascent
        widget = Widget(
            type=WidgetType.SLIDER,
            id=WidgetId(widget_id),
            x=self.x,
            y=slider_y,
            width=width,
            knob=SLIDER_HEIGHT,
            height=SLIDER_HEIGHT,
            normal_color=ColorRole.NORM_FG_SLIDER,
            normal_back=ColorRole.NORM_BG,
            hover_color=ColorRole.HOVER_FG,
            hover_back=ColorRole.HOVER_BG,
            slider_value=value,
            max_value=max_value,
        )
        app.widgets[widget.id] = widget
        total_height = (slider_y - self.y) + SLIDER_HEIGHT // 2 + 2 * PADDING
        self._advance(width, is_last, total_height)
        return widget

    def new_row(self) -> None:
        """Move the cursor to the start of the next row."""
        self.x = LAYOUT_ORIGIN_X
        self.y += self.row_height + LAYOUT_SPACING_Y
        self.row_height = 0


@dataclass
class _Cell:
    type: WidgetType
    id: WidgetId
    full_width: bool
    state: State = None
    valid: str = ""
    invalid: str = ""
    value: int = 0
    max_value: int = 0

    def natural_width(self, app: App) -> int:
        if self.type is WidgetType.SLIDER:
            return SLIDER_MEASURE_WIDTH
        return get_text_width(app, self.valid, self.invalid)


def _button(widget_id, state, valid, invalid, full_width) -> _Cell:
    return _Cell(WidgetType.BUTTON, widget_id, full_width, state, valid, invalid)


def _rows() -> list[list[_Cell]]:
    return [
        [
            _button(WidgetId.BUTTON_PLAYER_PREV, None, "Prev", "Prev", True),
            _button(WidgetId.BUTTON_PLAYER_PLAY_PAUSE, None, "Play", "Paus", True),
            _button(WidgetId.BUTTON_PLAYER_NEXT, None, "Next", "Next", True),
        ],
        [
            _button(WidgetId.BUTTON_WIFI, get_state_wifi, "Wi-Fi:On", "Wi-Fi:Off", True),
            _button(WidgetId.BUTTON_BLUETOOTH, get_state_bluetooth, "BT:On", "BT:Off", True),
        ],
        [
            _button(WidgetId.BUTTON_NOTIFY, get_state_dunst, "Notify", "Silence", True),
        ],
        [
            _Cell(WidgetType.LABEL, WidgetId.LABEL_BRIGHTNESS, False, None, "Brgh", "Brgh"),
            _Cell(WidgetType.SLIDER, WidgetId.SLIDER_BRIGHTNESS, True,
                  value=get_level_brightness(), max_value=100),
        ],
        [
            _button(WidgetId.BUTTON_VOLUME_MUTE, get_state_audio_mute, "Mute", "Vol", False),
            _Cell(WidgetType.SLIDER, WidgetId.SLIDER_VOLUME, True,
                  value=get_level_audio(), max_value=120),
        ],
    ]


def create_ui(app: App) -> Layout:
    """Build every widget of the panel into ``app`` and return the final cursor."""
    layout = Layout()
    for row in _rows():
        dynamic = [cell for cell in row if cell.full_width]
        fixed_width = sum(cell.natural_width(app) for cell in row if not cell.full_width)
        fixed_width += (len(row) - 1) * (LAYOUT_SPACING_X + 2 * PADDING)
        total_width = app.width - 2 * layout.x
        dynamic_width = int((total_width - fixed_width) / len(dynamic)) if dynamic else 0

        for position, cell in enumerate(row):
            is_last = position == len(row) - 1
            width = dynamic_width if cell.full_width else 0
            if cell.type is WidgetType.BUTTON:
                layout.add_button(app, cell.id, cell.state, cell.valid, cell.invalid, width, is_last)
            elif cell.type is WidgetType.LABEL:
                layout.add_label(app, cell.id, cell.state, cell.valid, cell.invalid, width, is_last)
            elif cell.type is WidgetType.SLIDER:
                layout.add_slider(app, cell.id, cell.value, cell.max_value, width, is_last)
        layout.new_row()
    return layout