"""Fixed settings, enumerations and the widget model of the control center."""

from __future__ import annotations

import enum
import threading
from dataclasses import dataclass, field
from typing import Optional

POS_X = 25
POS_Y = 25
FONT = "JetBrains Mono-14"
BG = "#282828"
MAX_WIDGETS = 32
PADDING = 7


class WidgetType(enum.IntEnum):
    """Kind of a widget."""

    NONE = 0
    LABEL = 1
    BUTTON = 2
    SLIDER = 3


class WidgetId(enum.IntEnum):
    """Identity of every widget the panel can show."""

    NONE = 0
    BUTTON_VOLUME_MUTE = 1
    SLIDER_VOLUME = 2
    SLIDER_BRIGHTNESS = 3
    BUTTON_PLAYER_PREV = 4
    BUTTON_PLAYER_PLAY_PAUSE = 5
    BUTTON_PLAYER_NEXT = 6
    BUTTON_NOTIFY = 7
    BUTTON_WIFI = 8
    BUTTON_BLUETOOTH = 9
    LABEL_BRIGHTNESS = 10


class ColorRole(enum.IntEnum):
    """Named colours used to paint widgets."""

    NORM_BG = 0
    HOVER_BG = 1
    NORM_FG = 2
    HOVER_FG = 3
    NORM_FG_SLIDER = 4

    @property
    def rgba(self) -> tuple[int, int, int, int]:
        """The colour as 16-bit red, green, blue and alpha channels."""
        return _COLORS[self]


_COLORS: dict[ColorRole, tuple[int, int, int, int]] = {
    ColorRole.NORM_FG: (0xAAAA, 0xAAAA, 0xAAAA, 0xFFFF),
    ColorRole.NORM_FG_SLIDER: (0x8888, 0x8888, 0x8888, 0xFFFF),
    ColorRole.HOVER_FG: (0xFFFF, 0x0000, 0x0000, 0xFFFF),
    ColorRole.HOVER_BG: (0x2222, 0x2222, 0x2222, 0xFFFF),
    ColorRole.NORM_BG: (0x3838, 0x3838, 0x3838, 0xFFFF),
}


@dataclass(frozen=True)
class FontMetrics:
    """Metrics of the monospaced panel font."""

    ascent: int = 18
    descent: int = 5
    advance: int = 11

    @property
    def height(self) -> int:
        return self.ascent + self.descent

    def text_width(self, text: str) -> int:
        """Horizontal advance of ``text`` in pixels."""
        return self.advance * len(text)


@dataclass
class Widget:
    """A label, button or slider placed on the panel."""

    type: WidgetType = WidgetType.NONE
    id: WidgetId = WidgetId.NONE
    x: int = 0
    y: int = 0
    width: int = 0
    height: int = 0
    knob: int = 0
    text: str = ""
    normal_color: Optional[ColorRole] = None
    normal_back: Optional[ColorRole] = None
    hover_color: Optional[ColorRole] = None
    hover_back: Optional[ColorRole] = None
    hovered: bool = False
    full_width: bool = False
    slider_value: int = 0
    max_value: int = 0
    drag_offset_x: int = 0
    valid_label: str = ""
    invalid_label: str = ""


def _empty_widgets() -> list[Widget]:
    return [Widget() for _ in WidgetId]


@dataclass
class App:
    """State shared by the event loop and the background updaters."""

    width: int = 320
    height: int = 400
    font: FontMetrics = field(default_factory=FontMetrics)
    widgets: list[Widget] = field(default_factory=_empty_widgets)
    dragging_id: WidgetId = WidgetId.NONE
    dragging_type: WidgetType = WidgetType.NONE
    running: bool = True
    lock: threading.RLock = field(
        default_factory=threading.RLock, repr=False, compare=False
    )

    def widget(self, widget_id: int) -> Widget:
        """The widget slot for ``widget_id``; raises ValueError for unknown ids."""
        return self.widgets[WidgetId(widget_id)]

    def reset_dragging(self) -> None:
        """Forget any widget that is being dragged."""
        self.dragging_id = WidgetId.NONE
        self.dragging_type = WidgetType.NONE