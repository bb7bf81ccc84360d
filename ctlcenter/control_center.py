"""The control-center window: drawing, event loop and background state updates."""

from __future__ import annotations

import argparse
import queue
import threading
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from typing import Optional, Union

from ctlcenter.config import (
    BG,
    FONT,
    PADDING,
    POS_X,
    POS_Y,
    App,
    ColorRole,
    Widget,
    WidgetId,
    WidgetType,
)
from ctlcenter.getters import get_level_audio, get_level_brightness, get_state_audio_mute
from ctlcenter.handlers import handle_button_press, handle_motion_notify, update_hover_state
from ctlcenter.ui import create_ui
from ctlcenter.utils import die, set_value

GRAB_ATTEMPTS = 1000
GRAB_RETRY_DELAY = 0.001
STATE_UPDATE_INTERVAL = 0.3
PENDING_POLL_MS = 30
WINDOW_CLASS = "center"

Color = Union[ColorRole, str]
Region = tuple[int, int, int, int]


@dataclass(frozen=True)
class _FillRect:
    x: int
    y: int
    width: int
    height: int
    color: Color


@dataclass(frozen=True)
class _DrawText:
    x: int
    y: int
    text: str
    color: Color


_DrawOp = Union[_FillRect, _DrawText]


def _trunc_div(numerator: int, denominator: int) -> int:
    quotient = abs(numerator) // abs(denominator)
    return quotient if (numerator < 0) == (denominator < 0) else -quotient


def _to_hex(color: Color) -> str:
    if isinstance(color, str):
        return color
    red, green, blue, _alpha = color.rgba
    return f"#{red >> 8:02x}{green >> 8:02x}{blue >> 8:02x}"


def _tk_font(spec: str) -> tuple[str, int]:
    family, _, size = spec.rpartition("-")
    if not family or not size.isdigit():
        return (spec, 12)
    return (family, int(size))


def knob_position(widget: Widget) -> tuple[int, int]:
    """Top-left corner of a slider's knob."""
    knob_x = widget.x + _trunc_div(
        widget.slider_value * (widget.width - widget.knob), widget.max_value
    )
    knob_y = widget.y - widget.knob // 2
    return knob_x, knob_y


def redraw_region(app: App, widget: Widget) -> Optional[Region]:
    """The rectangle ``(x, y, width, height)`` a widget paints, or None if it paints nothing."""
    if widget.type is WidgetType.SLIDER:
        return (
            widget.x - 2,
            widget.y - widget.knob // 2 - 2,
            widget.width + 4,
            widget.knob + 4,
        )
    if widget.type is WidgetType.BUTTON:
        return (
            widget.x - PADDING,
            widget.y - app.font.ascent - PADDING,
            widget.width + 2 * PADDING,
            widget.height + 2 * PADDING,
        )
    if widget.type is WidgetType.LABEL:
        return (widget.x, widget.y - app.font.ascent, widget.width, widget.height)
    return None


class ControlCenter:
    """A borderless always-on-top panel of buttons and sliders."""

    def __init__(self, app: Optional[App] = None, update_interval: float = STATE_UPDATE_INTERVAL):
        self.app = app if app is not None else App()
        self.update_interval = update_interval
        self.buffer: dict[WidgetId, list[_DrawOp]] = {}
        self.threads: list[threading.Thread] = []
        self._root = None
        self._canvas = None
        self._tk_error: type[Exception] = Exception
        self._pending: queue.SimpleQueue[Optional[Region]] = queue.SimpleQueue()

    # Drawing -----------------------------------------------------------

    def widget_to_buffer(self, widget: Widget) -> None:
        """Render one widget into the off-screen buffer."""
        app = self.app
        ops: list[_DrawOp]
        if widget.type is WidgetType.LABEL:
            text_width = app.font.text_width(widget.text)
            widget.width = text_width
            widget.height = app.font.height
            text_x = widget.x + _trunc_div(widget.width - text_width, 2)
            ops = [_DrawText(text_x, widget.y, widget.text, widget.normal_color)]
        elif widget.type is WidgetType.BUTTON:
            text_width = app.font.text_width(widget.text)
            back = widget.hover_back if widget.hovered else widget.normal_back
            fore = widget.hover_color if widget.hovered else widget.normal_color
            text_x = widget.x + _trunc_div(widget.width - text_width, 2)
            ops = [
                _FillRect(*redraw_region(app, widget), back),
                _DrawText(text_x, widget.y, widget.text, fore),
            ]
        elif widget.type is WidgetType.SLIDER:
            back = widget.hover_back if widget.hovered else widget.normal_back
            fore = widget.hover_color if widget.hovered else widget.normal_color
            knob_x, knob_y = knob_position(widget)
            ops = [
                _FillRect(*redraw_region(app, widget), BG),
                _FillRect(widget.x, widget.y - 4, widget.width, 8, back),
                _FillRect(knob_x, knob_y, widget.knob, widget.knob, fore),
            ]
        else:
            return
        self.buffer[widget.id] = ops

    def draw_widgets(self) -> None:
        """Render every widget afresh and show the result."""
        with self.app.lock:
            self.buffer = {}
        for widget in self.app.widgets:
            with self.app.lock:
                self.widget_to_buffer(widget)
        self._present()

    def redraw_widget(self, widget: Optional[Widget]) -> None:
        """Render one widget again and show the area it covers."""
        if widget is None:
            return
        region = redraw_region(self.app, widget)
        if region is None:
            return
        with self.app.lock:
            self.widget_to_buffer(widget)
        self._present(region)

    def _ops(self) -> list[_DrawOp]:
        with self.app.lock:
            ops: list[_DrawOp] = [_FillRect(0, 0, self.app.width, self.app.height, BG)]
            for widget_ops in self.buffer.values():
                ops.extend(widget_ops)
        return ops

    def _present(self, region: Optional[Region] = None) -> None:
        if self._canvas is None:
            return
        if threading.current_thread() is not threading.main_thread():
            self._pending.put(region)
            return
        self._paint()

    def _paint(self) -> None:
        canvas = self._canvas
        if canvas is None:
            return
        font = _tk_font(FONT)
        descent = self.app.font.descent
        canvas.delete("all")
        for op in self._ops():
            if isinstance(op, _FillRect):
                canvas.create_rectangle(
                    op.x, op.y, op.x + op.width, op.y + op.height,
                    fill=_to_hex(op.color), outline="",
                )
            else:
                canvas.create_text(
                    op.x, op.y + descent, anchor="sw", text=op.text,
                    fill=_to_hex(op.color), font=font,
                )

    def _poll_pending(self) -> None:
        drained = False
        while True:
            try:
                self._pending.get_nowait()
            except queue.Empty:
                break
            drained = True
        if drained:
            self._paint()
        if self.app.running and self._root is not None:
            self._root.after(PENDING_POLL_MS, self._poll_pending)

    # Background updates -----------------------------------------------

    def spawn_state_thread(
        self, widget_id: WidgetId, widget_type: WidgetType, getter: Callable[[], object]
    ) -> threading.Thread:
        """Start a daemon thread that keeps a widget in step with ``getter``."""
        thread = threading.Thread(
            target=self.state_updater_thread,
            args=(widget_id, getter),
            name=f"state-{WidgetId(widget_id).name.lower()}-{WidgetType(widget_type).name.lower()}",
            daemon=True,
        )
        thread.start()
        self.threads.append(thread)
        return thread

    def state_updater_thread(self, widget_id: WidgetId, getter: Optional[Callable[[], object]]) -> None:
        """Poll ``getter`` and refresh the widget until the panel stops."""
        widget = self.app.widget(widget_id)
        if getter is None:
            return
        while self.app.running:
            if widget.id == self.app.dragging_id:
                time.sleep(self.update_interval)
                continue
            with self.app.lock:
                if widget.type is WidgetType.SLIDER:
                    widget.slider_value = int(getter())
                elif widget.type is WidgetType.BUTTON:
                    set_value(widget, getter)
            self.redraw_widget(widget)
            time.sleep(self.update_interval)

    # Window ------------------------------------------------------------

    def setup(self) -> None:
        """Open the window, build the widgets and grab the input devices."""
        app = self.app
        app.width, app.height = 320, 400
        app.running = True
        try:
            import tkinter
        except ImportError:
            die("Can't open display")
        self._tk_error = tkinter.TclError
        try:
            root = tkinter.Tk(className=WINDOW_CLASS)
        except tkinter.TclError:
            die("Can't open display")
        self._root = root
        try:
            root.overrideredirect(True)
            root.geometry(f"{app.width}x{app.height}+{POS_X}+{POS_Y}")
            root.configure(background=BG)
            root.attributes("-topmost", True)
        except tkinter.TclError:
            self.cleanup()
            die("Can't allocate colors")
        canvas = tkinter.Canvas(
            root, width=app.width, height=app.height,
            background=BG, highlightthickness=0, borderwidth=0,
        )
        canvas.pack()
        self._canvas = canvas
        self._bind_events()
        root.lift()
        root.update_idletasks()

        create_ui(app)
        self.spawn_state_thread(WidgetId.SLIDER_BRIGHTNESS, WidgetType.SLIDER, get_level_brightness)
        self.spawn_state_thread(WidgetId.SLIDER_VOLUME, WidgetType.SLIDER, get_level_audio)
        self.spawn_state_thread(WidgetId.BUTTON_VOLUME_MUTE, WidgetType.BUTTON, get_state_audio_mute)
        self.draw_widgets()
        root.update()

        self.grab_keyboard()
        self.grab_focus()

    def _bind_events(self) -> None:
        canvas = self._canvas
        for sequence in ("<Motion>", "<Enter>", "<Leave>"):
            canvas.bind(sequence, self._on_motion)
        canvas.bind("<ButtonPress>", self._on_button_press)
        canvas.bind("<ButtonRelease>", self._on_button_release)
        self._root.bind("<KeyPress>", self._on_key_press)

    def _retry_grab(self, action: Callable[[], None], message: str) -> None:
        for _ in range(GRAB_ATTEMPTS):
            try:
                action()
                return
            except self._tk_error:
                time.sleep(GRAB_RETRY_DELAY)
        die(message)

    def grab_focus(self) -> None:
        """Grab the pointer for the panel, retrying briefly before giving up."""
        if self._root is None:
            die("cannot grab focus")
        self._retry_grab(self._root.grab_set_global, "cannot grab focus")

    def grab_keyboard(self) -> None:
        """Direct keyboard input to the panel, retrying briefly before giving up."""
        if self._root is None:
            die("cannot grab keyboard")

        def focus() -> None:
            self._root.focus_force()
            self._canvas.focus_set()

        self._retry_grab(focus, "cannot grab keyboard")

    def _stop(self) -> None:
        self.app.running = False
        if self._root is not None:
            self._root.quit()

    def _on_motion(self, event) -> None:
        with self.app.lock:
            update_hover_state(self.app, event.x, event.y)
        if handle_motion_notify(self.app, event.x):
            self._stop()
        self.draw_widgets()

    def _on_button_press(self, event) -> None:
        if handle_button_press(self.app, event.x, event.y, event.x_root, event.y_root):
            self._stop()
        self.draw_widgets()

    def _on_button_release(self, event) -> None:
        self.app.reset_dragging()
        with self.app.lock:
            update_hover_state(self.app, event.x, event.y)
        self.draw_widgets()

    def _on_key_press(self, _event) -> None:
        self._stop()

    def run(self) -> None:
        """Process window events until a key press or a click outside the panel."""
        if self._root is None:
            return
        self._root.after(PENDING_POLL_MS, self._poll_pending)
        while self.app.running:
            self._root.mainloop()

    def cleanup(self) -> None:
        """Stop the updaters, release the grabs and close the window."""
        self.app.running = False
        root, self._root, self._canvas = self._root, None, None
        if root is not None:
            try:
                root.grab_release()
                root.destroy()
            except self._tk_error:
                pass
        with self.app.lock:
            self.buffer = {}


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Show the control center until it is dismissed."""
    parser = argparse.ArgumentParser(
        prog="ctlcenter",
        description="Pop up a small panel with media, radio, volume and brightness controls.",
    )
    parser.parse_args(argv)
    center = ControlCenter(App())
    try:
        center.setup()
        center.run()
    finally:
        center.cleanup()
    return 0