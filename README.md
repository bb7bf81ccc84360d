# ctlcenter

A small pop-up control center for lightweight desktops. It opens a borderless,
always-on-top panel of 320 × 400 pixels at position (25, 25) on the screen
with:

- media player buttons: previous, play/pause, next
- Wi-Fi and Bluetooth toggles that show the current radio state
- a notification toggle (pause and resume notifications)
- a brightness slider
- a mute button and a volume slider (up to 120 %)

The brightness and volume sliders and the mute button are refreshed in the
background about every 0.3 seconds, so changes made elsewhere show up while
the panel is open.

## Installing

```
pip install .
```

The window is drawn with Tkinter, which comes with most Python builds but is
packaged separately on some Linux distributions (for example `python3-tk`).
Without it, or without a display, the command prints `Can't open display`
and exits with status 1.

## Running

```
ctlcenter
```

Hover a button and click it to act on it; drag a slider, or click anywhere on
its track to jump there. Pressing any key, or clicking outside the panel,
closes it. The panel grabs the pointer and the keyboard while it is open; if
it cannot, it prints `cannot grab focus` or `cannot grab keyboard` and exits.

## What it needs

ctlcenter does its work by calling ordinary desktop tools, which must be on
your `PATH`:

| Feature        | Tools                               |
|----------------|-------------------------------------|
| Volume, mute   | `wpctl`                             |
| Brightness     | `brightnessctl`, and a readable `/sys/class/backlight/intel_backlight` |
| Media buttons  | `playerctl`                         |
| Wi-Fi          | `nmcli`                             |
| Bluetooth      | `rfkill`                            |
| Notifications  | `dunstctl`, `pkill` (signals `dwmblocks`) |

A missing tool does not stop the panel; the related control simply has no
effect and its state reads as off or zero.

## Using it from Python

The pieces are importable on their own.

`ctlcenter.getters` reads the current state. The level readers return
integers in percent, the state readers return booleans:

```python
from ctlcenter.getters import get_level_audio, get_level_brightness, get_state_wifi

print(get_level_audio())       # volume in percent, e.g. 45
print(get_level_brightness())  # brightness in percent of the maximum
print(get_state_wifi())        # True when Wi-Fi is enabled
```

`get_state_audio_mute`, `get_state_bluetooth` and `get_state_dunst` work the
same way.

`ctlcenter.handlers` holds the actions (`on_volume_changed`,
`on_brightness_changed`, `on_wifi_clicked`, …) and the pointer logic
(`handle_button_press`, `handle_motion_notify`, `update_hover_state`).

`ctlcenter.config` defines the widget model: `App`, `Widget`, `WidgetId`,
`WidgetType`, `ColorRole` and `FontMetrics`. `ctlcenter.ui.create_ui` lays
out every widget on an `App` and returns the final `Layout` cursor:

```python
from ctlcenter.config import App, WidgetId
from ctlcenter.ui import create_ui

app = App()
create_ui(app)
print(app.widget(WidgetId.SLIDER_VOLUME).max_value)  # 120
```

`ctlcenter.control_center.ControlCenter` opens the window, starts the
background updaters and runs the event loop; `ctlcenter.control_center.main`
is what the `ctlcenter` command calls.

## Limits

Text widths are computed from fixed font metrics (`FontMetrics`), not measured
from the installed font, so the layout is the same on every machine. The
backlight path is fixed to `intel_backlight`.

## Tests

```
pip install ".[test]"
pytest
```