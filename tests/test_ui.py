import subprocess

import pytest

from ctlcenter.config import PADDING, App, ColorRole, WidgetId, WidgetType
from ctlcenter.ui import Layout, create_ui, get_text_width


class FakeRunner:
    def __init__(self):
        self.outputs = {}
        self.calls = []

    def __call__(self, argv, **kwargs):
        argv = list(argv)
        self.calls.append(argv)
        return subprocess.CompletedProcess(
            argv, 0, stdout=self.outputs.get(argv[0], ""), stderr=None
        )


@pytest.fixture
def runner(monkeypatch):
    fake = FakeRunner()
    monkeypatch.setattr(subprocess, "run", fake)
    return fake


def test_text_width_takes_wider_label():
    app = App()
    wide = get_text_width(app, "Wi-Fi:On", "Wi-Fi:Off")
    assert wide == get_text_width(app, "Wi-Fi:Off", "Wi-Fi:On")
    assert wide == app.font.text_width("Wi-Fi:Off")


def test_button_natural_width_and_text():
    app = App()
    layout = Layout()
    widget = layout.add_button(
        app, WidgetId.BUTTON_WIFI, None, "Wi-Fi:On", "Wi-Fi:Off", 0, True
    )
    assert widget.width == get_text_width(app, "Wi-Fi:On", "Wi-Fi:Off")
    assert widget.text == "Wi-Fi:On"
    assert widget.type == WidgetType.BUTTON
    assert widget.hover_back == ColorRole.HOVER_BG
    assert app.widget(WidgetId.BUTTON_WIFI) is widget


def test_button_uses_invalid_label_when_state_false():
    app = App()
    widget = Layout().add_button(
        app, WidgetId.BUTTON_BLUETOOTH, lambda: False, "BT:On", "BT:Off", 0, True
    )
    assert widget.text == "BT:Off"
    assert widget.valid_label == "BT:On"


def test_button_override_width_and_cursor():
    app = App()
    layout = Layout()
    widget = layout.add_button(app, WidgetId.BUTTON_NOTIFY, None, "a", "b", 90, True)
    assert widget.width == 90
    assert widget.x == 20
    assert widget.y == 20 + app.font.height
    assert layout.x == 20 + 90 + 2 * PADDING
    assert layout.row_height == app.font.height + 2 * PADDING


def test_spacing_added_unless_last():
    app = App()
    last = Layout()
    last.add_button(app, WidgetId.BUTTON_NOTIFY, None, "a", "b", 50, True)
    middle = Layout()
    middle.add_button(app, WidgetId.BUTTON_NOTIFY, None, "a", "b", 50, False)
    assert middle.x - last.x == 10


def test_label_placement():
    app = App()
    layout = Layout()
    widget = layout.add_label(app, WidgetId.LABEL_BRIGHTNESS, None, "Brgh", "Brgh", 0, False)
    assert widget.type == WidgetType.LABEL
    assert widget.text == "Brgh"
    assert widget.normal_color == ColorRole.NORM_FG
    assert layout.x == 20 + app.font.text_width("Brgh") + 2 * PADDING + 10


def test_slider_default_width():
    app = App()
    layout = Layout()
    widget = layout.add_slider(app, WidgetId.SLIDER_VOLUME, 30, 120, 0, True)
    assert widget.width == 200
    assert widget.knob == 14
    assert widget.slider_value == 30
    assert widget.max_value == 120
    assert widget.y == layout.y + app.font.ascent
    assert widget.normal_color == ColorRole.NORM_FG_SLIDER


def test_new_row_moves_cursor_down():
    app = App()
    layout = Layout()
    layout.add_button(app, WidgetId.BUTTON_NOTIFY, None, "a", "b", 40, False)
    height = layout.row_height
    start_y = layout.y
    layout.new_row()
    assert layout.x == 20
    assert layout.y == start_y + height + 10
    assert layout.row_height == 0


def test_create_ui_builds_all_widgets(runner):
    app = App()
    create_ui(app)
    expected = {
        WidgetId.BUTTON_PLAYER_PREV: WidgetType.BUTTON,
        WidgetId.BUTTON_PLAYER_PLAY_PAUSE: WidgetType.BUTTON,
        WidgetId.BUTTON_PLAYER_NEXT: WidgetType.BUTTON,
        WidgetId.BUTTON_WIFI: WidgetType.BUTTON,
        WidgetId.BUTTON_BLUETOOTH: WidgetType.BUTTON,
        WidgetId.BUTTON_NOTIFY: WidgetType.BUTTON,
        WidgetId.LABEL_BRIGHTNESS: WidgetType.LABEL,
        WidgetId.SLIDER_BRIGHTNESS: WidgetType.SLIDER,
        WidgetId.BUTTON_VOLUME_MUTE: WidgetType.BUTTON,
        WidgetId.SLIDER_VOLUME: WidgetType.SLIDER,
    }
    for widget_id, widget_type in expected.items():
        assert app.widget(widget_id).type == widget_type
        assert app.widget(widget_id).id == widget_id
    assert app.widget(WidgetId.SLIDER_VOLUME).max_value == 120
    assert app.widget(WidgetId.SLIDER_BRIGHTNESS).max_value == 100


def test_create_ui_texts_follow_state(runner):
    app = App()
    create_ui(app)
    assert app.widget(WidgetId.BUTTON_PLAYER_PLAY_PAUSE).text == "Play"
    assert app.widget(WidgetId.BUTTON_WIFI).text == "Wi-Fi:Off"
    assert app.widget(WidgetId.BUTTON_BLUETOOTH).text == "BT:Off"
    assert app.widget(WidgetId.BUTTON_NOTIFY).text == "Silence"
    assert app.widget(WidgetId.BUTTON_VOLUME_MUTE).text == "Vol"
    assert app.widget(WidgetId.SLIDER_VOLUME).slider_value == 0


def test_create_ui_reads_wifi_state(runner):
    runner.outputs["nmcli"] = "WIFI\nenabled\n"
    app = App()
    create_ui(app)
    assert app.widget(WidgetId.BUTTON_WIFI).text == "Wi-Fi:On"


def test_create_ui_rows_share_width_and_line(runner):
    app = App()
    create_ui(app)
    row = [
        app.widget(WidgetId.BUTTON_PLAYER_PREV),
        app.widget(WidgetId.BUTTON_PLAYER_PLAY_PAUSE),
        app.widget(WidgetId.BUTTON_PLAYER_NEXT),
    ]
    assert len({w.width for w in row}) == 1
    assert len({w.y for w in row}) == 1
    assert row[0].x < row[1].x < row[2].x
    assert app.widget(WidgetId.BUTTON_WIFI).y > row[0].y
    assert app.widget(WidgetId.BUTTON_NOTIFY).y > app.widget(WidgetId.BUTTON_WIFI).y
    assert app.widget(WidgetId.SLIDER_VOLUME).y > app.widget(WidgetId.SLIDER_BRIGHTNESS).y


def test_create_ui_slider_fills_rest_of_row(runner):
    app = App()
    create_ui(app)
    label = app.widget(WidgetId.LABEL_BRIGHTNESS)
    slider = app.widget(WidgetId.SLIDER_BRIGHTNESS)
    assert slider.x == label.x + app.font.text_width("Brgh") + 2 * PADDING + 10
    assert slider.x + slider.width <= app.width - 20