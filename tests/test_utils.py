import sys

import pytest

from ctlcenter.config import Widget
from ctlcenter.utils import die, execute_command_args, read_int_from_file, set_value


def test_die_exits_with_status_one(capsys):
    with pytest.raises(SystemExit) as info:
        die("cannot grab focus")
    assert info.value.code == 1
    assert capsys.readouterr().err == "cannot grab focus\n"


def test_die_appends_current_error_after_colon(capsys):
    try:
        raise OSError("no such thing")
    except OSError:
        with pytest.raises(SystemExit):
            die("open:")
    assert capsys.readouterr().err == "open: no such thing\n"


def test_execute_returns_exit_status():
    status = execute_command_args([sys.executable, "-c", "import sys; sys.exit(3)"])
    assert status == 3


def test_execute_discards_output(capfd):
    status = execute_command_args(
        [sys.executable, "-c", "import sys; print('out'); print('err', file=sys.stderr)"]
    )
    captured = capfd.readouterr()
    assert status == 0
    assert captured.out == ""
    assert captured.err == ""


def test_execute_missing_program_reports_failure(tmp_path):
    assert execute_command_args([str(tmp_path / "missing-program")]) == 1


def test_execute_waits_for_completion(tmp_path):
    target = tmp_path / "done"
    execute_command_args(
        [sys.executable, "-c", f"open({str(target)!r}, 'w').write('x')"]
    )
    assert target.read_text() == "x"


@pytest.mark.parametrize(
    "content, expected",
    [("42\n", 42), ("  7", 7), ("-15 trailing", -15), ("+3", 3), ("96000abc", 96000)],
)
def test_read_int_from_file(tmp_path, content, expected):
    path = tmp_path / "value"
    path.write_text(content)
    assert read_int_from_file(path) == expected


def test_read_int_rejects_non_numbers(tmp_path):
    path = tmp_path / "value"
    path.write_text("abc")
    with pytest.raises(ValueError):
        read_int_from_file(path)


def test_read_int_rejects_empty(tmp_path):
    path = tmp_path / "value"
    path.write_text("")
    with pytest.raises(ValueError):
        read_int_from_file(path)


def test_read_int_missing_file(tmp_path):
    with pytest.raises(FileNotFoundError):
        read_int_from_file(tmp_path / "absent")


def _labelled():
    return Widget(valid_label="Wi-Fi:On", invalid_label="Wi-Fi:Off", text="x")


def test_set_value_true_state():
    w = _labelled()
    set_value(w, lambda: 1)
    assert w.text == "Wi-Fi:On"


def test_set_value_false_state():
    w = _labelled()
    set_value(w, lambda: False)
    assert w.text == "Wi-Fi:Off"


def test_set_value_without_state_uses_valid_label():
    w = _labelled()
    set_value(w, None)
    assert w.text == w.valid_label