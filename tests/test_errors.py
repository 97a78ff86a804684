import pytest

from sgkit.errors import (
    Severity,
    SgError,
    clear_error,
    get_error,
    get_error_callback,
    set_error,
    set_error_callback,
)


@pytest.fixture(autouse=True)
def _reset_state():
    clear_error()
    set_error_callback(None)
    yield
    clear_error()
    set_error_callback(None)


def test_set_error_records_message():
    set_error(Severity.WARNING, "something odd")
    assert get_error() == "something odd"


def test_clear_error_forgets_message():
    set_error(Severity.DEBUG, "noise")
    clear_error()
    assert get_error() is None


def test_callback_receives_severity_and_message():
    received = []
    set_error_callback(lambda sev, msg: received.append((sev, msg)))
    set_error(Severity.WARNING, "bad matrix")
    assert received == [(Severity.WARNING, "bad matrix")]


def test_get_error_callback_returns_installed_callback():
    def callback(severity, message):
        pass

    set_error_callback(callback)
    assert get_error_callback() is callback
    set_error_callback(None)
    assert get_error_callback() is None


def test_fatal_without_callback_raises():
    with pytest.raises(SgError) as info:
        set_error(Severity.FATAL, "cannot go on")
    assert info.value.severity is Severity.FATAL
    assert get_error() == "cannot go on"


def test_fatal_with_callback_does_not_raise():
    received = []
    set_error_callback(lambda sev, msg: received.append(sev))
    set_error(Severity.FATAL, "handled")
    assert received == [Severity.FATAL]


def test_warning_without_callback_is_logged(caplog):
    with caplog.at_level("WARNING"):
        set_error(Severity.WARNING, "logged message")
    assert "logged message" in caplog.text


def test_debug_message_is_recorded_and_passed_to_callback():
    received = []
    set_error_callback(lambda sev, msg: received.append((sev, msg)))
    set_error(Severity.DEBUG, "debug note")
    assert get_error() == "debug note"
    assert received == [(Severity.DEBUG, "debug note")]