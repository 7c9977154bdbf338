import pytest

from reportkit import hook
from reportkit.hook import (
    InstallError,
    PlainReportHandler,
    ReportHandler,
    capture_handler,
    error_chain,
    set_hook,
)


@pytest.fixture(autouse=True)
def fresh_hook(monkeypatch):
    monkeypatch.setattr(hook, "_installed_hook", None)


class Node:
    def __init__(self, message, parent=None):
        self.message = message
        self.parent = parent

    def __str__(self):
        return self.message

    def source(self):
        return self.parent


def chained(*messages):
    errors = [ValueError(m) for m in messages]
    for outer, inner in zip(errors, errors[1:]):
        outer.__cause__ = inner
    return errors[0]


class LocationHandler(ReportHandler):
    def __init__(self):
        self.location = None

    def debug(self, error, alternate=False):
        return "located"

    def track_caller(self, location):
        self.location = location


def test_error_chain_follows_cause():
    error = chained("3", "2", "1", "0")
    assert [str(e) for e in error_chain(error)] == ["3", "2", "1", "0"]


def test_error_chain_uses_source_method():
    error = Node("top", Node("middle", Node("bottom")))
    assert [str(e) for e in error_chain(error)] == ["top", "middle", "bottom"]


def test_error_chain_stops_on_cycle():
    first = Node("a")
    second = Node("b", first)
    first.parent = second
    assert [str(e) for e in error_chain(first)] == ["a", "b"]


def test_display_plain_and_alternate():
    handler = PlainReportHandler()
    assert handler.display(chained("oh no!")) == "oh no!"
    assert handler.display(chained("oh no!"), alternate=True) == "oh no!"
    assert handler.display(chained("f failed", "oh no!"), alternate=True) == "f failed: oh no!"
    error = chained("g failed", "f failed", "oh no!")
    assert handler.display(error) == "g failed"
    assert handler.display(error, alternate=True) == "g failed: f failed: oh no!"


def test_debug_single():
    assert PlainReportHandler().debug(chained("oh no!")) == "oh no!"


def test_debug_one_cause():
    text = PlainReportHandler().debug(chained("f failed", "oh no!"))
    assert text == "f failed\n\nCaused by:\n    oh no!"


def test_debug_several_causes():
    text = PlainReportHandler().debug(chained("g failed", "f failed", "oh no!"))
    assert text == "g failed\n\nCaused by:\n   0: f failed\n   1: oh no!"


def test_debug_alternate_uses_repr():
    error = ValueError("oh no!")
    assert PlainReportHandler().debug(error, alternate=True) == repr(error)


def test_debug_alternate_uses_debug_method():
    class Detailed:
        def debug(self, alternate):
            return f"detailed {alternate}"

    assert PlainReportHandler().debug(Detailed(), alternate=True) == "detailed True"


def test_report_handler_is_abstract():
    with pytest.raises(TypeError):
        ReportHandler()


def test_set_hook_twice_fails():
    set_hook(lambda error: PlainReportHandler())
    with pytest.raises(InstallError) as info:
        set_hook(lambda error: PlainReportHandler())
    assert str(info.value) == (
        "cannot install provided ErrorHook, a hook has already been installed"
    )


def test_default_handler_installed_on_capture():
    handler = capture_handler(ValueError("x"))
    assert isinstance(handler, PlainReportHandler)
    with pytest.raises(InstallError):
        set_hook(lambda error: PlainReportHandler())


def test_hook_receives_error():
    seen = []

    def record(error):
        seen.append(error)
        return PlainReportHandler()

    set_hook(record)
    error = ValueError("oopsie")
    capture_handler(error)
    assert seen == [error]


def test_hook_must_return_handler():
    set_hook(lambda error: "not a handler")
    with pytest.raises(TypeError):
        capture_handler(ValueError("x"))


def test_set_hook_rejects_non_callable():
    with pytest.raises(TypeError):
        set_hook("nope")


def test_track_caller_records_this_file():
    set_hook(lambda error: LocationHandler())
    handler = capture_handler(ValueError("oopsie"))
    assert handler.location.filename == __file__
    assert handler.location.name == "test_track_caller_records_this_file"
    assert handler.debug(ValueError("oopsie")) == "located"


def test_track_caller_through_helper():
    set_hook(lambda error: LocationHandler())

    def make():
        return capture_handler(ValueError("oopsie"))

    handler = make()
    assert handler.location.filename == __file__
    assert handler.location.name == "make"