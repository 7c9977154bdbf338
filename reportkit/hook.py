"""Installing the hook that picks a handler for every new report."""

from __future__ import annotations

import abc
import os
import sys
import threading
import traceback
from typing import Any, Callable, Iterator, Optional

__all__ = [
    "ErrorHook",
    "ReportHandler",
    "PlainReportHandler",
    "InstallError",
    "set_hook",
    "capture_handler",
    "error_chain",
]

_PACKAGE_DIR = os.path.dirname(os.path.abspath(__file__))

_lock = threading.Lock()
_installed_hook: Optional[Callable[[Any], "ReportHandler"]] = None


def error_chain(error: Any) -> Iterator[Any]:
    """Yield ``error`` and then each of its sources, outermost first.

    A source is what a callable ``source()`` returns, or an exception held in a
    ``source`` attribute, or else the exception's ``__cause__``.
    """
    seen: set[int] = set()
    current = error
    while current is not None and id(current) not in seen:
        seen.add(id(current))
        yield current
        current = _source_of(current)


def _source_of(error: Any) -> Any:
    source = getattr(error, "source", None)
    if callable(source):
        return source()
    if isinstance(source, BaseException):
        return source
    return getattr(error, "__cause__", None)


class ReportHandler(abc.ABC):
    """Decides how a report is written out."""

    @abc.abstractmethod
    def debug(self, error: Any, alternate: bool = False) -> str:
        """Render the detailed form of ``error``."""

    def display(self, error: Any, alternate: bool = False) -> str:
        """Render the short form: the message, and with ``alternate`` its causes."""
        text = str(error)
        if alternate:
            causes = list(error_chain(error))[1:]
            text += "".join(f": {cause}" for cause in causes)
        return text

    def track_caller(self, location: traceback.FrameSummary) -> None:
        """Remember where the report was created; ignored by default."""


def _alternate_debug(error: Any) -> str:
    render = getattr(error, "debug", None)
    if callable(render):
        return render(True)
    return repr(error)


class PlainReportHandler(ReportHandler):
    """A handler that writes the message followed by its list of causes."""

    def debug(self, error: Any, alternate: bool = False) -> str:
        if alternate:
            return _alternate_debug(error)
        message, *causes = error_chain(error)
        text = str(message)
        if not causes:
            return text
        text += "\n\nCaused by:"
        if len(causes) == 1:
            return text + f"\n    {causes[0]}"
        width = len(str(len(causes) - 1))
        lines = (f"\n   {index:>{width}}: {cause}" for index, cause in enumerate(causes))
        return text + "".join(lines)


ErrorHook = Callable[[Any], ReportHandler]


class InstallError(Exception):
    """Raised when a hook is installed after one already has been."""

    def __init__(self) -> None:
        super().__init__(
            "cannot install provided ErrorHook, a hook has already been installed"
        )


def _default_printer(error: Any) -> ReportHandler:
    return PlainReportHandler()


def set_hook(hook: ErrorHook) -> None:
    """Install ``hook``; raise :class:`InstallError` if one is already set."""
    global _installed_hook
    if not callable(hook):
        raise TypeError(f"hook must be callable, not {hook!r}")
    with _lock:
        if _installed_hook is not None:
            raise InstallError()
        _installed_hook = hook


def _caller_location() -> Optional[traceback.FrameSummary]:
    frame = sys._getframe(1)
    while frame is not None:
        filename = os.path.abspath(frame.f_code.co_filename)
        if os.path.dirname(filename) != _PACKAGE_DIR and not filename.startswith(
            _PACKAGE_DIR + os.sep
        ):
            return traceback.FrameSummary(
                frame.f_code.co_filename,
                frame.f_lineno,
                frame.f_code.co_name,
                lookup_line=False,
            )
        frame = frame.f_back
    return None


def capture_handler(error: Any) -> ReportHandler:
    """Make the handler for a new report on ``error`` using the installed hook.

    If no hook has been installed, the default one is installed first, so a
    later :func:`set_hook` fails.
    """
    global _installed_hook
    with _lock:
        if _installed_hook is None:
            _installed_hook = _default_printer
        hook = _installed_hook
    handler = hook(error)
    if not isinstance(handler, ReportHandler):
        raise TypeError(f"hook returned {handler!r}, not a ReportHandler")
    location = _caller_location()
    if location is not None:
        handler.track_caller(location)
    return handler