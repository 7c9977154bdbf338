"""Error types that wrap another error or message and pass its details through."""

from __future__ import annotations

from itertools import islice
from typing import Any, Optional

from reportkit.hook import error_chain

__all__ = [
    "MessageError",
    "ContextError",
    "WithSourceCode",
    "diagnostic_attr",
]

_DIAGNOSTIC_ATTRS = frozenset(
    {
        "code",
        "severity",
        "help",
        "url",
        "labels",
        "source_code",
        "related",
        "diagnostic_source",
    }
)

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "'": "\\'",
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
    "\0": "\\0",
}


def diagnostic_attr(error: Any, name: str) -> Any:
    """Return the diagnostic detail ``name`` of ``error``, or None if it has none.

    A detail is either a method taking no arguments or a plain attribute.
    """
    if name not in _DIAGNOSTIC_ATTRS:
        raise ValueError(f"unknown diagnostic attribute {name!r}")
    value = getattr(error, name, None)
    if callable(value):
        return value()
    return value


def _escape_debug(text: str) -> str:
    def escape(ch: str) -> str:
        if ch in _ESCAPES:
            return _ESCAPES[ch]
        if not ch.isprintable():
            return f"\\u{{{ord(ch):x}}}"
        return ch

    return "".join(escape(ch) for ch in text)


def _quoted(value: Any) -> str:
    return f'"{_escape_debug(str(value))}"'


def _debug_of(value: Any, alternate: bool) -> str:
    if isinstance(value, str):
        return _quoted(value)
    render = getattr(value, "debug", None)
    if callable(render):
        return render(alternate)
    return repr(value)


def _source_of(error: Any) -> Any:
    return next(islice(error_chain(error), 1, None), None)


class MessageError(Exception):
    """An error made from a printable message and nothing more."""

    def __init__(self, message: Any) -> None:
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return str(self.message)

    def __repr__(self) -> str:
        return _debug_of(self.message, False)


class ContextError(Exception):
    """An error carrying a higher-level message on top of the error it wraps.

    Its text is the message; every diagnostic detail comes from the wrapped
    error, which is also its source.
    """

    def __init__(self, msg: Any, error: Any) -> None:
        super().__init__(msg, error)
        self.msg = msg
        self.error = error
        if isinstance(error, BaseException):
            self.__cause__ = error

    def __str__(self) -> str:
        return str(self.msg)

    def __repr__(self) -> str:
        return self.debug(False)

    def source(self) -> Any:
        """The wrapped error."""
        return self.error

    def code(self) -> Any:
        return diagnostic_attr(self.error, "code")

    def severity(self) -> Any:
        return diagnostic_attr(self.error, "severity")

    def help(self) -> Any:
        return diagnostic_attr(self.error, "help")

    def url(self) -> Any:
        return diagnostic_attr(self.error, "url")

    def labels(self) -> Any:
        return diagnostic_attr(self.error, "labels")

    def source_code(self) -> Any:
        return diagnostic_attr(self.error, "source_code")

    def related(self) -> Any:
        return diagnostic_attr(self.error, "related")

    def debug(self, alternate: bool = False) -> str:
        """Render as ``Error { msg: ..., source: ... }``, pretty when ``alternate``."""
        msg = _quoted(self.msg)
        if alternate:
            inner = _debug_of(self.error, True).replace("\n", "\n    ")
            return f"Error {{\n    msg: {msg},\n    source: {inner},\n}}"
        inner = _debug_of(self.error, False)
        return f"Error {{ msg: {msg}, source: {inner} }}"


class WithSourceCode(Exception):
    """An error with source code attached, used when the error has none itself."""

    def __init__(self, error: Any, source_code: Any) -> None:
        super().__init__(error, source_code)
        self.error = error
        self._source_code = source_code

    def __str__(self) -> str:
        return str(self.error)

    def __repr__(self) -> str:
        return _debug_of(self.error, False)

    def source(self) -> Optional[Any]:
        """The source of the wrapped error."""
        return _source_of(self.error)

    def code(self) -> Any:
        return diagnostic_attr(self.error, "code")

    def severity(self) -> Any:
        return diagnostic_attr(self.error, "severity")

    def help(self) -> Any:
        return diagnostic_attr(self.error, "help")

    def url(self) -> Any:
        return diagnostic_attr(self.error, "url")

    def labels(self) -> Any:
        return diagnostic_attr(self.error, "labels")

    def source_code(self) -> Any:
        own = diagnostic_attr(self.error, "source_code")
        return own if own is not None else self._source_code

    def related(self) -> Any:
        return diagnostic_attr(self.error, "related")

    def diagnostic_source(self) -> Any:
        return diagnostic_attr(self.error, "diagnostic_source")