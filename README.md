# reportkit

Building blocks for diagnostic error reports in Python.

`reportkit` provides error types that wrap another error with a higher-level
message or with attached source code, a way to walk an error's cause chain,
a process-wide hook that chooses how errors are rendered, and a set of
rendering options that resolve unset values from the environment.

## Installing

```
pip install reportkit
```

## Modules

- `reportkit.wrappers` – `MessageError`, `ContextError`, `WithSourceCode` and
  `diagnostic_attr`.
- `reportkit.hook` – `ReportHandler`, `PlainReportHandler`, `InstallError`,
  `set_hook`, `capture_handler` and `error_chain`.
- `reportkit.handler_options` – `HandlerOptions` and `RgbColors`.

## Wrapping errors

`ContextError(msg, error)` puts a message on top of an error. Its text is the
message, `source()` returns the wrapped error (which is also set as
`__cause__` when it is an exception), and `code()`, `severity()`, `help()`,
`url()`, `labels()`, `source_code()` and `related()` are taken from the
wrapped error.

```python
from reportkit.wrappers import ContextError

err = ContextError("f failed", "oh no!")
str(err)          # 'f failed'
err.debug()       # 'Error { msg: "f failed", source: "oh no!" }'
err.debug(True)   # 'Error {\n    msg: "f failed",\n    source: "oh no!",\n}'
```

`MessageError(message)` is an error made only from a printable message.

`WithSourceCode(error, source_code)` passes every diagnostic detail of `error`
through, except that `source_code()` returns the given source code when the
wrapped error has none of its own.

`diagnostic_attr(error, name)` reads one of the details `code`, `severity`,
`help`, `url`, `labels`, `source_code`, `related` or `diagnostic_source`,
whether it is a method or a plain attribute, and returns `None` when the
error has none. Any other name raises `ValueError`.

## Cause chains and handlers

`error_chain(error)` yields the error and then each of its sources, outermost
first. A source is what a callable `source()` returns, an exception held in a
`source` attribute, or else `__cause__`.

`ReportHandler` is the abstract base for handlers: `debug(error, alternate)`
must be implemented, `display(error, alternate)` gives the message and, with
`alternate`, appends each cause as `": cause"`, and `track_caller(location)`
receives where the report was created.

`PlainReportHandler.debug` writes the message followed by its causes:

```python
from reportkit.hook import PlainReportHandler
from reportkit.wrappers import ContextError

err = ContextError("g failed", ContextError("f failed", OSError("oh no!")))
handler = PlainReportHandler()
handler.display(err, True)   # 'g failed: f failed: oh no!'
print(handler.debug(err))
# g failed
#
# Caused by:
#    0: f failed
#    1: oh no!
```

With `alternate=True` it uses the error's own `debug(True)` where there is
one, and `repr` otherwise.

`set_hook(hook)` installs a callable that takes an error and returns a
`ReportHandler`. Only one hook can be installed per process; a second call
raises `InstallError`. `capture_handler(error)` calls the installed hook,
installing the default (which returns a `PlainReportHandler`) if none is set
yet, checks that the result is a `ReportHandler`, and passes it the location
of the first calling frame outside the package through `track_caller`.

## Rendering options

`HandlerOptions` is a frozen, keyword-only dataclass of rendering settings:
`linkify`, `width`, `theme`, `force_graphical`, `force_narrated`,
`rgb_colors` (an `RgbColors` member: `ALWAYS`, `PREFERRED` or `NEVER`, the
default), `color`, `unicode`, `footer`, `context_lines`, `tab_width`,
`with_cause_chain`, `break_words`, `wrap_lines`, `word_separator`,
`word_splitter` and `highlighter`. Negative or non-integer widths, context
line counts and tab widths are rejected.

Settings left as `None` are resolved when asked for:

- `is_graphical()` – `force_narrated`, then `force_graphical`, then the
  `NO_GRAPHICS` environment variable (graphical only when it is `"0"`), else
  `True`.
- `use_links()` – `linkify`, or whether the terminal on standard error is
  known to support hyperlinks.
- `get_width()` – `width`, the terminal's width, or 80.
- `use_unicode()` – `unicode`, or whether the terminal and locale support it.
- `style_kind()` – `"none"`, `"ansi"` or `"rgb"`, from `color`, `rgb_colors`
  and the terminal's colour support.

## What it does not do

The package has no report type of its own, no helpers for building or
raising reports, no way to look up a wrapped value by type, and no graphical
or narrated renderer: `HandlerOptions` only decides settings, and
`PlainReportHandler` is the only concrete handler. It provides no command
line program.