"""Options that decide how diagnostic reports are rendered."""

from __future__ import annotations

import enum
import os
import sys
from dataclasses import dataclass
from typing import Any, Mapping, Optional, TextIO

__all__ = ["RgbColors", "HandlerOptions"]

_DEFAULT_WIDTH = 80

_HYPERLINK_TERM_PROGRAMS = frozenset(
    {"Hyper", "iTerm.app", "terminology", "WezTerm", "vscode", "ghostty"}
)
_HYPERLINK_TERMS = frozenset({"xterm-kitty", "alacritty", "alacritty-direct"})


class RgbColors(enum.Enum):
    """Which colour format graphical rendering uses when colours are on."""

    ALWAYS = "always"
    """Use RGB colours even if the terminal does not support them."""
    PREFERRED = "preferred"
    """Use RGB colours instead of ANSI if the terminal supports RGB."""
    NEVER = "never"
    """Always use ANSI colours, whatever the terminal supports."""


def _is_terminal(stream: Optional[TextIO], env: Mapping[str, str]) -> bool:
    ignore = env.get("IGNORE_IS_TERMINAL")
    if ignore is not None and ignore != "0":
        return True
    if stream is None:
        return False
    try:
        return bool(stream.isatty())
    except (AttributeError, ValueError, OSError):
        return False


def _force_color_level(env: Mapping[str, str]) -> int:
    value = env.get("FORCE_COLOR")
    if value is None:
        return 0
    value = value.strip().lower()
    if value in ("", "true", "1"):
        return 1
    if value == "2":
        return 2
    if value == "3":
        return 3
    return 0


def _color_level(env: Mapping[str, str], stream: Optional[TextIO]) -> int:
    forced = _force_color_level(env)
    if forced > 0:
        return forced
    term = env.get("TERM", "")
    if "NO_COLOR" in env or term == "dumb" or not _is_terminal(stream, env):
        return 0
    colorterm = env.get("COLORTERM", "")
    term_program = env.get("TERM_PROGRAM", "")
    if colorterm in ("truecolor", "24bit") or term_program in ("iTerm.app", "WezTerm"):
        return 3
    if term_program == "Apple_Terminal" or "256" in term:
        return 2
    if colorterm or term or "CI" in env or "WT_SESSION" in env:
        return 1
    return 0


def _color_has_16m(env: Mapping[str, str], stream: Optional[TextIO]) -> Optional[bool]:
    """None when colours are unsupported, else whether 24-bit colour is."""
    level = _color_level(env, stream)
    if level == 0:
        return None
    return level >= 3


def _supports_hyperlinks(env: Mapping[str, str], stream: Optional[TextIO]) -> bool:
    forced = env.get("FORCE_HYPERLINK")
    if forced is not None:
        return forced.strip() != "0"
    if not _is_terminal(stream, env):
        return False
    if "DOMTERM" in env or "WT_SESSION" in env or "KONSOLE_VERSION" in env:
        return True
    vte = env.get("VTE_VERSION", "")
    if vte.isdigit() and int(vte) >= 5000:
        return True
    if env.get("TERM_PROGRAM", "") in _HYPERLINK_TERM_PROGRAMS:
        return True
    if env.get("TERM", "") in _HYPERLINK_TERMS:
        return True
    return env.get("COLORTERM", "") == "xfce4-terminal"


def _supports_unicode(env: Mapping[str, str], stream: Optional[TextIO]) -> bool:
    if not _is_terminal(stream, env):
        return False
    if sys.platform.startswith("win"):
        return (
            "WT_SESSION" in env
            or env.get("TERM_PROGRAM") == "vscode"
            or env.get("TERM", "") in ("xterm-256color", "alacritty")
        )
    if env.get("TERM", "") == "linux":
        return False
    for name in ("LC_ALL", "LC_CTYPE", "LANG"):
        value = env.get(name)
        if value:
            lowered = value.lower()
            return "utf-8" in lowered or "utf8" in lowered
    return False


def _terminal_width() -> Optional[int]:
    for stream in (sys.__stdout__, sys.__stderr__, sys.__stdin__):
        if stream is None:
            continue
        try:
            columns = os.get_terminal_size(stream.fileno()).columns
        except (AttributeError, ValueError, OSError):
            continue
        if columns > 0:
            return columns
    return None


@dataclass(frozen=True, kw_only=True)
class HandlerOptions:
    """Settings for building a report handler.

    Every field left as ``None`` is resolved from the environment or falls
    back to a default when the handler is built.
    """

    linkify: Optional[bool] = None
    width: Optional[int] = None
    theme: Any = None
    force_graphical: Optional[bool] = None
    force_narrated: Optional[bool] = None
    rgb_colors: RgbColors = RgbColors.NEVER
    color: Optional[bool] = None
    unicode: Optional[bool] = None
    footer: Optional[str] = None
    context_lines: Optional[int] = None
    tab_width: Optional[int] = None
    with_cause_chain: Optional[bool] = None
    break_words: Optional[bool] = None
    wrap_lines: Optional[bool] = None
    word_separator: Any = None
    word_splitter: Any = None
    highlighter: Any = None

    def __post_init__(self) -> None:
        if not isinstance(self.rgb_colors, RgbColors):
            raise TypeError(f"rgb_colors must be RgbColors, not {self.rgb_colors!r}")
        for name in ("width", "context_lines", "tab_width"):
            value = getattr(self, name)
            if value is not None and (isinstance(value, bool) or not isinstance(value, int)):
                raise TypeError(f"{name} must be an int, not {value!r}")
            if value is not None and value < 0:
                raise ValueError(f"{name} must not be negative, got {value}")

    def is_graphical(self) -> bool:
        """Whether the graphical renderer is used instead of the narrated one."""
        if self.force_narrated is not None:
            return not self.force_narrated
        if self.force_graphical is not None:
            return self.force_graphical
        env = os.environ.get("NO_GRAPHICS")
        if env is not None:
            return env == "0"
        return True

    def use_links(self) -> bool:
        """Whether codes are rendered as clickable terminal links."""
        if self.linkify is not None:
            return self.linkify
        return _supports_hyperlinks(os.environ, sys.stderr)

    def get_width(self) -> int:
        """The width to wrap reports at: the set one, the terminal's, or 80."""
        if self.width is not None:
            return self.width
        detected = _terminal_width()
        return detected if detected is not None else _DEFAULT_WIDTH

    def use_unicode(self) -> bool:
        """Whether unicode drawing characters are used rather than ASCII."""
        if self.unicode is not None:
            return self.unicode
        return _supports_unicode(os.environ, sys.stderr)

    def style_kind(self) -> str:
        """The theme styles to use: ``"none"``, ``"ansi"`` or ``"rgb"``."""
        if self.color is False:
            return "none"
        has_16m = _color_has_16m(os.environ, sys.stderr)
        if has_16m is not None:
            if self.rgb_colors is RgbColors.ALWAYS:
                return "rgb"
            if self.rgb_colors is RgbColors.PREFERRED and has_16m:
                return "rgb"
            return "ansi"
        if self.color is True:
            return "rgb" if self.rgb_colors is RgbColors.ALWAYS else "ansi"
        return "none"