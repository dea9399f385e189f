# src/reqlog/core/logging/ansi.py
"""
ANSI SGR styling helpers.

`style()` decorates a piece of text with Select Graphic Rendition codes and a
trailing reset; `strip_ansi()` removes every such sequence again. The two are
inverses on the text content.

SGR code ranges used here:

| Code Range | Meaning                  |
| ---------- | ------------------------ |
| 1          | bright / bold            |
| 4          | underline                |
| 30-37      | foreground colour        |
| 40-47      | background colour        |
| 0          | reset all attributes     |
"""

import logging
import re
from typing import Any, MutableMapping

COLOR_NAMES = ("black", "red", "green", "yellow", "blue", "magenta", "cyan", "white")

SGR_CODES: dict[str, int] = {
    "bright": 1,
    "underline": 4,
    **{name: 30 + offset for offset, name in enumerate(COLOR_NAMES)},
    **{f"bg-{name}": 40 + offset for offset, name in enumerate(COLOR_NAMES)},
}

RESET = "\033[0m"

# CSI ... m, the only kind of sequence style() ever produces
_ANSI_RE = re.compile(r"\x1b\[[0-9;]*m")


def style(text: Any, *styles: str) -> str:
    """
    Decorate `text` with the given SGR style names.

    "default" means no decoration. With no effective styles the text is
    returned as a plain string.

    Raises:
        ValueError: a style name is not known.
    """
    codes = []
    for name in styles:
        if name == "default":
            continue
        try:
            codes.append(str(SGR_CODES[name]))
        except KeyError:
            raise ValueError(f"Unknown ANSI style: {name!r}") from None
    if not codes:
        return str(text)
    return f"\033[{';'.join(codes)}m{text}{RESET}"


def strip_ansi(text: str) -> str:
    """Remove all SGR escape sequences from `text`."""
    return _ANSI_RE.sub("", text)


class AnsiStrippingAdapter(logging.LoggerAdapter):
    """
    LoggerAdapter that removes ANSI decoration before a record is created.

    Wrapping a logger in this adapter turns any colored logging call site into
    a plain-text one: the message and its string arguments are stripped, the
    level, exc_info and extras pass through untouched.
    """

    def __init__(self, logger: logging.Logger | logging.LoggerAdapter):
        super().__init__(logger, {})

    def process(self, msg: Any, kwargs: MutableMapping[str, Any]) -> tuple[Any, MutableMapping[str, Any]]:
        if isinstance(msg, str):
            msg = strip_ansi(msg)
        return msg, kwargs

    def log(self, level: int, msg: Any, *args: Any, **kwargs: Any) -> None:
        args = tuple(strip_ansi(a) if isinstance(a, str) else a for a in args)
        super().log(level, msg, *args, **kwargs)


__all__ = ["COLOR_NAMES", "SGR_CODES", "style", "strip_ansi", "AnsiStrippingAdapter"]
