# src/reqlog/core/logging/colors.py
"""
Request id generation and colorization.

Every request gets a small random id (0..0xffff). The id is rendered as a
4-digit hex token and painted with a foreground/background pair derived from
the id itself, so the start, finish and exception lines of one request share
both the token and its colours and are easy to pick out of interleaved output.

The id is a correlation aid, not an identity: two in-flight requests may draw
the same value. That is acceptable because lines are correlated within a short
time window.
"""

import random
from typing import Iterable, NamedTuple

from reqlog.exceptions import ConfigurationError
from .ansi import COLOR_NAMES, style, strip_ansi

MAX_REQUEST_ID = 0xFFFF


class ColorPair(NamedTuple):
    foreground: str
    background: str

    @property
    def styles(self) -> tuple[str, str]:
        """SGR style names for this pair, usable with ansi.style()."""
        return self.foreground, f"bg-{self.background}"


class Palette:
    """
    Ordered, immutable set of colour names used to paint request ids.

    Validated on construction: at least two distinct, known colours. Anything
    else raises ConfigurationError, which is meant to surface at startup.
    """

    __slots__ = ("_colors",)

    def __init__(self, colors: Iterable[str]):
        names = tuple(colors)
        if len(names) < 2:
            raise ConfigurationError(
                f"Palette needs at least 2 colours, got {len(names)}", field="LOG_PALETTE"
            )
        unknown = [n for n in names if n not in COLOR_NAMES]
        if unknown:
            raise ConfigurationError(
                f"Unknown palette colour(s): {', '.join(unknown)}", field="LOG_PALETTE"
            )
        if len(set(names)) != len(names):
            raise ConfigurationError("Palette colours must be distinct", field="LOG_PALETTE")
        self._colors = names

    @property
    def colors(self) -> tuple[str, ...]:
        return self._colors

    def __len__(self) -> int:
        return len(self._colors)

    def __iter__(self):
        return iter(self._colors)

    def __getitem__(self, index: int) -> str:
        return self._colors[index]

    def __eq__(self, other: object) -> bool:
        return isinstance(other, Palette) and other._colors == self._colors

    def __hash__(self) -> int:
        return hash(self._colors)

    def __repr__(self) -> str:
        return f"Palette({list(self._colors)!r})"


# black is left out: it disappears on dark terminals
DEFAULT_PALETTE = Palette(("red", "green", "yellow", "blue", "magenta", "cyan", "white"))


def generate_id() -> int:
    """Return a pseudo-random request id in [0, 0xffff]."""
    return random.randint(0, MAX_REQUEST_ID)


def colorize(request_id: int, palette: Palette = DEFAULT_PALETTE) -> ColorPair:
    """
    Return the colour pair for `request_id`.

    foreground = palette[id mod N]; the background is picked with id mod (N-1)
    from the palette with the foreground removed, so the two never match and
    the same id always gives the same pair.
    """
    count = len(palette)
    foreground = palette[request_id % count]
    rest = [c for c in palette if c != foreground]
    background = rest[request_id % (count - 1)]
    return ColorPair(foreground, background)


def format_id(request_id: int, palette: Palette = DEFAULT_PALETTE) -> str:
    """Bright, colour-paired 4-digit hex rendering of a request id."""
    return style(f"{request_id:04x}", "bright", *colorize(request_id, palette).styles)


def format_id_plain(request_id: int) -> str:
    """Undecorated 4-digit hex rendering of a request id."""
    return strip_ansi(format_id(request_id))


__all__ = [
    "MAX_REQUEST_ID",
    "ColorPair",
    "Palette",
    "DEFAULT_PALETTE",
    "generate_id",
    "colorize",
    "format_id",
    "format_id_plain",
]
