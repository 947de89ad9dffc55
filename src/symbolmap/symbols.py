"""The global symbol universe.

A fixed table of ``(codepoint, tags)`` records, grouped by category rather
than sorted, and terminated by a zero sentinel. Index into the table is a
symbol's stable identifier. The table is built on first use and is read-only.
"""

import logging
from functools import cache

import numpy as np

from symbolmap.tags import SymbolTag as T

logger = logging.getLogger(__name__)

SYMBOL_DTYPE = np.dtype([("codepoint", np.uint32), ("tags", np.uint32)])
SENTINEL = np.zeros((), dtype=SYMBOL_DTYPE)
SENTINEL.flags.writeable = False

# Stipple shades, light to dark. The dark shade is the inverse of the light one.
STIPPLE = [("░", T.STIPPLE), ("▒", T.STIPPLE), ("▓", T.STIPPLE | T.INVERTED)]

# Block elements: U+2580-U+2595 (eighths and halves)
BLOCKS = [
    ("▀", T.BLOCK | T.HHALF | T.INVERTED),
    ("▁", T.BLOCK),
    ("▂", T.BLOCK),
    ("▃", T.BLOCK),
    ("▄", T.BLOCK | T.HHALF),
    ("▅", T.BLOCK),
    ("▆", T.BLOCK),
    ("▇", T.BLOCK | T.INVERTED),
    ("▉", T.BLOCK | T.INVERTED),
    ("▊", T.BLOCK),
    ("▋", T.BLOCK),
    ("▌", T.BLOCK | T.VHALF),
    ("▍", T.BLOCK),
    ("▎", T.BLOCK),
    ("▏", T.BLOCK),
    ("▐", T.BLOCK | T.VHALF | T.INVERTED),
    ("▔", T.BLOCK),
    ("▕", T.BLOCK),
]

# Quadrants: U+2596-U+259F. Three-quarter blocks invert the single quadrants.
QUADRANTS = [
    ("▖", T.BLOCK | T.QUAD),
    ("▗", T.BLOCK | T.QUAD),
    ("▘", T.BLOCK | T.QUAD),
    ("▙", T.BLOCK | T.QUAD | T.INVERTED),
    ("▚", T.BLOCK | T.QUAD),
    ("▛", T.BLOCK | T.QUAD | T.INVERTED),
    ("▜", T.BLOCK | T.QUAD | T.INVERTED),
    ("▝", T.BLOCK | T.QUAD),
    ("▞", T.BLOCK | T.QUAD | T.INVERTED),
    ("▟", T.BLOCK | T.QUAD | T.INVERTED),
]

# Box drawing: light, heavy, rounded corners, dashes and half lines
BORDERS = [(c, T.BORDER) for c in "─│┌┐└┘├┤┬┴┼━┃┏┓┗┛┣┫┳┻╋╭╮╯╰╌╎╴╵╶╷"]

DIAGONALS = [(c, T.BORDER | T.DIAGONAL) for c in "╱╲╳"]

DOTS = [(c, T.DOT) for c in "·•∙⋅"]

# Braille patterns: U+2801 to U+28FF (the blank pattern U+2800 is left out)
BRAILLE = [(chr(i), T.BRAILLE) for i in range(0x2801, 0x2900)]

GROUPS = [
    [(" ", T.SPACE)],
    [("█", T.SOLID)],
    STIPPLE,
    BLOCKS,
    QUADRANTS,
    BORDERS,
    DIAGONALS,
    DOTS,
    BRAILLE,
]


def build_symbols(groups) -> np.ndarray:
    """Pack (char, tags) groups into a read-only, sentinel-terminated record array."""
    entries = [(ord(char), int(tags)) for group in groups for char, tags in group]
    seen: set[int] = set()
    for codepoint, _ in entries:
        if codepoint in seen:
            raise ValueError(f"Duplicate symbol U+{codepoint:04X}")
        seen.add(codepoint)

    table = np.zeros(len(entries) + 1, dtype=SYMBOL_DTYPE)
    if entries:
        table[:-1] = entries
    table.flags.writeable = False
    return table


@cache
def get_symbols() -> np.ndarray:
    """Return the process-wide symbol table, building it on first call."""
    table = build_symbols(GROUPS)
    logger.debug("Built symbol table with %d symbols", len(table) - 1)
    return table


def indices_by_tags(tags: int) -> np.ndarray:
    """Indices of all symbols whose tags intersect ``tags``, sentinel excluded."""
    table = get_symbols()
    return np.flatnonzero(table["tags"][:-1] & np.uint32(int(tags)))
