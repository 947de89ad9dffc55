from enum import IntFlag


class SymbolTag(IntFlag):
    """Category flags attached to every symbol in the universe."""

    NONE = 0
    SPACE = 1 << 0
    SOLID = 1 << 1
    STIPPLE = 1 << 2
    BLOCK = 1 << 3
    BORDER = 1 << 4
    DIAGONAL = 1 << 5
    DOT = 1 << 6  # isolated dots, excluding Braille
    QUAD = 1 << 7
    HHALF = 1 << 8
    VHALF = 1 << 9
    HALF = HHALF | VHALF
    INVERTED = 1 << 10  # only one of a complementary pair carries this
    BRAILLE = 1 << 11
    ALL = SPACE | SOLID | STIPPLE | BLOCK | BORDER | DIAGONAL | DOT | QUAD | HALF | INVERTED | BRAILLE


# Lookup order matters: abbreviations resolve to the first word they prefix.
TAG_NAMES: tuple[tuple[str, SymbolTag], ...] = (
    ("all", SymbolTag.ALL),
    ("none", SymbolTag.NONE),
    ("space", SymbolTag.SPACE),
    ("solid", SymbolTag.SOLID),
    ("stipple", SymbolTag.STIPPLE),
    ("block", SymbolTag.BLOCK),
    ("border", SymbolTag.BORDER),
    ("diagonal", SymbolTag.DIAGONAL),
    ("dot", SymbolTag.DOT),
    ("quad", SymbolTag.QUAD),
    ("half", SymbolTag.HALF),
    ("hhalf", SymbolTag.HHALF),
    ("vhalf", SymbolTag.VHALF),
    ("inverted", SymbolTag.INVERTED),
    ("braille", SymbolTag.BRAILLE),
)


def parse_tag(name: str) -> SymbolTag:
    """Resolve a tag name or an abbreviation of one, ignoring case.

    Raises KeyError if nothing in the vocabulary matches.
    """
    key = name.lower()
    if key:
        for tag_name, tag in TAG_NAMES:
            if tag_name.startswith(key):
                return tag
    raise KeyError(name)


def tag_names(tags: int) -> list[str]:
    """Vocabulary names for the single-bit tags present in a mask."""
    return [name for name, tag in TAG_NAMES if tag and tag & (tag - 1) == 0 and tags & tag]
