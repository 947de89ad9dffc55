from symbolmap.symbols import get_symbols
from symbolmap.tags import SymbolTag


def codepoints_with(tags):
    """Codepoints in the universe whose tags intersect ``tags``, found by a plain scan."""
    found = set()
    for codepoint, symbol_tags in get_symbols().tolist():
        if codepoint == 0:
            break
        if symbol_tags & tags:
            found.add(codepoint)
    return found


def selected_codepoints(symbol_map):
    return {int(c) for c in symbol_map.symbols["codepoint"][:-1]}


ALL_CODEPOINTS = codepoints_with(SymbolTag.ALL)
