import argparse
import logging
import sys

from symbolmap.selectors import SelectorError
from symbolmap.symbol_map import SymbolMap
from symbolmap.symbols import get_symbols, indices_by_tags
from symbolmap.tags import TAG_NAMES, tag_names
from symbolmap.terminal import get_terminal_width

DEFAULT_SYMBOLS = "block,border,space,-inverted"
DEFAULT_FILL = "none"


def build_symbol_map(selector_texts: list[str], default: str) -> SymbolMap:
    """Apply ``default`` and then each selector string, in order, to a fresh map."""
    symbol_map = SymbolMap()
    for text in [default, *selector_texts]:
        symbol_map.apply_selectors(text)
    return symbol_map


def format_chars(symbol_map: SymbolMap, width: int) -> str:
    chars = "".join(symbol_map)
    width = max(width, 1)
    return "\n".join(chars[i : i + width] for i in range(0, len(chars), width))


def format_codepoints(symbol_map: SymbolMap) -> str:
    lines = []
    for codepoint, tags in symbol_map.symbols[:-1].tolist():
        lines.append(f"U+{codepoint:04X} {chr(codepoint)} {','.join(tag_names(tags))}")
    return "\n".join(lines)


def format_tags() -> str:
    """One line per vocabulary word with the number of symbols it selects."""
    total = len(get_symbols()) - 1
    lines = [f"{name:<10}{len(indices_by_tags(tag)):>5}" for name, tag in TAG_NAMES]
    lines.append(f"{'(universe)':<10}{total:>5}")
    return "\n".join(lines)


def main(argv=None):
    parser = argparse.ArgumentParser(description="Select terminal symbols by tag and list them")
    parser.add_argument(
        "-s",
        "--symbols",
        action="append",
        default=[],
        metavar="SELECTORS",
        help=f"Symbol selectors, e.g. 'block,border' or '+braille-dot'. "
        f"Applied in order on top of the default ({DEFAULT_SYMBOLS!r}).",
    )
    parser.add_argument(
        "--fill",
        action="append",
        default=[],
        metavar="SELECTORS",
        help=f"Selectors for fill symbols (default: {DEFAULT_FILL!r})",
    )
    parser.add_argument(
        "-f", "--format", default="chars", choices=["chars", "codepoints"], help="Output format (default: chars)"
    )
    parser.add_argument(
        "-w", "--width", type=int, default=None, help="Wrap chars output at this many columns (default: terminal width)"
    )
    parser.add_argument("--check", metavar="CHARS", default=None, help="Report whether each character is selected")
    parser.add_argument("--list-tags", action="store_true", help="List tag names and exit")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    args = parser.parse_args(argv)

    if args.verbose:
        logging.basicConfig(level=logging.DEBUG)

    if args.list_tags:
        print(format_tags())
        return 0

    try:
        symbol_map = build_symbol_map(args.symbols, DEFAULT_SYMBOLS)
        fill_map = build_symbol_map(args.fill, DEFAULT_FILL)
    except SelectorError as e:
        parser.error(str(e))

    if args.check is not None:
        missing = False
        for char in args.check:
            found = char in symbol_map
            missing |= not found
            print(f"U+{ord(char):04X} {char} {'yes' if found else 'no'}")
        return 1 if missing else 0

    width = args.width if args.width is not None else get_terminal_width()
    if args.format == "codepoints":
        print(format_codepoints(symbol_map))
        if len(fill_map):
            print("fill:")
            print(format_codepoints(fill_map))
    else:
        print(format_chars(symbol_map, width))
        if len(fill_map):
            print("fill:")
            print(format_chars(fill_map, width))
    return 0


if __name__ == "__main__":
    sys.exit(main())
