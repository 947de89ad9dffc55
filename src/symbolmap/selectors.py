"""Selector expressions for symbol maps.

A selector string is a list of tag names separated by spaces or commas.
Each name may carry a sign::

    block,border            set to block, then add border
    +block,border-dot,stipple
                            add block and border, remove dot and stipple
    -braille                remove Braille from the current selection

A sign sticks until the next one. A name with no sign before it replaces
the selection and makes following unsigned names additive.
"""

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from symbolmap.symbols import indices_by_tags
from symbolmap.tags import SymbolTag, parse_tag

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[ ,]*")
_SIGN = re.compile(r"([+-]) *")
_NAME = re.compile(r"[A-Za-z]*")


class Op(Enum):
    SET = "set"
    ADD = "add"
    REMOVE = "remove"


@dataclass(frozen=True)
class Selector:
    op: Op
    tags: SymbolTag
    name: str  # as written
    position: int  # offset of the name in the source text


class SelectorError(ValueError):
    """A selector string could not be parsed."""

    def __init__(self, message: str, text: str, position: int, fragment: str = ""):
        self.message = message
        self.text = text
        self.position = position
        self.fragment = fragment
        super().__init__(f"{message} at position {position}:\n  {text}\n  {' ' * position}^")


def tokenize(text: str) -> list[Selector]:
    """Parse ``text`` into selectors without applying them."""
    selectors: list[Selector] = []
    op = Op.SET
    pos = 0

    while True:
        pos = _SEPARATORS.match(text, pos).end()
        if pos == len(text):
            break

        sign = _SIGN.match(text, pos)
        if sign:
            op = Op.ADD if sign.group(1) == "+" else Op.REMOVE
            pos = sign.end()

        name = _NAME.match(text, pos).group()
        if not name:
            raise SelectorError("Syntax error in symbol tag selectors", text, pos, text[pos : pos + 1])
        try:
            tags = parse_tag(name)
        except KeyError:
            raise SelectorError(f"Unrecognized symbol tag '{name}'", text, pos, name) from None

        selectors.append(Selector(op, tags, name, pos))
        if op is Op.SET:
            op = Op.ADD
        pos += len(name)

    return selectors


def evaluate(selectors: Iterable[Selector], current: Iterable[int]) -> set[int]:
    """Run selectors against a selection and return the new membership.

    ``current`` is only read, and only copied once the first relative
    selector needs it. No selectors at all yields an empty selection.
    """
    working: set[int] | None = None

    for selector in selectors:
        if selector.op is Op.SET:
            working = set()
        elif working is None:
            working = set(current)

        indices = indices_by_tags(selector.tags).tolist()
        if selector.op is Op.REMOVE:
            working.difference_update(indices)
        else:
            working.update(indices)
        logger.debug("%s %s: %d symbols", selector.op.value, selector.name, len(working))

    return working if working is not None else set()
