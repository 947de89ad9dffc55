import logging
import threading

import numpy as np

from symbolmap.selectors import evaluate, tokenize
from symbolmap.symbols import SENTINEL, get_symbols, indices_by_tags

logger = logging.getLogger(__name__)

MAX_CODEPOINT = 0x10FFFF


class ReleasedError(RuntimeError):
    """A symbol map was used after its last reference was released."""


class SymbolMap:
    """A selection of symbols from the global universe.

    Membership is kept as a set of universe indices. The sorted array that
    renderers consume is rebuilt lazily: mutations only mark the map dirty,
    and the next query sorts once.

    Reference counting is the only thread-safe part; every other method
    needs external serialization when a map is shared between threads.
    """

    def __init__(self):
        self._refs = 1
        self._refs_lock = threading.Lock()
        self._desired: set[int] | None = set()
        self._symbols: np.ndarray | None = _freeze(SENTINEL.reshape(1))
        self._dirty = False

    # Reference counting

    @property
    def refs(self) -> int:
        return self._refs

    def retain(self) -> "SymbolMap":
        with self._refs_lock:
            if self._refs <= 0:
                raise ReleasedError("retain() on a released symbol map")
            self._refs += 1
        return self

    def release(self) -> None:
        """Drop a reference. The last one frees the map's membership and cache."""
        with self._refs_lock:
            if self._refs <= 0:
                raise ReleasedError("release() on a released symbol map")
            self._refs -= 1
            if self._refs > 0:
                return
        self._desired = None
        self._symbols = None

    def _check_alive(self) -> set[int]:
        if self._desired is None:
            raise ReleasedError("symbol map used after release")
        return self._desired

    # Membership

    def copy(self) -> "SymbolMap":
        """Return an independent map with the same membership and a single reference."""
        desired = self._check_alive()
        dup = SymbolMap()
        dup._desired = set(desired)
        dup._symbols = None
        dup._dirty = True
        return dup

    __copy__ = copy

    @property
    def desired(self) -> frozenset[int]:
        """Universe indices of the selected symbols."""
        return frozenset(self._check_alive())

    def add_by_tags(self, tags: int) -> None:
        """Add every symbol whose tags intersect ``tags``."""
        self._check_alive().update(indices_by_tags(tags).tolist())
        self._dirty = True

    def remove_by_tags(self, tags: int) -> None:
        """Remove every symbol whose tags intersect ``tags``."""
        self._check_alive().difference_update(indices_by_tags(tags).tolist())
        self._dirty = True

    def apply_selectors(self, text: str) -> None:
        """Apply a selector expression such as ``"block,border"`` or ``"+block,border-dot,stipple"``.

        A leading ``+`` or ``-`` edits the current selection; a bare tag name
        starts over from an empty one. The whole string is parsed before
        anything changes, so on SelectorError the map is left as it was.
        """
        desired = self._check_alive()
        selectors = tokenize(text)
        self._desired = evaluate(selectors, desired)
        self._dirty = True
        logger.debug("Applied %d selectors from %r: %d symbols", len(selectors), text, len(self._desired))

    # Materialized view

    def prepare(self) -> None:
        """Rebuild the sorted symbol array if membership changed since the last rebuild."""
        desired = self._check_alive()
        if not self._dirty:
            return

        table = get_symbols()
        selected = table[np.fromiter(desired, dtype=np.intp, count=len(desired))]
        order = np.argsort(selected["codepoint"], kind="stable")
        self._symbols = _freeze(np.concatenate([selected[order], SENTINEL.reshape(1)]))
        self._dirty = False
        logger.debug("Rebuilt symbol map with %d symbols", len(desired))

    @property
    def symbols(self) -> np.ndarray:
        """Selected symbols sorted by codepoint, terminated by a zero sentinel.

        The array is read-only. Later mutations build a new array rather
        than touching this one.
        """
        self.prepare()
        return self._symbols

    def has_symbol(self, symbol: str | int) -> bool:
        codepoint = ord(symbol) if isinstance(symbol, str) else int(symbol)
        if not 0 < codepoint <= MAX_CODEPOINT:
            return False
        codepoints = self.symbols["codepoint"][:-1]
        i = int(np.searchsorted(codepoints, codepoint))
        return i < len(codepoints) and int(codepoints[i]) == codepoint

    __contains__ = has_symbol

    def __iter__(self):
        return (chr(c) for c in self.symbols["codepoint"][:-1].tolist())

    def __len__(self) -> int:
        return len(self._check_alive())

    def __repr__(self) -> str:
        if self._desired is None:
            return "<SymbolMap (released)>"
        return f"<SymbolMap {len(self._desired)} symbols, refs={self._refs}>"


def _freeze(array: np.ndarray) -> np.ndarray:
    array.flags.writeable = False
    return array
