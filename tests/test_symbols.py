import numpy as np
import pytest

from symbolmap.symbols import SYMBOL_DTYPE, build_symbols, get_symbols, indices_by_tags
from symbolmap.tags import SymbolTag


def test_table_is_sentinel_terminated():
    table = get_symbols()
    assert table.dtype == SYMBOL_DTYPE
    assert table[-1]["codepoint"] == 0
    assert table[-1]["tags"] == 0
    assert np.all(table["codepoint"][:-1] != 0)


def test_table_is_shared_and_read_only():
    table = get_symbols()
    assert get_symbols() is table
    with pytest.raises(ValueError):
        table[0] = (65, 1)


def test_codepoints_are_unique():
    codepoints = get_symbols()["codepoint"][:-1]
    assert len(np.unique(codepoints)) == len(codepoints)


def test_table_is_not_in_codepoint_order():
    codepoints = get_symbols()["codepoint"][:-1]
    assert np.any(np.diff(codepoints.astype(np.int64)) < 0)


def test_every_symbol_has_a_tag():
    assert np.all(get_symbols()["tags"][:-1] != 0)


def test_indices_by_tags_matches_scan():
    table = get_symbols()
    for tag in (SymbolTag.BLOCK, SymbolTag.BORDER | SymbolTag.DOT, SymbolTag.HALF):
        expected = [i for i in range(len(table) - 1) if int(table[i]["tags"]) & tag]
        assert indices_by_tags(tag).tolist() == expected


def test_indices_by_tags_none_is_empty():
    assert len(indices_by_tags(SymbolTag.NONE)) == 0


def test_all_covers_universe():
    assert len(indices_by_tags(SymbolTag.ALL)) == len(get_symbols()) - 1


def test_known_symbols_are_tagged():
    table = get_symbols()
    tags = {chr(c): t for c, t in table[:-1].tolist()}
    assert tags[" "] == SymbolTag.SPACE
    assert tags["█"] == SymbolTag.SOLID
    assert tags["▄"] & SymbolTag.HHALF
    assert tags["▀"] & SymbolTag.INVERTED
    assert not tags["▄"] & SymbolTag.INVERTED
    assert tags["╱"] & SymbolTag.DIAGONAL and tags["╱"] & SymbolTag.BORDER
    assert tags["⣿"] == SymbolTag.BRAILLE
    assert "⠀" not in tags


def test_build_symbols_rejects_duplicates():
    with pytest.raises(ValueError, match="Duplicate symbol U\\+0041"):
        build_symbols([[("A", SymbolTag.DOT)], [("A", SymbolTag.BLOCK)]])


def test_build_symbols_empty_has_only_sentinel():
    table = build_symbols([])
    assert len(table) == 1
    assert table[0]["codepoint"] == 0
