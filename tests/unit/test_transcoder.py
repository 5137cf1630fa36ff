import pytest

from tes3json.core.transcoder import (
    CHARACTER_TABLE,
    LEGACY_TO_NATIVE,
    NATIVE_TO_LEGACY,
    to_legacy,
    to_native,
)


def test_table_has_no_collisions():
    natives = [n for n, _ in CHARACTER_TABLE]
    legacies = [l for _, l in CHARACTER_TABLE]
    assert len(CHARACTER_TABLE) == 66
    assert len(set(natives)) == len(natives)
    assert len(set(legacies)) == len(legacies)
    assert len(NATIVE_TO_LEGACY) == len(LEGACY_TO_NATIVE) == 66


def test_table_ranges():
    for native, legacy in CHARACTER_TABLE:
        assert len(native) == 1 and len(legacy) == 1
        assert "Ѐ" <= native <= "ӿ"
        assert " " <= legacy <= "ÿ"


def test_table_matches_cp1251_read_as_latin1():
    for native, legacy in CHARACTER_TABLE:
        assert native.encode("cp1251").decode("latin-1") == legacy


def test_ch_and_yo_do_not_collide():
    assert NATIVE_TO_LEGACY["Ч"] == "×"
    assert NATIVE_TO_LEGACY["ч"] == "÷"
    assert NATIVE_TO_LEGACY["Ё"] == "¨"
    assert NATIVE_TO_LEGACY["ё"] == "¸"


@pytest.mark.parametrize("native,legacy", CHARACTER_TABLE)
def test_every_pair_round_trips(native, legacy):
    assert to_legacy(native) == legacy
    assert to_native(legacy) == native
    assert to_native(to_legacy(native)) == native
    assert to_legacy(to_native(legacy)) == legacy


@pytest.mark.parametrize("ch", ["a", "Z", "0", " ", "\n", '"', "{", "ї", "Є", "€", "~", "\u00a0"])
def test_unmapped_characters_are_fixed_points(ch):
    assert to_legacy(ch) == ch
    assert to_native(ch) == ch


def test_sentence_round_trip():
    text = 'Он сказал: "Привет, Ёжик!" (ч/Ч) 42'
    legacy = to_legacy(text)
    assert "Привет" not in legacy
    assert "Ïðèâåò" in legacy
    assert to_native(legacy) == text


def test_length_is_preserved():
    for s in ["", "abc", "Привет мир", "Ïðèâåò", "mixed Ёё × ÷ ¨ ¸ text"]:
        assert len(to_legacy(s)) == len(s)
        assert len(to_native(s)) == len(s)


def test_double_apply_is_not_a_round_trip():
    s = "Привет"
    once = to_legacy(s)
    assert to_legacy(once) != s
    assert to_legacy(once) == once

    legacy = "Ïðèâåò"
    assert to_native(to_native(legacy)) != legacy

    assert to_legacy(to_legacy("plain ascii")) == "plain ascii"


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        NATIVE_TO_LEGACY["Z"] = "z"
    with pytest.raises(TypeError):
        LEGACY_TO_NATIVE["z"] = "Z"
