"""Tests for romaji → kana transliteration."""

from __future__ import annotations

import pytest

from modeless.engine.kana import romaji_to_hiragana, to_katakana


@pytest.mark.parametrize("romaji,kana", [
    ("konna", "こんな"),
    ("kanji", "かんじ"),
    ("nihon", "にほん"),
    ("nihongo", "にほんご"),
    ("henkan", "へんかん"),
    ("kyou", "きょう"),
    ("gakkou", "がっこう"),
    ("shinnyuu", "しんにゅう"),
    ("konnichiha", "こんにちは"),
    ("honn", "ほん"),
    ("kan'i", "かんい"),
    ("KONNA", "こんな"),
])
def test_romaji_to_hiragana(romaji, kana):
    assert romaji_to_hiragana(romaji) == (kana, "")


def test_untransliterable_rest_is_returned():
    assert romaji_to_hiragana("kaxyz") == ("か", "xyz")


def test_lone_consonant_is_rest():
    assert romaji_to_hiragana("k") == ("", "k")


def test_rest_keeps_original_case():
    assert romaji_to_hiragana("kaQ") == ("か", "Q")


def test_to_katakana():
    assert to_katakana("こんな") == "コンナ"
    assert to_katakana("がっこう") == "ガッコウ"
    assert to_katakana("ー漢字") == "ー漢字"
