"""Tests for the anchored token detector."""

from __future__ import annotations

import re

import pytest

from modeless.core.token_detector import (
    DEFAULT_PATTERN,
    Token,
    compile_pattern,
    detect_token,
    find_token,
)
from modeless.platform.document_adapter import BufferDocument


def _detect(text: str, cursor: int | None = None, pattern=DEFAULT_PATTERN):
    doc = BufferDocument(text, cursor=cursor)
    return find_token(doc, pattern)


class TestDetectToken:
    def test_token_at_end_of_line(self):
        assert _detect("hello world konna") == Token(12, "konna")

    def test_whole_line_is_token(self):
        assert _detect("konna") == Token(0, "konna")

    def test_cursor_at_line_start(self):
        assert _detect("hello\nworld", cursor=6) is None

    def test_empty_document(self):
        assert _detect("", cursor=0) is None

    def test_preceding_char_does_not_match(self):
        assert _detect("konna ") is None
        assert _detect("konna.") is None

    def test_cursor_in_middle_of_word(self):
        # "hel|lo": the run ends at the cursor, not at the word end
        assert _detect("hello", cursor=3) == Token(0, "hel")

    def test_does_not_cross_line_start(self):
        assert _detect("abc\ndef") == Token(4, "def")

    def test_maximal_run_is_returned(self):
        token = _detect("123abcDEF")
        assert token == Token(3, "abcDEF")
        assert token.end == 9

    def test_non_ascii_not_part_of_default_token(self):
        assert _detect("日本konna") == Token(2, "konna")

    def test_custom_pattern(self):
        assert _detect("x = foo_bar", pattern=r"[a-z_]+") == Token(4, "foo_bar")

    def test_compiled_pattern_keeps_flags(self):
        pat = re.compile("[a-z]+", re.IGNORECASE)
        assert _detect("say HELLO", pattern=pat) == Token(4, "HELLO")

    def test_pattern_matching_only_empty_string_yields_nothing(self):
        assert _detect("abc ", pattern="[a-z]*") is None

    def test_detect_token_with_raw_prefix(self):
        assert detect_token("ab cd", 10, DEFAULT_PATTERN) == Token(8, "cd")

    def test_prefix_with_newline_is_trimmed_to_line(self):
        assert detect_token("ab\ncd", 5) == Token(3, "cd")


class TestAnchoredMatchRegression:
    """A valid token right before the cursor must be found even when an
    earlier, non-adjacent run on the same line would satisfy a backward
    search first."""

    def test_adjacent_token_after_punctuation(self):
        assert _detect("foo, bar") == Token(5, "bar")

    def test_adjacent_token_after_digits(self):
        assert _detect("abc123def", pattern="[a-z]+") == Token(6, "def")

    def test_repeated_calls_do_not_reuse_previous_match(self):
        doc = BufferDocument("alpha beta", cursor=5)
        assert find_token(doc) == Token(0, "alpha")
        doc.set_cursor_position(10)
        assert find_token(doc) == Token(6, "beta")
        doc.set_cursor_position(6)
        assert find_token(doc) is None


def test_compile_pattern_rejects_invalid_regex():
    with pytest.raises(ValueError):
        compile_pattern("[a-z")


class TestLongLines:
    """Detection only scans the run ending at the cursor."""

    @pytest.mark.timeout(5)
    def test_long_word_followed_by_punctuation(self):
        assert detect_token("a" * 200_000 + "!", 200_001) is None

    @pytest.mark.timeout(5)
    def test_long_word_before_cursor(self):
        token = detect_token("a" * 200_000, 200_000)
        assert token == Token(0, "a" * 200_000)

    @pytest.mark.timeout(5)
    def test_long_line_of_words(self):
        line = "konna " * 50_000 + "kanji"
        assert detect_token(line, len(line)) == Token(len(line) - 5, "kanji")

    def test_only_characters_matching_on_their_own_form_the_run(self):
        # "1" matches "[a-z]+[0-9]" only as part of a longer string
        assert detect_token("abc1", 4, r"[a-z]+[0-9]") is None
