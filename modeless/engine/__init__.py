"""Reference conversion engine (romaji → kana/kanji candidates)."""
