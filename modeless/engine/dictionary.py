"""Reading → candidate dictionary for the reference engine."""

from __future__ import annotations

import logging

from modeless.utils.persistence import load_json

logger = logging.getLogger(__name__)

# Small built-in table; user dictionaries extend it.
DEFAULT_DICTIONARY: dict[str, list[str]] = {
    "こんな": ["こんな"],
    "かんじ": ["漢字", "感じ", "幹事"],
    "にほん": ["日本", "二本"],
    "にほんご": ["日本語"],
    "へんかん": ["変換", "返還"],
    "もじ": ["文字"],
    "にゅうりょく": ["入力"],
    "わたし": ["私", "渡し"],
    "きょう": ["今日", "京", "強"],
    "せかい": ["世界"],
    "こんにちは": ["今日は"],
    "ありがとう": ["有難う"],
}


def load_dictionary(path: str | None = None) -> dict[str, list[str]]:
    """Return the built-in table merged with the JSON file at *path*.

    User entries come first in the candidate list.  Entries whose value is
    not a list of strings are skipped with a warning.
    """
    merged = {k: list(v) for k, v in DEFAULT_DICTIONARY.items()}
    if not path:
        return merged

    for reading, candidates in load_json(path).items():
        if isinstance(candidates, str):
            candidates = [candidates]
        if not isinstance(candidates, list) or not all(isinstance(c, str) for c in candidates):
            logger.warning("Dictionary %s: skipping malformed entry %r", path, reading)
            continue
        existing = merged.get(reading, [])
        merged[reading] = list(dict.fromkeys(candidates + existing))
    return merged
