"""Romaji → kana transliteration tables and pure conversion functions."""

from __future__ import annotations

ROMAJI_TO_HIRAGANA: dict[str, str] = {
    "a": "あ", "i": "い", "u": "う", "e": "え", "o": "お",
    "ka": "か", "ki": "き", "ku": "く", "ke": "け", "ko": "こ",
    "sa": "さ", "si": "し", "shi": "し", "su": "す", "se": "せ", "so": "そ",
    "ta": "た", "ti": "ち", "chi": "ち", "tu": "つ", "tsu": "つ", "te": "て", "to": "と",
    "na": "な", "ni": "に", "nu": "ぬ", "ne": "ね", "no": "の",
    "ha": "は", "hi": "ひ", "hu": "ふ", "fu": "ふ", "he": "へ", "ho": "ほ",
    "ma": "ま", "mi": "み", "mu": "む", "me": "め", "mo": "も",
    "ya": "や", "yu": "ゆ", "yo": "よ",
    "ra": "ら", "ri": "り", "ru": "る", "re": "れ", "ro": "ろ",
    "wa": "わ", "wo": "を", "nn": "ん", "n'": "ん",
    "ga": "が", "gi": "ぎ", "gu": "ぐ", "ge": "げ", "go": "ご",
    "za": "ざ", "zi": "じ", "ji": "じ", "zu": "ず", "ze": "ぜ", "zo": "ぞ",
    "da": "だ", "di": "ぢ", "du": "づ", "de": "で", "do": "ど",
    "ba": "ば", "bi": "び", "bu": "ぶ", "be": "べ", "bo": "ぼ",
    "pa": "ぱ", "pi": "ぴ", "pu": "ぷ", "pe": "ぺ", "po": "ぽ",
    "kya": "きゃ", "kyu": "きゅ", "kyo": "きょ",
    "sya": "しゃ", "syu": "しゅ", "syo": "しょ", "sha": "しゃ", "shu": "しゅ", "sho": "しょ",
    "tya": "ちゃ", "tyu": "ちゅ", "tyo": "ちょ", "cha": "ちゃ", "chu": "ちゅ", "cho": "ちょ",
    "nya": "にゃ", "nyu": "にゅ", "nyo": "にょ",
    "hya": "ひゃ", "hyu": "ひゅ", "hyo": "ひょ",
    "mya": "みゃ", "myu": "みゅ", "myo": "みょ",
    "rya": "りゃ", "ryu": "りゅ", "ryo": "りょ",
    "gya": "ぎゃ", "gyu": "ぎゅ", "gyo": "ぎょ",
    "ja": "じゃ", "ju": "じゅ", "jo": "じょ", "zya": "じゃ", "zyu": "じゅ", "zyo": "じょ",
    "bya": "びゃ", "byu": "びゅ", "byo": "びょ",
    "pya": "ぴゃ", "pyu": "ぴゅ", "pyo": "ぴょ",
    "fa": "ふぁ", "fi": "ふぃ", "fe": "ふぇ", "fo": "ふぉ",
    "-": "ー",
}

_MAX_KEY = max(len(k) for k in ROMAJI_TO_HIRAGANA)
_VOWELS = set("aiueo")

# Hiragana and katakana blocks are 0x60 apart.
_KATAKANA_OFFSET = 0x60


def romaji_to_hiragana(text: str) -> tuple[str, str]:
    """Transliterate *text*; return ``(kana, rest)``.

    ``rest`` is the untransliterable remainder starting at the first
    position no rule applies to (empty on full success).
    """
    src = text.lower()
    out: list[str] = []
    i = 0
    while i < len(src):
        ch = src[i]
        nxt = src[i + 1] if i + 1 < len(src) else ""

        # Doubled consonant → small tsu (except "nn").
        if ch == nxt and ch not in _VOWELS and ch != "n" and ch.isalpha():
            out.append("っ")
            i += 1
            continue

        # "nn" + vowel/y: the first n is ん, the second starts the next syllable
        # ("konna" → こんな); otherwise "nn" is a single ん.
        if ch == "n" and nxt == "n":
            after = src[i + 2] if i + 2 < len(src) else ""
            out.append("ん")
            i += 1 if after and (after in _VOWELS or after == "y") else 2
            continue

        # Bare "n" before a consonant (or at the end) → ん.
        if ch == "n" and (not nxt or (nxt not in _VOWELS and nxt not in "y'")):
            out.append("ん")
            i += 1
            continue

        for size in range(min(_MAX_KEY, len(src) - i), 0, -1):
            kana = ROMAJI_TO_HIRAGANA.get(src[i:i + size])
            if kana is not None:
                out.append(kana)
                i += size
                break
        else:
            return "".join(out), text[i:]
    return "".join(out), ""


def to_katakana(hiragana: str) -> str:
    """Shift hiragana code points into the katakana block; others unchanged."""
    return "".join(
        chr(ord(ch) + _KATAKANA_OFFSET) if "ぁ" <= ch <= "ゖ" else ch
        for ch in hiragana
    )
