"""User-facing message catalogue for modeless.

Picks English or Japanese from the ``language`` setting, falling back to
``LANG`` / the system locale when it is ``"auto"``.
"""

from __future__ import annotations

import locale
import os

SUPPORTED_LANGUAGES = ('en', 'ja')


class I18n:
    """Translation lookup for a single language."""

    def __init__(self, lang: str = 'auto'):
        self.lang = self._detect_language() if lang == 'auto' else lang
        if self.lang not in SUPPORTED_LANGUAGES:
            self.lang = 'en'
        self._translations = self._load_translations()

    def _detect_language(self) -> str:
        lang = os.environ.get('LANG', '')
        if lang:
            return 'ja' if lang.startswith('ja') else 'en'
        try:
            system_locale = locale.getlocale()[0]
        except ValueError:
            system_locale = None
        if system_locale and system_locale.startswith('ja'):
            return 'ja'
        return 'en'

    def _load_translations(self) -> dict[str, dict[str, str]]:
        return {
            'en': {
                'no_candidate': 'no candidate text before cursor',
                'seed_rejected': 'cannot convert {text!r}: {reason}',
                'conversion_cancelled': 'conversion cancelled',
                'window_title': 'modeless editor',
                'ready': 'Ready. {convert} converts, {cancel} cancels.',
            },
            'ja': {
                'no_candidate': 'カーソルの前に変換できる文字がありません',
                'seed_rejected': '{text!r} を変換できません: {reason}',
                'conversion_cancelled': '変換を取り消しました',
                'window_title': 'modeless エディタ',
                'ready': '{convert} で変換、{cancel} で取り消し',
            },
        }

    def t(self, key: str, **kwargs) -> str:
        """Return the message for *key*, formatted with *kwargs*."""
        lang_map = self._translations.get(self.lang, self._translations['en'])
        text = lang_map.get(key, self._translations['en'].get(key, key))
        if kwargs:
            try:
                return text.format(**kwargs)
            except (KeyError, IndexError):
                return text
        return text

    def get_lang(self) -> str:
        return self.lang
