"""Tests for modeless.i18n."""

from __future__ import annotations

import os
from unittest import mock

from modeless.i18n import I18n


def _auto(lang_env: str | None):
    env = os.environ.copy()
    env.pop('LANG', None)
    if lang_env is not None:
        env['LANG'] = lang_env
    with mock.patch.dict(os.environ, env, clear=True):
        return I18n('auto')


def test_explicit_language():
    assert I18n('ja').get_lang() == 'ja'
    assert I18n('en').get_lang() == 'en'


def test_unsupported_language_falls_back_to_english():
    assert I18n('fr').get_lang() == 'en'


def test_auto_detects_japanese_from_lang():
    assert _auto('ja_JP.UTF-8').get_lang() == 'ja'


def test_auto_defaults_to_english():
    assert _auto('de_DE.UTF-8').get_lang() == 'en'


def test_formatting():
    msg = I18n('en').t('seed_rejected', text='xyz', reason='bad')
    assert msg == "cannot convert 'xyz': bad"


def test_unknown_key_returns_key():
    assert I18n('en').t('no_such_key') == 'no_such_key'


def test_missing_format_argument_returns_template():
    assert I18n('en').t('seed_rejected', text='x') == 'cannot convert {text!r}: {reason}'
