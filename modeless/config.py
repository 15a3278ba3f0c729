"""Configuration loader and validator for modeless.

Provides ``load_config(path)`` which reads a JSON config (with
comment and trailing-comma tolerant sanitizer) and merges user
overrides from ``~/.config/modeless/config.json``.

Also provides ``validate_config(conf)`` which normalizes and
validates config keys, raising ``ValueError`` on invalid values.
"""

from __future__ import annotations

import json
import logging
import os
import re

from modeless.core.token_detector import compile_pattern
from modeless.input.key_bindings import KeyBinding
from modeless.utils.persistence import save_json

logger = logging.getLogger(__name__)

USER_CONFIG_PATH = '~/.config/modeless/config.json'

# Single source of truth for default configuration
DEFAULT_CONFIG: dict = {
    'debug': False,
    'token_pattern': '[a-zA-Z]+',
    'convert_key': 'Ctrl+KEY_J',
    'cancel_key': 'Ctrl+KEY_G',
    'next_candidate_keys': ['KEY_SPACE', 'KEY_DOWN'],
    'previous_candidate_keys': ['KEY_UP'],
    'commit_keys': ['KEY_ENTER'],
    'disable_policy': 'commit',
    'dictionary_path': None,
    'language': 'auto',
}


# ------------------------------------------------------------------
# Helpers
# ------------------------------------------------------------------

def _sanitize_json_text(s: str) -> str:
    """Remove ``#``/``//`` comments and trailing commas from JSON-like text."""
    # Hash-style line comments
    s = re.sub(r"^[ \t]*#.*$", "", s, flags=re.MULTILINE)
    # C++-style line comments (only at line start, so regexes with "//" survive)
    s = re.sub(r"^[ \t]*//.*$", "", s, flags=re.MULTILINE)
    # Trailing commas before } or ]
    s = re.sub(r",[ \t\r\n]+(\}|\])", r"\1", s)
    return s


def _validate_binding(name: str, value) -> str:
    try:
        KeyBinding.parse(value)
    except ValueError as exc:
        raise ValueError(f"Invalid '{name}': {exc}")
    return value


def _validate_binding_list(name: str, value) -> list:
    if isinstance(value, str):
        value = [value]
    if not isinstance(value, list):
        raise ValueError(f"Invalid '{name}': must be a list of key bindings")
    return [_validate_binding(name, v) for v in value]


# ------------------------------------------------------------------
# Validation
# ------------------------------------------------------------------

def validate_config(conf: dict | None) -> dict:
    """Validate and normalize configuration dictionary.

    Returns a normalized dict with all expected keys.
    Raises ``ValueError`` on invalid values.
    """
    if conf is None:
        conf = {}

    defaults = dict(DEFAULT_CONFIG)
    out = dict(defaults)

    # debug: boolean
    dbg = conf.get('debug', defaults['debug'])
    if not isinstance(dbg, bool):
        raise ValueError("Invalid 'debug' flag: must be boolean")
    out['debug'] = dbg

    # token_pattern: regex that cannot match the empty string
    pat = conf.get('token_pattern', defaults['token_pattern'])
    if not isinstance(pat, str) or not pat:
        raise ValueError("Invalid 'token_pattern': must be a non-empty string")
    compile_pattern(pat)
    if re.fullmatch(pat, ''):
        raise ValueError(f"Invalid 'token_pattern': {pat!r} matches the empty string")
    out['token_pattern'] = pat

    # convert_key / cancel_key: single bindings, must differ
    out['convert_key'] = _validate_binding('convert_key', conf.get('convert_key', defaults['convert_key']))
    out['cancel_key'] = _validate_binding('cancel_key', conf.get('cancel_key', defaults['cancel_key']))
    if KeyBinding.parse(out['convert_key']) == KeyBinding.parse(out['cancel_key']):
        raise ValueError("Invalid key bindings: 'convert_key' and 'cancel_key' are the same key")

    # candidate navigation keys: lists of bindings
    for key in ('next_candidate_keys', 'previous_candidate_keys', 'commit_keys'):
        out[key] = _validate_binding_list(key, conf.get(key, defaults[key]))

    # disable_policy: "commit" | "restore"
    policy = conf.get('disable_policy', defaults['disable_policy'])
    if policy not in ('commit', 'restore'):
        raise ValueError(f"Invalid 'disable_policy': {policy!r} (must be 'commit' or 'restore')")
    out['disable_policy'] = policy

    # dictionary_path: None or non-empty string
    dpath = conf.get('dictionary_path', defaults['dictionary_path'])
    if dpath is not None and (not isinstance(dpath, str) or not dpath):
        raise ValueError("Invalid 'dictionary_path': must be a non-empty string or null")
    out['dictionary_path'] = dpath

    # language: "auto" | "en" | "ja"
    lang = conf.get('language', defaults['language'])
    if lang not in ('auto', 'en', 'ja'):
        raise ValueError(f"Invalid 'language': {lang!r}")
    out['language'] = lang

    return out


def _read_and_merge(path: str, target_config: dict, debug: bool = False) -> bool:
    """Read a JSON file, validate, and merge into *target_config*.

    Returns True on success, False on any error.
    """
    try:
        with open(path, 'r', encoding='utf-8') as f:
            raw = f.read()
    except OSError as exc:
        logger.warning("Cannot read config %s: %s", path, exc)
        return False

    try:
        cfg = json.loads(raw)
    except json.JSONDecodeError:
        try:
            cfg = json.loads(_sanitize_json_text(raw))
        except json.JSONDecodeError as exc:
            logger.warning("JSON parse error in %s: %s", path, exc)
            return False

    if not isinstance(cfg, dict):
        logger.warning("Config %s is not a JSON object", path)
        return False

    try:
        validated = validate_config(cfg)
    except ValueError as verr:
        logger.warning("Invalid config %s: %s", path, verr)
        return False

    # Only override keys explicitly present in source
    for k in cfg:
        if k in validated:
            target_config[k] = validated[k]
    if debug:
        logger.debug("Config merged from %s: %s", path, sorted(cfg))
    return True


# ------------------------------------------------------------------
# Top-level loader
# ------------------------------------------------------------------

def load_config(config_path: str | None = None, debug: bool = False) -> dict:
    """Load and merge configuration.

    If *config_path* is given, uses only that file (returns defaults if
    the file does not exist).  Otherwise falls back to
    ``~/.config/modeless/config.json``.

    Returns the effective configuration dict (always has all default keys).
    """
    config = dict(DEFAULT_CONFIG)
    path = config_path if config_path is not None else os.path.expanduser(USER_CONFIG_PATH)
    if os.path.exists(path):
        _read_and_merge(path, config, debug=debug)
    return config


# ------------------------------------------------------------------
# ConfigManager
# ------------------------------------------------------------------

class ConfigManager:
    """Centralized configuration management with load/save/validate."""

    def __init__(self, config_path: str | None = None, debug: bool = False):
        self._config_path = config_path or os.path.expanduser(USER_CONFIG_PATH)
        self._debug = debug
        self._config: dict = dict(DEFAULT_CONFIG)
        self._load_config()

    # -- internal -------------------------------------------------------

    def _load_config(self) -> None:
        """Reset to defaults, then overlay from file (if exists)."""
        self._config = dict(DEFAULT_CONFIG)
        if os.path.exists(self._config_path):
            _read_and_merge(self._config_path, self._config, debug=self._debug)

    # -- public ---------------------------------------------------------

    def reload(self) -> bool:
        """Reload configuration from file. Returns True on success."""
        try:
            self._load_config()
            return True
        except OSError:
            logger.exception("Config reload failed")
            return False

    def save(self, target_path: str | None = None) -> bool:
        """Atomically save configuration to file. Returns True on success."""
        save_path = target_path or self._config_path
        try:
            save_json(save_path, self.get_all())
            return True
        except OSError as exc:
            logger.error("Cannot save config to %s: %s", save_path, exc)
            return False

    def get(self, key: str, default=None):
        return self._config.get(key, default)

    def set(self, key: str, value) -> None:
        self._config[key] = value

    def update(self, updates: dict) -> None:
        self._config.update(updates)

    def get_all(self) -> dict:
        """Return all configuration (excluding internal keys)."""
        return {k: v for k, v in self._config.items() if not k.startswith('_')}

    def reset_to_defaults(self) -> None:
        self._config = dict(DEFAULT_CONFIG)

    def validate(self) -> bool:
        """Validate current configuration. Returns True if valid."""
        try:
            validate_config(self._config)
            return True
        except ValueError:
            return False

    @property
    def config_path(self) -> str:
        return self._config_path
