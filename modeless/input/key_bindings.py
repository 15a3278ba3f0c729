"""Key binding parsing and matching (evdev key names)."""

from __future__ import annotations

from dataclasses import dataclass, field

from evdev import ecodes

MODIFIER_ALIASES: dict[str, str] = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "shift": "shift",
    "alt": "alt",
    "meta": "meta",
    "super": "meta",
}


@dataclass(frozen=True)
class KeyEvent:
    """A key press as seen by the controller and the engine.

    ``text`` is the character the key would insert (empty for keys that
    insert nothing); engines may pass it through when a key commits.
    """

    code: int
    modifiers: frozenset = field(default_factory=frozenset)
    text: str = ""


def _resolve_key_name(name: str) -> int:
    """Return evdev keycode for *name* (``KEY_J``, ``j``, ``space``...)."""
    candidates = [name, name.upper()]
    if not name.upper().startswith(("KEY_", "BTN_")):
        candidates.append("KEY_" + name.upper())
    for cand in candidates:
        code = ecodes.ecodes.get(cand)
        if code is not None and (cand.startswith("KEY_") or cand.startswith("BTN_")):
            return code
    raise ValueError(f"Unknown key name: {name!r}")


def key_name(code: int) -> str:
    """Return the canonical evdev name for *code* (``KEY_J``) or the number."""
    name = ecodes.KEY.get(code)
    if isinstance(name, list):
        name = name[0]
    return name or str(code)


@dataclass(frozen=True)
class KeyBinding:
    code: int
    modifiers: frozenset = field(default_factory=frozenset)

    @classmethod
    def parse(cls, spec: str) -> "KeyBinding":
        """Parse ``"Ctrl+KEY_J"`` / ``"shift+space"`` into a binding.

        Raises ``ValueError`` for empty specs, unknown modifiers or keys.
        """
        if not isinstance(spec, str) or not spec.strip():
            raise ValueError(f"Invalid key binding: {spec!r}")
        parts = [p.strip() for p in spec.split("+")]
        if any(not p for p in parts):
            raise ValueError(f"Invalid key binding: {spec!r}")

        *mods, key = parts
        modifiers = set()
        for mod in mods:
            canon = MODIFIER_ALIASES.get(mod.lower())
            if canon is None:
                raise ValueError(f"Unknown modifier {mod!r} in key binding {spec!r}")
            modifiers.add(canon)
        return cls(code=_resolve_key_name(key), modifiers=frozenset(modifiers))

    def matches(self, event: KeyEvent) -> bool:
        return event.code == self.code and frozenset(event.modifiers) == self.modifiers

    def __str__(self) -> str:
        mods = [m.capitalize() for m in sorted(self.modifiers)]
        return "+".join(mods + [key_name(self.code)])


def parse_bindings(specs) -> list[KeyBinding]:
    """Parse a single spec string or a list of them."""
    if isinstance(specs, str):
        specs = [specs]
    return [KeyBinding.parse(s) for s in specs]


def matches_any(bindings, event: KeyEvent) -> bool:
    return any(b.matches(event) for b in bindings)
