"""Error taxonomy for modeless conversion.

Only :class:`EngineRejectedSeed` crosses a component boundary: engines raise
it from ``begin()`` and the controller turns it into an implicit cancel.
:class:`NoCandidateFound` is never raised; the controller publishes it as
the payload of ``NO_CANDIDATE``.

Two conditions have no class on purpose: cancel with no session is a
silent no-op, and a document edited under an active session (stale anchor)
is a precondition of the host that the controller cannot detect.
"""

from __future__ import annotations


class ModelessError(RuntimeError):
    """Base class for modeless conversion errors."""


class NoCandidateFound(ModelessError):
    """Trigger pressed with no convertible token before the cursor."""

    def __init__(self, cursor: int):
        self.cursor = cursor
        super().__init__(f"no candidate text before cursor at {cursor}")


class EngineRejectedSeed(ModelessError):
    """The conversion engine cannot start a session with the given text."""

    def __init__(self, seed: str, reason: str = ""):
        self.seed = seed
        self.reason = reason
        msg = f"engine rejected {seed!r}"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)
