"""TRACE log level for modeless.

What goes where:
    TRACE (5)   every key event routed to a handler, ignored state-machine
                events, engine notifications deferred mid-transition
    DEBUG (10)  detected tokens, candidate lists, IDLE/CONVERTING changes
    INFO (20)   one line per conversion started, committed or cancelled

Importing this module is enough; afterwards every logger has ``trace()``.
"""

import logging

TRACE: int = 5


def _trace(self: logging.Logger, message: object, *args: object, **kwargs: object) -> None:
    if self.isEnabledFor(TRACE):
        self._log(TRACE, message, args, **kwargs)  # type: ignore[attr-defined]


if logging.getLevelName(TRACE) != "TRACE":
    logging.addLevelName(TRACE, "TRACE")
if not hasattr(logging.Logger, "trace"):
    logging.Logger.trace = _trace  # type: ignore[attr-defined]
