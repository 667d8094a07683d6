"""Host functions made available to scripts before they run."""

import time
import typing as tp

from .runtime import NativeFunction

NATIVES = {
    'clock': NativeFunction('clock', 0, time.time),
}

def install(interpreter, natives: tp.Optional[dict[str, NativeFunction]] = None):
    """Define every native of `natives` (default: NATIVES) as a global."""
    if natives is None:
        natives = NATIVES

    for name, native in natives.items():
        interpreter.globals.define(name, native)
