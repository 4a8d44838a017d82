"""
Controls
=========
Maps blessed keystrokes to simulation commands and buffers them
until the next tick.
"""

from collections import deque

from .components import Command


# Commands buffered between ticks; the oldest are dropped past this
MAX_QUEUED_COMMANDS = 8


KEY_COMMANDS = {
    'KEY_LEFT': Command.MOVE_LEFT,
    'KEY_RIGHT': Command.MOVE_RIGHT,
    'KEY_ESCAPE': Command.QUIT,
}


def translate(key) -> Command:
    """
    Translate one keystroke into a Command.

    Accepts blessed Keystroke objects (matched by name) or plain strings.
    Unknown or empty input becomes Command.NONE; this never raises.
    """
    if not key:
        return Command.NONE

    name = getattr(key, 'name', None)
    if name in KEY_COMMANDS:
        return KEY_COMMANDS[name]

    if getattr(key, 'is_sequence', False):
        return Command.NONE

    if key == ' ':
        return Command.SHOOT
    if key == '\x1b':
        return Command.QUIT
    return Command.NONE


class CommandQueue:
    """
    FIFO of commands waiting for a tick.

    Every action is replayed one per tick. NONE is never queued.
    """

    def __init__(self, maxlen: int = MAX_QUEUED_COMMANDS):
        self._pending = deque(maxlen=maxlen)

    def __len__(self) -> int:
        return len(self._pending)

    def push(self, command: Command) -> None:
        if command != Command.NONE:
            self._pending.append(command)

    def pop(self) -> Command:
        """Next command for the simulation, or NONE when idle."""
        if self._pending:
            return self._pending.popleft()
        return Command.NONE

    def clear(self) -> None:
        self._pending.clear()
