"""Single-keypress reader for the terminal frontend.

Arrow keys and WASD slide tiles; letters drive the menus. The terminal is
put in raw mode for the duration of one read (tty/termios on macOS and
Linux, msvcrt on Windows), so no Enter is needed.
"""

from __future__ import annotations

import os
import sys
import time
from contextlib import contextmanager
from typing import Callable, Iterator

# action -> keys that trigger it; letters match either case
_BINDINGS: dict[str, tuple[str, ...]] = {
    "up": ("w",),
    "down": ("s",),
    "left": ("a",),
    "right": ("d",),
    "quit": ("q", "\x03"),  # \x03 is Ctrl-C
    "new": ("n",),
    "theme": ("t",),
    "enter": ("\r", "\n"),
}
_ACTIONS = {key: action for action, keys in _BINDINGS.items() for key in keys}

# final byte of ESC [ x
_ARROWS = {"A": "up", "B": "down", "C": "right", "D": "left"}

_ESC = "\x1b"
# How long to wait for the rest of an escape sequence.
_SEQUENCE_WAIT = 0.1


def resolve_key(ch: str) -> str:
    """Action for a single character, the character itself if it is
    printable and unbound (menu digits), or "" otherwise."""
    action = _ACTIONS.get(ch.lower())
    if action is not None:
        return action
    return ch if ch.isprintable() else ""


def finish_escape(read_next: Callable[[], str]) -> str:
    """Decode what follows an ESC byte.

    *read_next* yields the next character, or "" if none arrives in time,
    which makes a lone ESC mean "quit".
    """
    if read_next() != "[":
        return "quit"
    return _ARROWS.get(read_next(), "")


def _decode(ch: str, read_next: Callable[[], str]) -> str:
    if ch == _ESC:
        return finish_escape(read_next)
    return resolve_key(ch)


# -- POSIX --------------------------------------------------------------------


@contextmanager
def _raw_mode(fd: int) -> Iterator[None]:
    import termios
    import tty

    saved = termios.tcgetattr(fd)
    tty.setraw(fd)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, saved)


def _read_char(fd: int, timeout: float | None) -> str:
    """One character from *fd*, or "" once *timeout* seconds pass.

    ``os.read`` skips Python's buffering so a later ``select`` still sees
    the remaining bytes of an arrow-key sequence.
    """
    import select

    ready, _, _ = select.select([fd], [], [], timeout)
    if not ready:
        return ""
    return os.read(fd, 1).decode("utf-8", errors="ignore")


def _poll_posix(timeout: float | None) -> str | None:
    fd = sys.stdin.fileno()
    with _raw_mode(fd):
        ch = _read_char(fd, timeout)
        if not ch:
            return None
        return _decode(ch, lambda: _read_char(fd, _SEQUENCE_WAIT))


# -- Windows ------------------------------------------------------------------


def _poll_windows(timeout: float | None) -> str | None:
    import msvcrt  # type: ignore[import-not-found]

    def read_next() -> str:
        return msvcrt.getwch() if msvcrt.kbhit() else ""

    if timeout is not None:
        deadline = time.monotonic() + timeout
        while not msvcrt.kbhit():
            if time.monotonic() >= deadline:
                return None
            time.sleep(0.02)
    return _decode(msvcrt.getwch(), read_next)


_poll = _poll_windows if os.name == "nt" else _poll_posix


# -- public API ---------------------------------------------------------------


def get_key() -> str:
    """Block for one keypress and return its action.

    Actions are "up", "down", "left", "right", "quit" (q, Ctrl-C, Escape),
    "new" (n), "theme" (t) and "enter". Unbound printable keys such as
    menu digits come back as themselves; anything else as "".
    """
    key = _poll(None)
    return key if key is not None else ""


def get_key_timeout(timeout: float) -> str | None:
    """Like :func:`get_key`, but ``None`` when nothing is pressed within
    *timeout* seconds, so the caller can repaint the clock."""
    return _poll(timeout)
