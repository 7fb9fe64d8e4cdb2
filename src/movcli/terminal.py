"""
Raw keyboard input.

``raw_mode`` puts the tty in non-canonical, no-echo mode with signals off
(ctrl+c arrives as a key), and ``decode_keys`` turns the bytes read from
stdin into Key messages.
"""

import codecs
import contextlib
import os
import sys
from typing import Iterator

from movcli.errors import TerminalError
from movcli.models.messages import Key

try:
    import termios
except ImportError:  # Windows
    termios = None  # type: ignore[assignment]

ESCAPE_SEQUENCES = {
    "\x1b[A": "up",
    "\x1b[B": "down",
    "\x1b[C": "right",
    "\x1b[D": "left",
    "\x1bOA": "up",
    "\x1bOB": "down",
    "\x1bOC": "right",
    "\x1bOD": "left",
    "\x1b[H": "home",
    "\x1b[F": "end",
    "\x1bOH": "home",
    "\x1bOF": "end",
    "\x1b[1~": "home",
    "\x1b[4~": "end",
    "\x1b[3~": "delete",
    "\x1b[5~": "pgup",
    "\x1b[6~": "pgdown",
}

CONTROL_KEYS = {
    "\x03": "ctrl+c",
    "\x01": "ctrl+a",
    "\x05": "ctrl+e",
    "\x15": "ctrl+u",
    "\r": "enter",
    "\n": "enter",
    "\t": "tab",
    "\x7f": "backspace",
    "\x08": "backspace",
}


def decode_keys(data: str) -> list[Key]:
    """Split a chunk of terminal input into keys.

    A lone ESC (or ESC followed by an unknown sequence) is the esc key.
    """
    keys: list[Key] = []
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == "\x1b":
            for seq, name in ESCAPE_SEQUENCES.items():
                if data.startswith(seq, i):
                    keys.append(Key(name=name))
                    i += len(seq)
                    break
            else:
                keys.append(Key(name="esc"))
                i += 1
            continue
        if ch in CONTROL_KEYS:
            keys.append(Key(name=CONTROL_KEYS[ch]))
        elif ch.isprintable():
            keys.append(Key(name="rune", char=ch))
        i += 1
    return keys


def stdin_fd() -> int:
    if termios is None:
        raise TerminalError("interactive mode needs a POSIX terminal")
    if not sys.stdin.isatty():
        raise TerminalError("stdin is not a terminal")
    return sys.stdin.fileno()


@contextlib.contextmanager
def raw_mode(fd: int) -> Iterator[None]:
    try:
        old = termios.tcgetattr(fd)
    except termios.error as e:
        raise TerminalError(f"cannot configure terminal: {e}")
    new = termios.tcgetattr(fd)
    new[0] &= ~(termios.ICRNL | termios.IXON)
    new[3] &= ~(termios.ICANON | termios.ECHO | termios.ISIG | termios.IEXTEN)
    new[6][termios.VMIN] = 1
    new[6][termios.VTIME] = 0
    termios.tcsetattr(fd, termios.TCSAFLUSH, new)
    try:
        yield
    finally:
        termios.tcsetattr(fd, termios.TCSADRAIN, old)


def input_decoder() -> codecs.IncrementalDecoder:
    return codecs.getincrementaldecoder("utf-8")(errors="ignore")


def read_input(fd: int, decoder: codecs.IncrementalDecoder) -> str:
    """Read what is available; a character split across reads is held back until complete."""
    return decoder.decode(os.read(fd, 1024))
