"""
Prompt Layer - Interactive method signature input.

Provides a curses-based single-line input box, with a plain stdin
fallback when no terminal is attached.
"""

from __future__ import annotations

import curses
import sys
from typing import Optional, TextIO

from .core.errors import InputCancelled


QUESTION = "What is the new method signature?"
HELP = "Enter: accept  Esc: cancel"

ESCAPE = 27
BACKSPACE_KEYS = (curses.KEY_BACKSPACE, 8, 127)
ENTER_KEYS = (curses.KEY_ENTER, 10, 13)


def _visible_tail(value: str, width: int) -> str:
    """Keep the end of the input (where the caret is) on screen."""
    if width <= 0:
        return ""
    return value[-width:]


def _draw_prompt(stdscr, value: str) -> None:
    height, width = stdscr.getmaxyx()
    stdscr.erase()
    stdscr.addnstr(0, 0, QUESTION, width - 1)
    stdscr.addnstr(1, 0, "> " + _visible_tail(value, width - 3), width - 1)
    if height > 3:
        stdscr.addnstr(3, 0, HELP, width - 1)
    stdscr.move(1, min(2 + len(value), width - 1))
    stdscr.refresh()


def run_prompt(initial: str = "") -> Optional[str]:
    """Run the input box. Returns the typed signature, or None when cancelled."""

    def _main(stdscr) -> Optional[str]:
        curses.curs_set(1)
        stdscr.keypad(True)
        value = initial

        while True:
            _draw_prompt(stdscr, value)
            ch = stdscr.get_wch()
            if ch == ESCAPE or ch == "\x1b":
                return None
            if ch in ENTER_KEYS or ch in ("\n", "\r"):
                return value
            if ch in BACKSPACE_KEYS or ch in ("\b", "\x7f"):
                value = value[:-1]
            elif isinstance(ch, str) and ch.isprintable():
                value += ch

    return curses.wrapper(_main)


def read_line(stream: TextIO) -> Optional[str]:
    line = stream.readline()
    if not line:
        return None
    return line.rstrip("\r\n")


def prompt_signature(stream: Optional[TextIO] = None) -> str:
    """Ask the user for a method signature.

    Args:
        stream: Input to read from instead of the terminal.

    Returns:
        str: The signature as typed

    Raises:
        InputCancelled: If the prompt is dismissed or left empty
    """
    if stream is None and sys.stdin.isatty():
        value = run_prompt()
    else:
        value = read_line(stream or sys.stdin)
    if value is None or not value.strip():
        raise InputCancelled()
    return value
