"""Operator prompts.

All functions block on input and loop until they get an acceptable answer.
Reader/writer callables are injectable so the flows can be driven headless.
"""

from __future__ import annotations

import getpass
import logging
import sys
from typing import Callable, Optional, Sequence, TextIO

from .context import Secret
from .errors import InputMismatch

logger = logging.getLogger(__name__)

Reader = Callable[[str], str]

_YES = {"yes", "y"}
_NO = {"no", "n"}


def _say(out: Optional[TextIO], message: str) -> None:
    stream = out or sys.stderr
    stream.write(message + "\n")
    stream.flush()


def _read_twice(label: str, reader: Reader) -> str:
    first = reader(f"{label}: ")
    second = reader("Confirm: ")
    if first != second:
        raise InputMismatch(f"{label}: inputs do not match")
    return first


def collect_secret(
    label: str,
    *,
    secret: bool = True,
    input_fn: Reader = input,
    getpass_fn: Reader = getpass.getpass,
    out: Optional[TextIO] = None,
) -> Secret:
    """Ask for a value twice until both entries match.

    With secret=True characters are read without echo.
    """

    reader = getpass_fn if secret else input_fn
    while True:
        try:
            value = _read_twice(label, reader)
        except InputMismatch:
            _say(out, "Inputs do not match. Please try again.")
            continue
        if not value:
            _say(out, "A value is required. Please try again.")
            continue
        _say(out, "Confirmed.")
        logger.info("Collected %s", label)
        return Secret(label, value)


def confirm_stage(
    question: str,
    *,
    input_fn: Reader = input,
    out: Optional[TextIO] = None,
) -> bool:
    """yes/y -> True, no/n -> False (any case). Anything else asks again."""

    while True:
        answer = input_fn(f"{question} (yes/no): ").strip().lower()
        if answer in _YES:
            return True
        if answer in _NO:
            return False
        _say(out, "Please answer yes or no.")


def ask_text(
    label: str,
    *,
    input_fn: Reader = input,
    out: Optional[TextIO] = None,
) -> str:
    while True:
        value = input_fn(f"{label}: ").strip()
        if value:
            return value
        _say(out, "A value is required.")


def choose(
    title: str,
    options: Sequence[str],
    *,
    input_fn: Reader = input,
    out: Optional[TextIO] = None,
) -> int:
    """Numbered menu. Returns the 0-based index of the chosen option."""

    if not options:
        raise ValueError("choose() needs at least one option")

    _say(out, title)
    for i, option in enumerate(options, start=1):
        _say(out, f"{i}) {option}")

    while True:
        reply = input_fn("#? ").strip()
        if reply.isdigit() and 1 <= int(reply) <= len(options):
            return int(reply) - 1
        _say(out, "Invalid option.")
