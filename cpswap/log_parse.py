"""Parsing of transaction log lines emitted while the swap program runs."""

from __future__ import annotations

import base64
import binascii
import hashlib
import re
from dataclasses import dataclass

PROGRAM_LOG = "Program log: "
PROGRAM_DATA = "Program data: "
DISCRIMINATOR_LEN = 8
EVENT_NAMES = ("SwapEvent", "LpChangeEvent")

_INVOKE_RE = re.compile(r"Program (.*) invoke.*")
_SUCCESS_RE = re.compile(r"Program (.*) success*")


class LogParseError(ValueError):
    """Raised when a log line cannot be interpreted."""


def event_discriminator(event_name: str) -> bytes:
    """The 8-byte tag that prefixes an emitted event of the given type name."""
    return hashlib.sha256(f"event:{event_name}".encode()).digest()[:DISCRIMINATOR_LEN]


_EVENTS = {event_discriminator(name): name for name in EVENT_NAMES}


@dataclass(frozen=True)
class ProgramEvent:
    """An event emitted by the program: its type name (None if unknown) and payload."""

    name: str | None
    discriminator: bytes
    data: bytes

    @property
    def known(self) -> bool:
        """Whether the discriminator matches a known event type."""
        return self.name is not None


class Execution:
    """Stack of programs currently executing, as seen in the logs."""

    def __init__(self, first_log: str) -> None:
        match = _INVOKE_RE.fullmatch(first_log)
        if match is None:
            raise LogParseError(first_log)
        self.stack: list[str] = [match.group(1)]

    def program(self) -> str:
        """The program currently running."""
        if not self.stack:
            raise IndexError("execution stack is empty")
        return self.stack[-1]

    def is_empty(self) -> bool:
        """Whether no program is running."""
        return not self.stack

    def push(self, new_program: str) -> None:
        """Enter a newly invoked program."""
        self.stack.append(new_program)

    def pop(self) -> None:
        """Leave the current program."""
        if not self.stack:
            raise IndexError("execution stack is empty")
        self.stack.pop()


def handle_system_log(this_program: str, log: str) -> tuple[str | None, bool]:
    """Classify a runtime log line: (newly invoked program, whether a program returned)."""
    if log.startswith(f"Program {this_program} invoke"):
        return this_program, False
    if "invoke" in log:
        return "cpi", False
    return None, _SUCCESS_RE.fullmatch(log) is not None


def _strip_prefix(line: str) -> str | None:
    for prefix in (PROGRAM_LOG, PROGRAM_DATA):
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def handle_program_log(
    self_program: str, line: str, with_prefix: bool
) -> tuple[str | None, bool, ProgramEvent | None]:
    """Interpret one line logged while the program runs.

    Returns the newly invoked program, whether a program returned, and the
    event carried by the line, if any. Lines that are not valid base64 carry
    no event.
    """
    log = _strip_prefix(line) if with_prefix else line
    if log is None:
        program, did_pop = handle_system_log(self_program, line)
        return program, did_pop, None
    if line.startswith("Program log:"):
        return None, False, None
    try:
        raw = base64.b64decode(log, validate=True)
    except (binascii.Error, ValueError):
        return None, False, None
    if len(raw) < DISCRIMINATOR_LEN:
        raise LogParseError(f"log data is too short: {log}")
    disc = raw[:DISCRIMINATOR_LEN]
    event = ProgramEvent(_EVENTS.get(disc), disc, raw[DISCRIMINATOR_LEN:])
    return None, False, event


def parse_program_events(self_program: str, logs: list[str]) -> list[ProgramEvent]:
    """Collect the events emitted by ``self_program`` across a transaction's logs."""
    if not logs:
        return []
    try:
        execution = Execution(logs[0])
    except LogParseError:
        return []
    events: list[ProgramEvent] = []
    for line in logs[1:]:
        if not execution.is_empty() and execution.program() == self_program:
            new_program, did_pop, event = handle_program_log(self_program, line, True)
            if event is not None:
                events.append(event)
        else:
            new_program, did_pop = handle_system_log(self_program, line)
        if new_program is not None:
            execution.push(new_program)
        if did_pop:
            execution.pop()
    return events