"""
Smart-commit parsing: turns commit-message lines such as

    TEST-1 TEST-2 #time 1h 30m Fixed the login form #comment Ready for review #resolve

into typed commands for JiraCommands. Issue keys are read from the part of
the line before the first #command; a line without keys is ignored.
"""
import re
from typing import List, Optional

from .keys import parse_issue_keys
from .models import Command, CommentCommand, TransitionCommand, WorklogCommand

COMMAND_PATTERN = re.compile(r"(?:^|(?<=\s))#([A-Za-z][A-Za-z0-9_-]*)")
DURATION_PATTERN = re.compile(r"(\d+(?:\.\d+)?)([wdhm])(?=\d|\s|$)")

# Jira defaults: 5 working days per week, 8 hours per day
SECONDS_PER_UNIT = {
    "w": 5 * 8 * 3600,
    "d": 8 * 3600,
    "h": 3600,
    "m": 60,
}


def parse_duration(text: str) -> tuple[Optional[int], str]:
    """Split a leading "1w 2d 3h 4m" duration off text.

    Returns (seconds, remaining text); seconds is None when text does not
    start with a duration.
    """
    rest = text.strip()
    seconds = 0.0
    matched = False
    while True:
        m = DURATION_PATTERN.match(rest)
        if not m:
            break
        matched = True
        seconds += float(m.group(1)) * SECONDS_PER_UNIT[m.group(2)]
        rest = rest[m.end():].lstrip()
    if not matched:
        return None, text.strip()
    return int(seconds), rest


def _build(name: str, text: str, issue_keys: List[str]) -> Optional[Command]:
    lowered = name.lower()
    if lowered == "comment":
        return CommentCommand(issue_keys=issue_keys, text=text) if text else None
    if lowered == "time":
        seconds, comment = parse_duration(text)
        if not seconds:
            return None
        return WorklogCommand(issue_keys=issue_keys, time=seconds, text=comment)
    return TransitionCommand(issue_keys=issue_keys, name=name.replace("-", " "), text=text)


def parse_smart_commands(message: Optional[str]) -> List[Command]:
    commands: List[Command] = []
    if not message:
        return commands
    for line in message.splitlines():
        matches = list(COMMAND_PATTERN.finditer(line))
        if not matches:
            continue
        issue_keys = parse_issue_keys(line[:matches[0].start()])
        if not issue_keys:
            continue
        for i, m in enumerate(matches):
            end = matches[i + 1].start() if i + 1 < len(matches) else len(line)
            command = _build(m.group(1), line[m.end():end].strip(), issue_keys)
            if command is not None:
                commands.append(command)
    return commands
