"""
Runs parsed Jira commands (comment, worklog, transition) against a tracker.

Each (command, issue key) pair is an independent call: a failure is logged
and reported in that pair's CommandResult without stopping the others.
"""
import logging
from typing import Any, Callable, Iterable, List

from .client import TrackerClient
from .errors import TrackerUnavailableError, TransitionNotFoundError
from .models import (
    CommandResult,
    CommentCommand,
    Transition,
    TransitionCommand,
    WorklogCommand,
    parse_commands,
)

logger = logging.getLogger(__name__)


def _as_transition(raw) -> Transition:
    if isinstance(raw, Transition):
        return raw
    return Transition(id=str(raw["id"]), name=raw["name"])


def select_transition(transitions: Iterable, name: str) -> Transition | None:
    """
    Pick the transition matching name, ignoring case.

    An exact name wins; otherwise the shortest transition whose name starts
    with the requested one (so "done" finds "Done" before "Done and closed").
    """
    wanted = name.strip().lower()
    if not wanted:
        return None
    candidates = [_as_transition(t) for t in transitions]
    for t in candidates:
        if t.name.lower() == wanted:
            return t
    prefixed = sorted((t for t in candidates if t.name.lower().startswith(wanted)), key=lambda t: len(t.name))
    return prefixed[0] if prefixed else None


class JiraCommands:
    def __init__(self, client: TrackerClient):
        self.client = client

    def _transition(self, issue_key: str, command: TransitionCommand) -> Any:
        transitions = self.client.get_transitions(issue_key) or []
        transition = select_transition(transitions, command.name)
        if transition is None:
            raise TransitionNotFoundError(issue_key, command.name, [_as_transition(t).name for t in transitions])
        return self.client.apply_transition(issue_key, transition.id)

    def _comment_after_transition(self, issue_key: str, text: str) -> str | None:
        """Add the transition's comment. The transition already happened, so a failure is only reported."""
        try:
            self.client.add_comment(issue_key, body=text)
        except Exception as e:
            logger.warning("Transitioned %s but adding its comment failed: %s", issue_key, e)
            return str(e)
        return None

    def _action_for(self, command) -> Callable[[str], Any]:
        if isinstance(command, CommentCommand):
            return lambda key: self.client.add_comment(key, body=command.text)
        if isinstance(command, WorklogCommand):
            return lambda key: self.client.add_worklog(key, time_spent_seconds=command.time, comment=command.text)
        if isinstance(command, TransitionCommand):
            return lambda key: self._transition(key, command)
        raise TypeError(f"Unsupported Jira command: {command!r}")

    def _run_one(self, command, issue_key: str) -> tuple[CommandResult, bool]:
        action = self._action_for(command)
        try:
            value = action(issue_key)
        except TrackerUnavailableError as e:
            logger.error("Jira unavailable running %s on %s: %s", command.kind, issue_key, e)
            return CommandResult(kind=command.kind, issue_key=issue_key, ok=False, error=str(e)), True
        except TransitionNotFoundError as e:
            logger.warning("%s", e)
            return CommandResult(kind=command.kind, issue_key=issue_key, ok=False, error=str(e)), False
        except Exception as e:
            logger.exception("Jira %s failed for %s", command.kind, issue_key)
            return CommandResult(kind=command.kind, issue_key=issue_key, ok=False, error=str(e)), False
        result = CommandResult(kind=command.kind, issue_key=issue_key, ok=True, value=value)
        if isinstance(command, TransitionCommand) and command.text:
            result.comment_error = self._comment_after_transition(issue_key, command.text)
        return result, False

    def run_jira_commands(self, commands: Iterable) -> List[List[CommandResult]]:
        """
        Execute commands in order, one tracker call per (command, issue key).

        Args:
            commands: Command models or mappings with a "kind" of
                comment, worklog or transition.

        Returns:
            One list of CommandResult per command, in issue-key order.

        Raises:
            TrackerUnavailableError: every call failed because Jira could not be reached.
            pydantic.ValidationError: a mapping is not a valid command.
        """
        parsed = parse_commands(list(commands))
        results: List[List[CommandResult]] = []
        attempted = 0
        unavailable = 0
        for command in parsed:
            per_command = []
            for issue_key in command.issue_keys:
                result, was_unavailable = self._run_one(command, issue_key)
                per_command.append(result)
                attempted += 1
                unavailable += was_unavailable
            results.append(per_command)

        if attempted and unavailable == attempted:
            raise TrackerUnavailableError(f"Jira was unavailable for all {attempted} command(s)")
        return results


def run_jira_commands(client: TrackerClient, commands: Iterable) -> List[List[CommandResult]]:
    return JiraCommands(client).run_jira_commands(commands)
