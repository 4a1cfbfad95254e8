from .commands import JiraCommands, run_jira_commands, select_transition
from .errors import JiraError, TrackerUnavailableError, TransitionNotFoundError
from .ids import get_jira_id
from .keys import extract_keys, find_references, is_issue_key, parse_issue_keys
from .links import JiraLinks, add_jira_issue_links, scan_references
from .models import (
    CommandResult,
    CommentCommand,
    Issue,
    Reference,
    Transition,
    TransitionCommand,
    WorklogCommand,
    parse_commands,
)
from .smart_commits import parse_smart_commands

__all__ = [
    "JiraCommands",
    "run_jira_commands",
    "select_transition",
    "JiraError",
    "TrackerUnavailableError",
    "TransitionNotFoundError",
    "get_jira_id",
    "extract_keys",
    "find_references",
    "is_issue_key",
    "parse_issue_keys",
    "JiraLinks",
    "add_jira_issue_links",
    "scan_references",
    "CommandResult",
    "CommentCommand",
    "Issue",
    "Reference",
    "Transition",
    "TransitionCommand",
    "WorklogCommand",
    "parse_commands",
    "parse_smart_commands",
]
