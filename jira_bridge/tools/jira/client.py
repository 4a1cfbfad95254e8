"""
Capability contract of the Jira site consumed by the linker and the
command dispatcher. Real clients and test doubles both implement it.
"""
from typing import Any, List, Optional, Protocol, Sequence, runtime_checkable

from .models import Issue, Transition


@runtime_checkable
class TrackerClient(Protocol):
    base_url: str

    def parse_keys_from_text(self, text: str) -> Optional[List[str]]:
        """Issue keys mentioned in text, or None when there are none."""
        ...

    def get_issues_by_keys(self, keys: Sequence[str]) -> List[Issue]:
        """Issues that exist for the given keys; unknown keys are dropped."""
        ...

    def add_comment(self, issue_key: str, body: str) -> Any:
        ...

    def add_worklog(self, issue_key: str, time_spent_seconds: int, comment: str) -> Any:
        ...

    def get_transitions(self, issue_key: str) -> List[Transition]:
        ...

    def apply_transition(self, issue_key: str, transition_id: str) -> Any:
        ...
