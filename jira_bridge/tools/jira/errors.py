class JiraError(Exception):
    """Base error for Jira operations."""


class TrackerUnavailableError(JiraError):
    """The Jira site could not be reached."""


class TransitionNotFoundError(JiraError):
    """No transition of the issue matches the requested name."""

    def __init__(self, issue_key: str, name: str, available: list[str] | None = None):
        self.issue_key = issue_key
        self.name = name
        self.available = available or []
        super().__init__(
            f"Status '{name}' is not a valid transition for {issue_key}. "
            f"Available transitions: {', '.join(self.available) or 'None'}."
        )
