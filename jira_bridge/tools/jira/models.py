from typing import Annotated, Any, List, Literal, Optional, Union

from pydantic import BaseModel, Field, TypeAdapter


class Issue(BaseModel):
    key: str
    summary: str = ""

    @classmethod
    def from_jira(cls, payload: dict) -> "Issue":
        """Build an Issue from the Jira REST shape ``{"key", "fields": {"summary"}}``."""
        fields = payload.get("fields") or {}
        return cls(key=payload["key"], summary=fields.get("summary") or payload.get("summary") or "")


class Reference(BaseModel):
    """An issue key located in a piece of text."""
    key: str
    start: int
    end: int
    linked: bool = False

    def overlaps(self, start: int, end: int) -> bool:
        return self.start < end and start < self.end


class Transition(BaseModel):
    id: str
    name: str


class CommentCommand(BaseModel):
    kind: Literal["comment"] = "comment"
    issue_keys: List[str]
    text: str


class WorklogCommand(BaseModel):
    kind: Literal["worklog"] = "worklog"
    issue_keys: List[str]
    time: int
    text: str = ""


class TransitionCommand(BaseModel):
    kind: Literal["transition"] = "transition"
    issue_keys: List[str]
    name: str
    text: str = ""


Command = Annotated[
    Union[CommentCommand, WorklogCommand, TransitionCommand],
    Field(discriminator="kind"),
]

_COMMAND = TypeAdapter(Command)


def parse_commands(raw: list) -> List[Command]:
    """Validate mappings into the tagged command variants; command models pass through.

    Accepts the camelCase ``issueKeys`` spelling used by webhook payloads.
    """
    commands = []
    for item in raw:
        if isinstance(item, (CommentCommand, WorklogCommand, TransitionCommand)):
            commands.append(item)
            continue
        item = dict(item)
        if "issueKeys" in item and "issue_keys" not in item:
            item["issue_keys"] = item.pop("issueKeys")
        commands.append(_COMMAND.validate_python(item))
    return commands


class CommandResult(BaseModel):
    kind: str
    issue_key: str
    ok: bool
    value: Any = None
    error: Optional[str] = None
    # set when a transition applied but its trailing comment could not be added
    comment_error: Optional[str] = None
