import re

_SIMPLE_NAME = re.compile(r"[A-Za-z0-9_-]*")


def get_jira_id(name: str) -> str:
    """
    Identifier for a branch that is safe to embed in Jira URLs and keys.

    Names made only of ASCII letters, digits, '-' and '_' are used as is.
    Anything else (e.g. "feature/login") becomes '~' followed by the
    lowercase hex of its UTF-8 bytes, so the mapping stays reversible.
    """
    if _SIMPLE_NAME.fullmatch(name):
        return name
    return "~" + name.encode("utf-8").hex()
