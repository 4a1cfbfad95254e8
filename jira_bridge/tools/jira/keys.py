"""
Issue-key matching for free-form text (commit messages, PR titles and
bodies, comments).

Matching is context free: a key inside a URL or an existing link is still
returned here. Callers that need document context (see links.py) filter
the references themselves.
"""
import re
from typing import List, Optional

from .models import Reference

ISSUE_KEY_PATTERN = re.compile(r"\b[A-Z][A-Z0-9]+-[0-9]+\b")
_FULL_KEY_PATTERN = re.compile(r"[A-Z][A-Z0-9]+-[0-9]+")


def find_references(text: Optional[str]) -> List[Reference]:
    """Every issue-key token in text with its span, in occurrence order."""
    if not text:
        return []
    return [Reference(key=m.group(0), start=m.start(), end=m.end()) for m in ISSUE_KEY_PATTERN.finditer(text)]


def extract_keys(text: Optional[str]) -> List[str]:
    """Issue keys in occurrence order. Duplicates are kept."""
    return [ref.key for ref in find_references(text)]


def parse_issue_keys(text: Optional[str]) -> List[str]:
    """Unique issue keys in first-seen order."""
    # dict keeps insertion order
    return list(dict.fromkeys(extract_keys(text)))


def is_issue_key(value: str) -> bool:
    return bool(value) and _FULL_KEY_PATTERN.fullmatch(value) is not None
