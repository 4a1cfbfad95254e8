"""
Markdown reference links for Jira issues.

Given text and the issues that are known to exist, append one
reference-definition line per referenced issue:

    Fixes [TEST-1] and TEST-2

    [TEST-1]: https://example.atlassian.net/browse/TEST-1
    [TEST-2]: https://example.atlassian.net/browse/TEST-2

Scanning is done in two passes. The first pass collects spans that already
carry a link (reference-definition lines, inline links, bare URLs); the
second pass matches issue keys and drops any that fall inside those spans.
Re-running on the output therefore changes nothing.
"""
import logging
import re
from typing import Iterable, List, Optional, Set, Tuple

from ... import config
from .client import TrackerClient
from .keys import find_references, is_issue_key
from .models import Issue, Reference

logger = logging.getLogger(__name__)

DEFINITION_LINE = re.compile(r"^[ ]{0,3}\[([^\]\n]+)\]:[ \t]*\S.*$", re.MULTILINE)
INLINE_LINK = re.compile(r"\[[^\]\n]*\]\([^)\n]*\)")
BARE_URL = re.compile(r"https?://[^\s<>()\]]+")


def _linked_spans(text: str) -> Tuple[List[Tuple[int, int]], Set[str]]:
    """Spans of text that already link somewhere, plus the labels defined by reference lines."""
    spans: List[Tuple[int, int]] = []
    defined: Set[str] = set()
    for m in DEFINITION_LINE.finditer(text):
        spans.append((m.start(), m.end()))
        label = m.group(1).strip()
        if is_issue_key(label):
            defined.add(label)
    for pattern in (INLINE_LINK, BARE_URL):
        spans.extend((m.start(), m.end()) for m in pattern.finditer(text))
    return spans, defined


def scan_references(text: Optional[str]) -> List[Reference]:
    """Issue-key references in text, flagged when they already sit inside a link."""
    if not text:
        return []
    spans, _ = _linked_spans(text)
    refs = find_references(text)
    for ref in refs:
        ref.linked = any(ref.overlaps(start, end) for start, end in spans)
    return refs


def defined_keys(text: Optional[str]) -> Set[str]:
    """Issue keys that already have a reference-definition line."""
    if not text:
        return set()
    return _linked_spans(text)[1]


def _issue_key(issue) -> str:
    if isinstance(issue, Issue):
        return issue.key
    if isinstance(issue, dict):
        return issue["key"]
    return issue.key


class JiraLinks:
    """Renders Jira reference links into markdown.

    base_url falls back to ``client.base_url`` and then to JIRA_BASE_URL.
    """

    def __init__(self, client: Optional[TrackerClient] = None, base_url: Optional[str] = None):
        self.client = client
        url = base_url or getattr(client, "base_url", None) or config.JIRA_BASE_URL
        self.base_url = (url or "").rstrip("/")

    def browse_url(self, key: str) -> str:
        return f"{self.base_url}/browse/{key}"

    def reference_line(self, key: str) -> str:
        return f"[{key}]: {self.browse_url(key)}"

    def add_jira_issue_links(self, text: str, issues: Iterable) -> str:
        """
        Append reference-definition lines for the issues referenced in text.

        Args:
            text: Markdown source.
            issues: Issues confirmed to exist (Issue models, or mappings with a "key").

        Returns:
            The text with a link block appended, or the text unchanged when no
            valid, not-yet-linked key is referenced.
        """
        if not text:
            return text
        valid = {_issue_key(issue) for issue in issues}
        if not valid:
            return text

        already_linked = defined_keys(text)
        keys: List[str] = []
        for ref in scan_references(text):
            if ref.linked or ref.key not in valid or ref.key in already_linked or ref.key in keys:
                continue
            keys.append(ref.key)

        if not keys:
            return text

        logger.debug("Adding Jira reference links for %s", ", ".join(keys))
        block = "\n".join(self.reference_line(key) for key in keys)
        return f"{text.rstrip()}\n\n{block}"

    def unfurl(self, text: str) -> Optional[str]:
        """
        Resolve the issue keys in text through the tracker and link them.

        Returns None when the text should be left alone: no keys, no
        existing issues, or nothing new to link.
        """
        if self.client is None:
            raise ValueError("unfurl requires a Jira client")

        keys = self.client.parse_keys_from_text(text)
        if not keys:
            return None

        issues = self.client.get_issues_by_keys(keys)
        if not issues:
            logger.info("No Jira issues found for keys: %s", ", ".join(keys))
            return None

        linked = self.add_jira_issue_links(text, issues)
        if linked == text:
            return None
        return linked


def add_jira_issue_links(text: str, issues: Iterable, base_url: Optional[str] = None) -> str:
    """Module-level shortcut for ``JiraLinks(base_url=...).add_jira_issue_links``."""
    return JiraLinks(base_url=base_url).add_jira_issue_links(text, issues)
