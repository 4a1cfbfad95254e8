"""
Test configuration and fixtures for the jira_bridge test suite.
"""
from pathlib import Path
from unittest.mock import Mock

import pytest

from jira_bridge.tools.jira.client import TrackerClient
from jira_bridge.tools.jira.models import Issue, Transition

FIXTURES = Path(__file__).parent / "fixtures"


@pytest.fixture
def load_text_fixture():
    """Return (source, rendered) for fixtures/text/<name>.{source,rendered}.md."""
    def _load(name: str):
        base = FIXTURES / "text"
        source = (base / f"{name}.source.md").read_text(encoding="utf-8").strip()
        rendered = (base / f"{name}.rendered.md").read_text(encoding="utf-8").strip()
        return source, rendered
    return _load


@pytest.fixture
def jira_client():
    """Mock tracker client following the TrackerClient contract."""
    client = Mock(spec=TrackerClient)
    client.base_url = "http://example.com"
    client.add_comment.return_value = {"id": "1"}
    client.add_worklog.return_value = {"id": "1"}
    client.get_transitions.return_value = [
        Transition(id="11", name="To Do"),
        Transition(id="21", name="In Progress"),
        Transition(id="31", name="Done"),
    ]
    client.apply_transition.return_value = None
    return client


@pytest.fixture
def make_issues():
    def _make(*keys: str):
        return [Issue(key=key, summary=f"Issue {key}") for key in keys]
    return _make


@pytest.fixture
def repository():
    return {
        "id": 1234568,
        "name": "test-repo",
        "full_name": "test-owner/test-repo",
        "owner": {"login": "test-owner"},
        "html_url": "https://github.com/test-owner/test-repo",
    }


@pytest.fixture
def pull_request():
    """A merged pull request webhook object, trimmed to the fields the transform reads."""
    return {
        "number": 51,
        "title": "[TES-123] Test PR",
        "state": "closed",
        "merged": True,
        "comments": 0,
        "html_url": "https://github.com/integrations/test/pull/51",
        "updated_at": "2018-05-04T14:06:56Z",
        "user": {
            "login": "bkeepers",
            "avatar_url": "https://avatars0.githubusercontent.com/u/173?v=4",
            "url": "https://api.github.com/users/bkeepers",
            "html_url": "https://github.com/bkeepers",
        },
        "head": {
            "ref": "use-the-force",
            "sha": "09ca669e4b5ff78bfa6a9fee74c384812e1f96dd",
            "user": {"login": "bkeepers"},
            "repo": {"html_url": "https://github.com/integrations/test"},
        },
        "base": {
            "ref": "devel",
            "repo": {"html_url": "https://github.com/integrations/test"},
        },
    }
