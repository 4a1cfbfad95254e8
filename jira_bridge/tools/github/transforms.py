"""
Shape GitHub webhook payloads into Jira development-information documents.

Every transform returns ``{"data": {...}}`` for payloads that reference
issue keys. pull_request returns ``{"data": None}`` and the branch/push
transforms return ``{}`` when there is nothing to send.
"""
import logging
import time
from typing import Any, Dict, List, Optional

from ..jira.ids import get_jira_id
from ..jira.keys import parse_issue_keys
from .author import get_jira_author
from .client import GitHubClient

logger = logging.getLogger(__name__)

# Jira caps the files listed per commit
MAX_COMMIT_FILES = 10


def _now_ms() -> int:
    """Jira keeps the document with the highest updateSequenceId."""
    return int(time.time() * 1000)


def map_pull_request_status(pull_request: Dict[str, Any]) -> str:
    state = pull_request.get("state")
    merged = bool(pull_request.get("merged"))
    if state == "merged":
        return "MERGED"
    if state == "open":
        return "OPEN"
    if state == "closed":
        return "MERGED" if merged else "DECLINED"
    return "UNKNOWN"


def _pull_request_branches(pull_request: Dict[str, Any], issue_keys: List[str]) -> List[Dict[str, Any]]:
    head = pull_request["head"]
    repo_url = head["repo"]["html_url"]
    ref = head["ref"]
    sha = head["sha"]
    return [
        {
            "createPullRequestUrl": f"{repo_url}/pull/new/{ref}",
            "lastCommit": {
                "author": {"name": (head.get("user") or {}).get("login")},
                "authorTimestamp": pull_request.get("updated_at"),
                "displayId": sha[:6],
                "fileCount": 0,
                "hash": sha,
                "id": sha,
                "issueKeys": issue_keys,
                "message": "n/a",
                "updateSequenceId": _now_ms(),
                "url": f"{repo_url}/commit/{sha}",
            },
            "id": get_jira_id(ref),
            "issueKeys": issue_keys,
            "name": ref,
            "url": f"{repo_url}/tree/{ref}",
            "updateSequenceId": _now_ms(),
        }
    ]


def _comment_count(payload: Dict[str, Any], github: Optional[GitHubClient]) -> int:
    pull_request = payload["pull_request"]
    if pull_request.get("comments") is not None:
        return pull_request["comments"]
    if github is None:
        return 0
    repository = payload["repository"]
    data = github.get_pull_request(repository["owner"]["login"], repository["name"], pull_request["number"])
    return (data or {}).get("comments", 0)


def transform_pull_request(payload: Dict[str, Any], author: Optional[Dict[str, Any]] = None,
                           github: Optional[GitHubClient] = None) -> Dict[str, Any]:
    """
    Transform a pull_request webhook payload.

    Args:
        payload: Webhook body with "pull_request" and "repository".
        author: GitHub user who opened the pull request.
        github: Used to look up the comment count when the payload lacks it.
    """
    pull_request = payload["pull_request"]
    repository = payload["repository"]
    head = pull_request.get("head") or {}

    # Same concatenation the sync job uses
    issue_keys = parse_issue_keys(f"{pull_request.get('title') or ''}\n{head.get('ref') or ''}")
    if not issue_keys or not head.get("repo"):
        logger.debug("Skipping pull request #%s: no issue keys or head repository", pull_request.get("number"))
        return {"data": None}

    status = map_pull_request_status(pull_request)
    base = pull_request["base"]
    return {
        "data": {
            "branches": _pull_request_branches(pull_request, issue_keys) if status == "OPEN" else [],
            "id": repository["id"],
            "name": repository["full_name"],
            "pullRequests": [
                {
                    "author": get_jira_author(author),
                    "commentCount": _comment_count(payload, github),
                    "destinationBranch": f"{base['repo']['html_url']}/tree/{base['ref']}",
                    "displayId": f"#{pull_request['number']}",
                    "id": pull_request["number"],
                    "issueKeys": issue_keys,
                    "lastUpdate": pull_request.get("updated_at"),
                    "sourceBranch": head["ref"],
                    "sourceBranchUrl": f"{head['repo']['html_url']}/tree/{head['ref']}",
                    "status": status,
                    "timestamp": pull_request.get("updated_at"),
                    "title": pull_request.get("title"),
                    "url": pull_request.get("html_url"),
                    "updateSequenceId": _now_ms(),
                }
            ],
            "url": repository["html_url"],
            "updateSequenceId": _now_ms(),
        }
    }


def _last_commit(payload: Dict[str, Any], github: GitHubClient, issue_keys: List[str]) -> Dict[str, Any]:
    repository = payload["repository"]
    owner, repo = repository["owner"]["login"], repository["name"]
    sha = github.get_ref(owner, repo, f"heads/{payload['ref']}")["object"]["sha"]
    data = github.get_commit(owner, repo, sha)
    commit = data["commit"]
    return {
        "author": get_jira_author(commit.get("author")),
        "authorTimestamp": (commit.get("author") or {}).get("date"),
        "displayId": sha[:6],
        "fileCount": 0,
        "hash": sha,
        "id": sha,
        "issueKeys": issue_keys,
        "message": commit.get("message"),
        "url": data.get("html_url"),
        "updateSequenceId": _now_ms(),
    }


def transform_branch(payload: Dict[str, Any], github: GitHubClient) -> Dict[str, Any]:
    """Transform a "create" webhook payload for a new branch."""
    if payload.get("ref_type") != "branch":
        return {}

    ref = payload["ref"]
    repository = payload["repository"]
    issue_keys = parse_issue_keys(ref)
    if not issue_keys:
        return {}

    return {
        "data": {
            "id": repository["id"],
            "name": repository["full_name"],
            "url": repository["html_url"],
            "branches": [
                {
                    "createPullRequestUrl": f"{repository['html_url']}/pull/new/{ref}",
                    "lastCommit": _last_commit(payload, github, issue_keys),
                    "id": get_jira_id(ref),
                    "issueKeys": issue_keys,
                    "name": ref,
                    "url": f"{repository['html_url']}/tree/{ref}",
                    "updateSequenceId": _now_ms(),
                }
            ],
            "updateSequenceId": _now_ms(),
        }
    }


def _commit_files(commit: Dict[str, Any], repo_url: str) -> List[Dict[str, Any]]:
    files = []
    for change_type, paths in (("ADDED", commit.get("added")), ("DELETED", commit.get("removed")),
                               ("MODIFIED", commit.get("modified"))):
        for path in paths or []:
            files.append({
                "path": path,
                "changeType": change_type,
                "url": f"{repo_url}/blob/{commit['id']}/{path}",
            })
    return files[:MAX_COMMIT_FILES]


def transform_push(payload: Dict[str, Any], author_map: Optional[List[Optional[Dict[str, Any]]]] = None) -> Dict[str, Any]:
    """
    Transform a push webhook payload into Jira commits.

    author_map holds extra GitHub user data per commit, index-aligned with
    payload["commits"].
    """
    repository = payload["repository"]
    author_map = author_map or []
    commits = []
    for index, commit in enumerate(payload.get("commits") or []):
        issue_keys = parse_issue_keys(commit.get("message"))
        if not issue_keys:
            continue
        extra = author_map[index] if index < len(author_map) else None
        files = _commit_files(commit, repository["html_url"])
        commits.append({
            "author": get_jira_author(commit.get("author"), extra),
            "authorTimestamp": commit.get("timestamp"),
            "displayId": commit["id"][:6],
            "fileCount": sum(len(commit.get(k) or []) for k in ("added", "removed", "modified")),
            "files": files,
            "hash": commit["id"],
            "id": commit["id"],
            "issueKeys": issue_keys,
            "message": commit.get("message"),
            "timestamp": commit.get("timestamp"),
            "url": commit.get("url"),
            "updateSequenceId": _now_ms(),
        })

    if not commits:
        return {}

    return {
        "data": {
            "commits": commits,
            "id": repository["id"],
            "name": repository["full_name"],
            "url": repository["html_url"],
            "updateSequenceId": _now_ms(),
        }
    }
