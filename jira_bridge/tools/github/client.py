from typing import Any, Dict, Protocol


class GitHubClient(Protocol):
    """GitHub REST calls the transforms need; see docs.github.com/rest."""

    def get_ref(self, owner: str, repo: str, ref: str) -> Dict[str, Any]:
        """GET /repos/{owner}/{repo}/git/ref/{ref}"""
        ...

    def get_commit(self, owner: str, repo: str, sha: str) -> Dict[str, Any]:
        """GET /repos/{owner}/{repo}/commits/{sha}"""
        ...

    def get_pull_request(self, owner: str, repo: str, number: int) -> Dict[str, Any]:
        """GET /repos/{owner}/{repo}/pulls/{number}"""
        ...
