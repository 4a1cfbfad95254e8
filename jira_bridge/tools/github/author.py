from typing import Any, Dict, Optional

GHOST_AUTHOR = {
    "avatar": "https://github.com/ghost.png",
    "name": "Deleted GitHub User",
    "email": "deleted@noreply.user.github.com",
    "url": "https://github.com/ghost",
}


def get_jira_author(*authors: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """
    Map GitHub user/commit-author objects to a Jira author.

    Later objects override earlier ones. Authors with neither a login nor a
    name (deleted accounts) become the GitHub ghost user.
    """
    author: Dict[str, Any] = {}
    for a in authors:
        if a:
            author.update(a)

    name = author.get("login") or author.get("name")
    if not name:
        return dict(GHOST_AUTHOR)

    mapped = {
        "avatar": author.get("avatar_url"),
        "email": author.get("email"),
        "name": name,
        "url": author.get("url") or author.get("html_url"),
    }
    return {k: v for k, v in mapped.items() if v}
