from .author import get_jira_author
from .transforms import transform_branch, transform_pull_request, transform_push

__all__ = [
    "get_jira_author",
    "transform_branch",
    "transform_pull_request",
    "transform_push",
]
