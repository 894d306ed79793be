"""
Data models for GitLab resources handled by the cloner.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class Project:
    """A repository to clone."""
    http_url_to_repo: str
    name: str
    path_with_namespace: str


@dataclass(frozen=True)
class Subgroup:
    id: int
    path: str
