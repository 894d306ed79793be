"""
Project discovery for GitLab groups.

Walks a group and all of its nested subgroups through the GitLab REST API
and returns a flat list of projects.
"""

import logging
from typing import Any, List

import requests
import gitlab
from gitlab.exceptions import GitlabError

from .exceptions import DiscoveryError
from .models import Project, Subgroup


class ProjectDiscovery:
    """Lists the projects of a GitLab group hierarchy."""

    def __init__(self, gitlab_url: str, access_token: str, per_page: int):
        """
        Initialize the discovery client.

        Args:
            gitlab_url: Base URL of the GitLab instance
            access_token: GitLab API access token, sent as PRIVATE-TOKEN
            per_page: Number of projects requested per page
        """
        self.gitlab_url = gitlab_url.rstrip('/')
        self.per_page = per_page
        self.gl = gitlab.Gitlab(self.gitlab_url, private_token=access_token)
        self.logger = logging.getLogger(__name__)

    def _group(self, group_id: Any) -> Any:
        # lazy: build the manager paths without fetching the group itself
        return self.gl.groups.get(group_id, lazy=True)

    def list_projects(self, group_id: Any) -> List[Project]:
        """
        List the direct projects of a group, page by page.

        Pages are requested in order until one comes back empty.

        Args:
            group_id: Numeric group ID or full group path

        Returns:
            Projects in the order GitLab lists them

        Raises:
            DiscoveryError: If any page request fails
        """
        group = self._group(group_id)
        projects: List[Project] = []
        page = 1

        while True:
            try:
                batch = group.projects.list(
                    page=page,
                    per_page=self.per_page,
                    get_all=False,
                    obey_rate_limit=False,
                )
            except (GitlabError, requests.RequestException) as e:
                raise DiscoveryError(f"Failed to list projects of group '{group_id}' (page {page}): {e}") from e

            if not batch:
                break

            self.logger.debug(f"Group '{group_id}' page {page}: {len(batch)} projects")
            projects.extend(self._to_project(item, group_id) for item in batch)
            page += 1

        return projects

    def list_subgroups(self, group_id: Any) -> List[Subgroup]:
        """
        List the direct subgroups of a group with a single request.

        Raises:
            DiscoveryError: If the request fails
        """
        group = self._group(group_id)
        try:
            items = group.subgroups.list(get_all=False, obey_rate_limit=False)
        except (GitlabError, requests.RequestException) as e:
            raise DiscoveryError(f"Failed to list subgroups of group '{group_id}': {e}") from e

        try:
            return [Subgroup(id=int(item.id), path=item.path) for item in items]
        except (AttributeError, TypeError, ValueError) as e:
            raise DiscoveryError(f"Malformed subgroup in group '{group_id}': {e}") from e

    def list_all_projects(self, group_id: Any) -> List[Project]:
        """
        Recursively list all projects of a group and its subgroups.

        The group's own projects come first, followed depth-first by the
        projects of each subgroup in listing order.

        Args:
            group_id: Numeric group ID or full group path

        Returns:
            Flat list of projects

        Raises:
            DiscoveryError: If any API request fails; no partial list is returned
        """
        self.logger.debug(f"Processing group: {group_id}")
        projects = self.list_projects(group_id)

        for subgroup in self.list_subgroups(group_id):
            self.logger.debug(f"Descending into subgroup '{subgroup.path}' (ID: {subgroup.id})")
            projects.extend(self.list_all_projects(subgroup.id))

        return projects

    @staticmethod
    def _to_project(item: Any, group_id: Any) -> Project:
        try:
            return Project(
                http_url_to_repo=item.http_url_to_repo,
                name=item.name,
                path_with_namespace=item.path_with_namespace,
            )
        except AttributeError as e:
            raise DiscoveryError(f"Malformed project in group '{group_id}': {e}") from e
