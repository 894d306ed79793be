"""
Repository cloner.

Clones discovered projects one after another into a directory tree that
mirrors their GitLab namespaces.
"""

import logging
import os
from pathlib import Path
from typing import Dict, Iterable
from urllib.parse import quote, urlsplit, urlunsplit

# a missing git binary is reported per clone as GitCommandNotFound, not at import
os.environ.setdefault("GIT_PYTHON_REFRESH", "quiet")

from git import Repo, GitCommandError, RemoteProgress
from git.exc import GitCommandNotFound

from .exceptions import InvalidCloneURLError
from .models import Project


REDACTED = "*****"


def build_authenticated_url(url: str, token: str) -> str:
    """
    Embed an access token into an HTTP(S) clone URL.

    The token becomes the userinfo component, replacing any existing one:
    ``https://gitlab.example.com/g/r.git`` -> ``https://TOKEN@gitlab.example.com/g/r.git``.

    Raises:
        InvalidCloneURLError: If the URL is not an http/https URL with a host
    """
    parts = urlsplit(url)
    if parts.scheme not in ('http', 'https') or not parts.hostname:
        raise InvalidCloneURLError(f"Unsupported clone URL (expected http or https): {url}")

    host = parts.netloc.rsplit('@', 1)[-1]
    return urlunsplit(parts._replace(netloc=f"{quote(token, safe='')}@{host}"))


def redact(text: str, token: str) -> str:
    """Replace every occurrence of token in text."""
    if not token:
        return text
    for secret in {token, quote(token, safe='')}:
        text = text.replace(secret, REDACTED)
    return text


class CloneProgress(RemoteProgress):
    """Writes git's progress output to the log, one line per finished stage."""

    def __init__(self, logger: logging.Logger, token: str):
        super().__init__()
        self.logger = logger
        self.token = token

    def update(self, op_code, cur_count, max_count=None, message=''):
        line = redact(self._cur_line or '', self.token)
        if op_code & self.END:
            self.logger.info(f"  {line}")
        else:
            self.logger.debug(f"  {line}")

    def line_dropped(self, line):
        self.logger.debug(f"  {redact(line, self.token)}")


class RepositoryCloner:
    """Clones projects sequentially into clone_dir."""

    def __init__(self, access_token: str, clone_dir: str):
        """
        Initialize the cloner.

        Args:
            access_token: GitLab access token used as the git transport credential
            clone_dir: Root directory for cloned repositories
        """
        self.access_token = access_token
        self.clone_dir = Path(clone_dir)
        self.logger = logging.getLogger(__name__)

        self.stats = {
            'repositories_cloned': 0,
            'errors': 0
        }

    def destination_for(self, project: Project) -> Path:
        """Local path of a project: clone_dir joined with its namespace path."""
        return self.clone_dir / project.path_with_namespace

    def clone_repository(self, project: Project) -> bool:
        """
        Clone a single repository.

        Failures of the clone itself are logged and counted; errors while
        creating the parent directories propagate.

        Args:
            project: Project to clone

        Returns:
            True if successful, False otherwise
        """
        repo_path = self.destination_for(project)
        repo_path.parent.mkdir(parents=True, exist_ok=True)

        try:
            clone_url = build_authenticated_url(project.http_url_to_repo, self.access_token)
            self.logger.info(f"Cloning {project.name} into {repo_path}...")

            Repo.clone_from(clone_url, str(repo_path), progress=CloneProgress(self.logger, self.access_token))
            self.logger.info(f"Successfully cloned: {repo_path}")
            self.stats['repositories_cloned'] += 1
            return True

        except (GitCommandError, GitCommandNotFound, InvalidCloneURLError) as e:
            self.logger.error(f"Failed to clone {project.name}: {redact(str(e), self.access_token)}")
            self.stats['errors'] += 1
            return False

    def clone_all(self, projects: Iterable[Project]) -> Dict[str, int]:
        """
        Clone every project in order, continuing past individual failures.

        Args:
            projects: Projects as returned by discovery

        Returns:
            Statistics dict with 'repositories_cloned' and 'errors'
        """
        for project in projects:
            self.clone_repository(project)

        self._print_statistics()
        return self.stats

    def _print_statistics(self):
        """Print cloning statistics."""
        self.logger.info("=" * 50)
        self.logger.info("CLONING STATISTICS")
        self.logger.info("=" * 50)
        self.logger.info(f"Repositories cloned: {self.stats['repositories_cloned']}")
        self.logger.info(f"Errors encountered: {self.stats['errors']}")
        self.logger.info("=" * 50)
