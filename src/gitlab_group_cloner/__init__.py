"""
GitLab Group Cloner - clone every repository of a GitLab group hierarchy.

Projects are discovered through the GitLab REST API (including nested
subgroups) and cloned into a directory tree that mirrors their namespaces.
"""

__version__ = "1.0.0"

from .config import Config, load_config
from .discovery import ProjectDiscovery
from .cloner import RepositoryCloner
from .models import Project, Subgroup
from .exceptions import GitLabClonerError, ConfigError, DiscoveryError, InvalidCloneURLError

__all__ = [
    'Config',
    'load_config',
    'ProjectDiscovery',
    'RepositoryCloner',
    'Project',
    'Subgroup',
    'GitLabClonerError',
    'ConfigError',
    'DiscoveryError',
    'InvalidCloneURLError',
]
