#!/usr/bin/env python3
"""
Command-line interface for GitLab Group Cloner.
"""

import sys
import logging
import click

from .config import DEFAULT_CONFIG_PATH, load_config
from .discovery import ProjectDiscovery
from .cloner import RepositoryCloner
from .exceptions import ConfigError, DiscoveryError


def _setup_logging(verbose: bool) -> logging.Logger:
    """Setup logging configuration."""
    logger = logging.getLogger('gitlab_group_cloner')
    log_level = logging.DEBUG if verbose else logging.INFO
    logger.setLevel(log_level)

    # Create console handler, replacing one left by an earlier call
    handler = logging.StreamHandler()
    handler.setLevel(log_level)

    # Create formatter
    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    handler.setFormatter(formatter)

    logger.handlers.clear()
    logger.addHandler(handler)
    return logger


@click.command()
@click.option('--config', 'config_path', default=DEFAULT_CONFIG_PATH, show_default=True,
              help='Path to the YAML configuration file')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
def main(config_path: str, verbose: bool):
    """
    Clone every repository of a GitLab group and its subgroups.

    Repositories are placed under clone_dir following their full namespace
    path, e.g. clone_dir/group/subgroup/project.
    """
    logger = _setup_logging(verbose)

    try:
        config = load_config(config_path)
    except ConfigError as e:
        logger.error(f"Configuration error: {e}")
        sys.exit(1)

    discovery = ProjectDiscovery(config.gitlab_url, config.token, config.per_page)
    cloner = RepositoryCloner(config.token, config.clone_dir)

    try:
        logger.info("Fetching all projects...")
        projects = discovery.list_all_projects(config.group_id)
        logger.info(f"Found {len(projects)} projects.")

        stats = cloner.clone_all(projects)
    except DiscoveryError as e:
        logger.error(f"Error fetching projects: {e}")
        sys.exit(1)
    except OSError as e:
        logger.error(f"Error preparing clone directories: {e}")
        sys.exit(1)
    except KeyboardInterrupt:
        logger.info("Operation cancelled by user")
        sys.exit(1)

    if stats['errors']:
        logger.warning(f"Finished with {stats['errors']} failed clone(s).")
    else:
        logger.info("All projects cloned successfully.")
    sys.exit(0)


if __name__ == '__main__':
    main()
