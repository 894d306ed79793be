"""Exception types raised by the GitLab group cloner."""


class GitLabClonerError(Exception):
    """Base class for all errors raised by this package."""


class ConfigError(GitLabClonerError):
    """The configuration file is missing or malformed."""


class DiscoveryError(GitLabClonerError):
    """Listing projects or subgroups through the GitLab API failed."""


class InvalidCloneURLError(GitLabClonerError):
    """A project's clone URL cannot carry an access token."""
