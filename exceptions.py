"""
Exceptions for the StarHost provider.

ProviderError subclasses are what callers of RepositoryHostClient see.
GitHubAPIError is raised by the HTTP client and ends up as their cause.
"""


class ProviderError(Exception):
    """Base exception for provider operations."""

    def __init__(self, message, operation=None, login=None):
        self.operation = operation
        self.login = login
        super().__init__(message)


class RetrievalError(ProviderError):
    """Raised when a page of stars, followers or followees cannot be fetched."""
    pass


class FollowError(ProviderError):
    """Raised when following a user fails."""
    pass


class GitHubAPIError(Exception):
    """Raised when the GitHub API returns an error or cannot be reached."""

    def __init__(self, message, status_code=None):
        self.status_code = status_code
        super().__init__(message)
