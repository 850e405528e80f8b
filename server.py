"""
FastMCP Server implementation for the StarHost provider.
Exposes tools for listing a user's stars, followers and followees, and for following users.
"""

from fastmcp import FastMCP
from contextlib import contextmanager
from datetime import datetime, timezone
from config import logger
from exceptions import ProviderError
from github_client import GitHubAPI
from provider import RepositoryHostClient

SYSTEM_PROMPT = """
You are a helpful assistant that looks up GitHub users' starred repositories, followers and followees.
Always ask the user for the exact GitHub username before calling a tool. Do NOT guess it.
Only call follow_user when the user explicitly asks to follow someone.
"""

# Initialize FastMCP Server
mcp = FastMCP("StarHost", instructions=SYSTEM_PROMPT)


@contextmanager
def open_provider():
    """Yield a provider backed by a GitHub client configured from the environment; the session is closed on exit."""
    with GitHubAPI.from_env() as api:
        yield RepositoryHostClient(api)


def _format_logins(title, logins):
    if not logins:
        return f"{title}: none found."
    return "\n".join([f"{title} ({len(logins)}):"] + [f"- {name}" for name in logins])


# Core implementation functions (testable without FastMCP decorator)
def _list_stars_impl(username: str) -> str:
    """
    Core implementation for listing starred repositories.

    Args:
        username: The exact GitHub username (e.g., 'octocat').
    """
    try:
        with open_provider() as provider:
            stars = provider.list_starred_repositories(username)
    except ProviderError as e:
        logger.error(f"Error in list_stars: {e}")
        return f"Error in list_stars: {e}"

    if not stars:
        return f"'{username}' has not starred any repositories."

    output = [f"--- {len(stars)} repositories starred by {username} ---"]
    for star in stars:
        when = datetime.fromtimestamp(star.starred_at, tz=timezone.utc).strftime("%Y-%m-%d")
        output.append(f"{star.full_name} | starred {when}")
    return "\n".join(output)


def _list_followers_impl(username: str) -> str:
    try:
        with open_provider() as provider:
            followers = provider.list_followers(username)
    except ProviderError as e:
        logger.error(f"Error in list_followers: {e}")
        return f"Error in list_followers: {e}"
    return _format_logins(f"Followers of {username}", followers)


def _list_followees_impl(username: str) -> str:
    try:
        with open_provider() as provider:
            followees = provider.list_followees(username)
    except ProviderError as e:
        logger.error(f"Error in list_followees: {e}")
        return f"Error in list_followees: {e}"
    return _format_logins(f"Users followed by {username}", followees)


def _list_repositories_impl(username: str) -> str:
    with open_provider() as provider:
        repos = provider.list_owned_repositories(username)
    if not repos:
        return f"Listing repositories owned by '{username}' is not supported yet."
    return _format_logins(f"Repositories owned by {username}", repos)


def _follow_user_impl(username: str) -> str:
    """
    Core implementation for following a user. Needs GITHUB_TOKEN with the user:follow scope.
    """
    try:
        with open_provider() as provider:
            provider.follow_user(username)
    except ProviderError as e:
        logger.error(f"Error in follow_user: {e}")
        return f"Error in follow_user: {e}"
    logger.info(f"Followed {username}")
    return f"Now following '{username}'."


# FastMCP decorated functions (wrappers around implementation)
@mcp.tool(name="list_stars")
def list_stars_tool(username: str) -> str:
    """
    List the repositories a GitHub user has starred, with the date of each star.

    Args:
        username: The exact GitHub username provided by the user.
    """
    return _list_stars_impl(username)


@mcp.tool(name="list_followers")
def list_followers_tool(username: str) -> str:
    """
    List the GitHub users following the given user.

    Args:
        username: The exact GitHub username provided by the user.
    """
    return _list_followers_impl(username)


@mcp.tool(name="list_followees")
def list_followees_tool(username: str) -> str:
    """
    List the GitHub users the given user follows.

    Args:
        username: The exact GitHub username provided by the user.
    """
    return _list_followees_impl(username)


@mcp.tool(name="list_repositories")
def list_repositories_tool(username: str) -> str:
    """
    List repositories owned by a GitHub user (not supported yet).

    Args:
        username: The exact GitHub username provided by the user.
    """
    return _list_repositories_impl(username)


@mcp.tool(name="follow_user")
def follow_user_tool(username: str) -> str:
    """
    Follow a GitHub user with the configured token.

    Args:
        username: The exact GitHub username to follow.
    """
    return _follow_user_impl(username)


def run():
    """Entry point for the MCP server."""
    mcp.run()


if __name__ == "__main__":
    run()
