"""
GitHub provider: stars, followers and followees of a user, plus following.

RepositoryHostClient wraps an already-configured API client (see
github_client.GitHubAPI) and turns its page-by-page responses into plain
Python lists. It never retries, caches or handles rate limits itself.
"""

import logging
from collections.abc import Mapping

from config import PER_PAGE
from exceptions import RetrievalError, FollowError
from models import StarredRepository

logger = logging.getLogger(__name__)

HTTP_OK = 200


def _field(entry, name):
    """Read `name` from a mapping or an attribute-style entry."""
    if isinstance(entry, Mapping):
        return entry[name]
    return getattr(entry, name)


def _to_starred_repository(entry):
    return StarredRepository(_field(entry, "full_name"), int(_field(entry, "starred_at")))


def _to_login(entry):
    return _field(entry, "login")


class RepositoryHostClient:
    """Provider over a GitHub-like API client.

    The client must expose fetch_starred_page, fetch_followers_page,
    fetch_followees_page and follow. The optional `timeout` on every
    operation is passed unchanged to each of those calls.

    Example:
        >>> with GitHubAPI.from_env() as api:
        ...     stars = RepositoryHostClient(api).list_starred_repositories("octocat")
    """

    def __init__(self, client, per_page=PER_PAGE):
        self.client = client
        self.per_page = per_page

    def _paginate(self, fetch, mapper, operation, login, what, timeout):
        """
        Yield mapped entries page by page until the client reports no next page.

        Raises:
            RetrievalError: If a page cannot be fetched or one of its entries cannot be read.
        """
        logger.info(f"getting {login}'s {what}", extra={"operation": operation, "login": login})

        count = 0
        current_page = 1
        while current_page != 0:
            try:
                entries, res = fetch(login, page=current_page, per_page=self.per_page, timeout=timeout)
                items = [mapper(entry) for entry in entries]
            except Exception as e:
                raise RetrievalError(
                    f"could not retrieve {login}'s {what}: {e}",
                    operation=operation,
                    login=login,
                ) from e

            logger.debug(
                f"{operation}: got page {current_page} for {login} "
                f"(count={count}, status={res.status_code}, next_page={res.next_page})",
                extra={
                    "operation": operation,
                    "login": login,
                    "page": current_page,
                    "count": count,
                    "status": res.status_code,
                    "next_page": res.next_page,
                },
            )

            for item in items:
                count += 1
                yield item

            current_page = res.next_page

    # --- Lazy listings ---

    def iter_starred_repositories(self, login, timeout=None):
        """Iterate over `login`'s starred repositories, fetching pages as needed. Raises RetrievalError."""
        return self._paginate(
            self.client.fetch_starred_page, _to_starred_repository,
            "list_starred_repositories", login, "starred repositories", timeout,
        )

    def iter_followers(self, login, timeout=None):
        """Iterate over the logins following `login`. Raises RetrievalError."""
        return self._paginate(
            self.client.fetch_followers_page, _to_login,
            "list_followers", login, "followers", timeout,
        )

    def iter_followees(self, login, timeout=None):
        """Iterate over the logins `login` follows. Raises RetrievalError."""
        return self._paginate(
            self.client.fetch_followees_page, _to_login,
            "list_followees", login, "followees", timeout,
        )

    # --- Eager listings ---

    def list_starred_repositories(self, login, timeout=None):
        """
        Return every repository `login` has starred, in API order.

        Raises:
            RetrievalError: If any page request fails. No partial list is returned.
        """
        return list(self.iter_starred_repositories(login, timeout))

    def list_followers(self, login, timeout=None):
        """Return the logins of `login`'s followers. Raises RetrievalError."""
        return list(self.iter_followers(login, timeout))

    def list_followees(self, login, timeout=None):
        """Return the logins `login` follows. Raises RetrievalError."""
        return list(self.iter_followees(login, timeout))

    def list_owned_repositories(self, login, timeout=None):
        """Not implemented yet: always returns an empty list."""
        return []

    # --- Actions ---

    def follow_user(self, login, timeout=None):
        """
        Follow `login` as the authenticated user.

        A successful response with a status other than 200 is logged as a
        warning but not treated as a failure.

        Raises:
            FollowError: If the follow request fails.
        """
        logger.info(f"following user {login}", extra={"operation": "follow_user", "login": login})

        try:
            res = self.client.follow(login, timeout=timeout)
        except Exception as e:
            raise FollowError(f"could not follow {login}: {e}", operation="follow_user", login=login) from e

        if res.status_code != HTTP_OK:
            logger.warning(
                f"following {login} returned a non-ok status code: {res.status_code}",
                extra={
                    "operation": "follow_user",
                    "login": login,
                    "status": res.status_code,
                    "headers": dict(res.headers),
                },
            )
