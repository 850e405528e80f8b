"""
GitHub REST API client used by the provider.

Thin wrapper around a requests.Session: it issues single page requests and
hands back the decoded entries plus response metadata. Pagination loops live
in provider.py.
"""

from datetime import datetime
from urllib.parse import urlparse, parse_qs

import requests

from config import logger, get_token, get_api_url, PER_PAGE
from exceptions import GitHubAPIError
from models import PageResponse

# Media type that adds the starred_at timestamp to /users/{user}/starred
STAR_MEDIA_TYPE = "application/vnd.github.star+json"

API_VERSION = "2022-11-28"


def parse_next_page(response):
    """
    Extract the next page number from the response's Link header.

    Returns 0 when there is no "next" relation.
    """
    next_link = response.links.get("next")
    if not next_link:
        return 0
    query = parse_qs(urlparse(next_link["url"]).query)
    try:
        return int(query.get("page", ["0"])[0])
    except ValueError:
        return 0


def to_unix_seconds(timestamp):
    """Convert a GitHub ISO-8601 timestamp (e.g. 2019-05-01T10:00:00Z) to Unix seconds."""
    return int(datetime.fromisoformat(timestamp.replace("Z", "+00:00")).timestamp())


class GitHubAPI:
    """Client for the GitHub REST endpoints the provider needs."""

    def __init__(self, token=None, base_url=None, session=None):
        """
        Initialize the API client.

        Args:
            token (str, optional): GitHub Personal Access Token. Required for follow().
            base_url (str, optional): API root, defaults to https://api.github.com.
            session (requests.Session, optional): Pre-configured session to reuse.
        """
        self.base_url = (base_url or get_api_url()).rstrip("/")
        self.session = session or requests.Session()
        self.session.headers.update({
            "Accept": "application/vnd.github+json",
            "X-GitHub-Api-Version": API_VERSION,
        })
        if token:
            self.session.headers["Authorization"] = f"Bearer {token}"

    @classmethod
    def from_env(cls):
        """Build a client from GITHUB_TOKEN and GITHUB_API_URL."""
        return cls(token=get_token(), base_url=get_api_url())

    def __enter__(self):
        return self

    def __exit__(self, *args):
        self.close()

    def close(self):
        self.session.close()

    def _request(self, method, path, params=None, headers=None, timeout=None):
        url = f"{self.base_url}{path}"
        try:
            response = self.session.request(method, url, params=params, headers=headers, timeout=timeout)
        except requests.exceptions.RequestException as e:
            raise GitHubAPIError(f"{method} {path} failed: {e}") from e

        if response.status_code >= 400:
            try:
                message = response.json().get("message", response.text)
            except ValueError:
                message = response.text
            logger.error(f"GitHub API Error: {response.status_code} - {message}")
            raise GitHubAPIError(f"{method} {path} returned {response.status_code}: {message}",
                                 status_code=response.status_code)
        return response

    def _get_page(self, path, page, per_page, headers=None, timeout=None):
        response = self._request(
            "GET", path,
            params={"page": page, "per_page": per_page},
            headers=headers,
            timeout=timeout,
        )
        meta = PageResponse(
            status_code=response.status_code,
            next_page=parse_next_page(response),
            headers=dict(response.headers),
        )
        return response.json(), meta

    def fetch_starred_page(self, login, page=1, per_page=PER_PAGE, timeout=None):
        """
        Fetch one page of a user's starred repositories.

        Returns:
            tuple: (list of {"full_name", "starred_at"} dicts, PageResponse)
        """
        data, meta = self._get_page(
            f"/users/{login}/starred", page, per_page,
            headers={"Accept": STAR_MEDIA_TYPE},
            timeout=timeout,
        )
        entries = [
            {
                "full_name": item["repo"]["full_name"],
                "starred_at": to_unix_seconds(item["starred_at"]),
            }
            for item in data
        ]
        return entries, meta

    def fetch_followers_page(self, login, page=1, per_page=PER_PAGE, timeout=None):
        """Fetch one page of users following `login`."""
        data, meta = self._get_page(f"/users/{login}/followers", page, per_page, timeout=timeout)
        return [{"login": user["login"]} for user in data], meta

    def fetch_followees_page(self, login, page=1, per_page=PER_PAGE, timeout=None):
        """Fetch one page of users that `login` follows."""
        data, meta = self._get_page(f"/users/{login}/following", page, per_page, timeout=timeout)
        return [{"login": user["login"]} for user in data], meta

    def follow(self, login, timeout=None):
        """Follow `login` as the authenticated user."""
        response = self._request("PUT", f"/user/following/{login}", timeout=timeout)
        return PageResponse(status_code=response.status_code, headers=dict(response.headers))
