import logging
import os
from unittest.mock import Mock, patch

import pytest

from config import get_token, get_log_level
from github_client import GitHubAPI
from provider import RepositoryHostClient


@pytest.fixture
def clean_env():
    """Fixture to ensure GITHUB_TOKEN is not in the environment."""
    with patch.dict(os.environ, {}, clear=True):
        yield


def test_get_token_ignores_placeholder_values():
    with patch.dict(os.environ, {"GITHUB_TOKEN": "None"}, clear=True):
        assert get_token() is None
    with patch.dict(os.environ, {"GITHUB_TOKEN": " ghp_abc "}, clear=True):
        assert get_token() == "ghp_abc"


@patch("github_client.requests.Session")
def test_from_env_without_token_omits_authorization(mock_session_cls, clean_env):
    """
    Test that a client built from an empty environment sends no Authorization
    header but still talks to the default API URL.
    """
    session = Mock()
    session.headers = {}
    mock_session_cls.return_value = session

    api = GitHubAPI.from_env()

    assert "Authorization" not in session.headers
    assert session.headers.get("Accept") == "application/vnd.github+json"
    assert api.base_url == "https://api.github.com"


def test_public_listing_without_token(clean_env):
    """Listing followers works anonymously as long as the API answers."""
    response = Mock()
    response.status_code = 200
    response.json.return_value = [{"login": "alice"}]
    response.headers = {}
    response.links = {}

    session = Mock()
    session.headers = {}
    session.request.return_value = response

    provider = RepositoryHostClient(GitHubAPI(session=session))

    assert provider.list_followers("octocat") == ["alice"]
    assert "Authorization" not in session.headers


def test_get_log_level_falls_back_to_info_on_unknown_name():
    with patch.dict(os.environ, {"STARHOST_LOG_LEVEL": "verbose"}, clear=True):
        assert get_log_level() == logging.INFO
    with patch.dict(os.environ, {"STARHOST_LOG_LEVEL": " debug "}, clear=True):
        assert get_log_level() == logging.DEBUG
    with patch.dict(os.environ, {}, clear=True):
        assert get_log_level() == logging.INFO
