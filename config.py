"""
Configuration module for the StarHost provider.
Handles environment variable loading, logging, and GitHub API defaults.
"""

import pathlib
import os
from dotenv import load_dotenv
import logging
import sys

# Global storage directory for user settings (.env)
# Default is ~/.starhost
DATA_DIR = pathlib.Path.home() / ".starhost"

# Load environment variables (.env files)
# Strategy: 1. Project-level .env, then 2. Global storage .env
script_dir = pathlib.Path(__file__).parent
load_dotenv(script_dir / ".env")
load_dotenv(DATA_DIR / ".env")

# Configure logging to output to stderr (required for MCP servers)
def get_log_level():
    """Returns the numeric log level from STARHOST_LOG_LEVEL, falling back to INFO."""
    level = logging.getLevelName(os.getenv("STARHOST_LOG_LEVEL", "INFO").strip().upper())
    return level if isinstance(level, int) else logging.INFO

logging.basicConfig(
    level=get_log_level(),
    handlers=[logging.StreamHandler(sys.stderr)],
    format="%(asctime)s [StarHost] %(levelname)s %(name)s: %(message)s"
)

logger = logging.getLogger(__name__)

# Default GitHub REST endpoint
GITHUB_API_URL = "https://api.github.com"

# Maximum page size allowed by the GitHub API
PER_PAGE = 100

def get_token():
    """Returns the GitHub token from the environment, or None."""
    token = os.getenv("GITHUB_TOKEN")
    if token and token.strip().lower() not in ("none", ""):
        return token.strip()
    return None

def get_api_url():
    """Returns the GitHub API base URL."""
    return os.getenv("GITHUB_API_URL", GITHUB_API_URL)
