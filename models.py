"""Value types returned by the provider and its API client."""

from dataclasses import dataclass, field
from typing import Mapping


@dataclass(frozen=True)
class StarredRepository:
    """A repository starred by a user."""

    full_name: str
    starred_at: int  # Unix seconds


@dataclass(frozen=True)
class PageResponse:
    """Response metadata for a single API call.

    next_page is 0 when there is nothing left to fetch.
    """

    status_code: int
    next_page: int = 0
    headers: Mapping[str, str] = field(default_factory=dict)
