"""
github.py

The single GitHub REST call the widgets consume: user profile stats.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any
import asyncio
import os

import requests

from .errors import ErrorKind, WidgetError, error_for_status

@dataclass(frozen=True)
class GitHubUser:
    login: str
    name: str | None
    bio: str | None
    avatar_url: str
    followers: int
    following: int
    public_repos: int
    public_gists: int

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> "GitHubUser":
        return cls(
            login=str(data.get("login") or ""),
            name=data.get("name"),
            bio=data.get("bio"),
            avatar_url=str(data.get("avatar_url") or ""),
            followers=int(data.get("followers") or 0),
            following=int(data.get("following") or 0),
            public_repos=int(data.get("public_repos") or 0),
            public_gists=int(data.get("public_gists") or 0),
        )

class GitHubClient:
    def __init__(self, token: str | None = None, api_base: str = "https://api.github.com", *, timeout: float = 10) -> None:
        self._token = token if token is not None else os.environ.get("GITHUB_TOKEN", "")
        self._api_base = api_base.rstrip("/")
        self._timeout = timeout

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/vnd.github.v3+json",
            "User-Agent": "profilekit",
        }
        if self._token:
            headers["Authorization"] = f"token {self._token}"
        return headers

    def get_user(self, username: str) -> GitHubUser:
        """Fetch profile stats for ``username``. Single attempt, no retry."""
        username = username.strip()
        if not username:
            raise WidgetError(ErrorKind.VALIDATION, "GitHub username is required")
        try:
            r = requests.get(f"{self._api_base}/users/{username}", headers=self._headers(), timeout=self._timeout)
        except requests.RequestException as e:
            raise WidgetError(ErrorKind.NETWORK, "Failed to fetch GitHub data") from e
        if r.status_code >= 400:
            raise error_for_status(r.status_code, r.reason or "", not_found=f"GitHub user not found: {username}")
        return GitHubUser.from_json(r.json())

    async def fetch_user(self, username: str) -> GitHubUser:
        return await asyncio.to_thread(self.get_user, username)
