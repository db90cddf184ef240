from __future__ import annotations

import base64
import binascii
import os
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

import requests
from bs4 import BeautifulSoup
from bs4.exceptions import ParserRejectedMarkup
from requests import Response

from .config import GitHubConfig
from .exceptions import MalformedResponseError


@dataclass(frozen=True, slots=True)
class RequestHeaders:
    """Headers sent with every API request, fixed once at startup."""

    accept: str
    user_agent: str
    token: Optional[str] = None

    @classmethod
    def from_env(cls, config: GitHubConfig, environ: Optional[Mapping[str, str]] = None) -> "RequestHeaders":
        env = os.environ if environ is None else environ
        token = env.get(config.token_env) or None
        return cls(accept=config.accept, user_agent=config.user_agent, token=token)

    def api(self) -> Dict[str, str]:
        headers = {"Accept": self.accept, "User-Agent": self.user_agent}
        if self.token:
            headers["Authorization"] = f"token {self.token}"
        return headers

    def web(self) -> Dict[str, str]:
        return {"User-Agent": self.user_agent, "Accept": "text/html,application/xhtml+xml"}


@dataclass(slots=True)
class GitHubSession:
    http: requests.Session
    headers: RequestHeaders
    config: GitHubConfig = field(default_factory=GitHubConfig)

    @classmethod
    def create(cls, config: Optional[GitHubConfig] = None, environ: Optional[Mapping[str, str]] = None) -> "GitHubSession":
        config = config or GitHubConfig()
        return cls(http=requests.Session(), headers=RequestHeaders.from_env(config, environ), config=config)

    def close(self) -> None:
        self.http.close()


def _raise_for_status(response: Response) -> None:
    try:
        response.raise_for_status()
    except requests.HTTPError as error:
        message = _error_message(response)
        raise requests.HTTPError(f"GitHub API request failed: {response.status_code} {message}", response=response) from error


def _error_message(response: Response) -> str:
    if response.headers.get("Content-Type", "").startswith("application/json"):
        try:
            body = response.json()
        except ValueError:
            return response.text
        if isinstance(body, dict) and body.get("message"):
            return str(body["message"])
    return response.text


def _get(session: GitHubSession, path: str, params: Optional[Dict[str, str]] = None) -> Response:
    url = f"{session.config.api_root}{path}"
    return session.http.get(url, params=params, headers=session.headers.api(), timeout=session.config.request_timeout)


def _json(response: Response) -> Any:
    try:
        return response.json()
    except ValueError as error:
        raise MalformedResponseError(f"Invalid JSON from {response.url}: {error}") from error


def list_owner_repos(session: GitHubSession, owner: str) -> List[Dict[str, Any]]:
    # Only the first page is read.
    params = {"per_page": str(session.config.per_page), "type": "owner"}
    response = _get(session, f"/users/{owner}/repos", params=params)
    _raise_for_status(response)
    body = _json(response)
    if not isinstance(body, list):
        raise MalformedResponseError(f"Expected a list of repositories for {owner}")
    return body


def get_repo_topics(session: GitHubSession, owner: str, repo: str) -> List[str]:
    response = _get(session, f"/repos/{owner}/{repo}/topics")
    _raise_for_status(response)
    body = _json(response)
    if not isinstance(body, dict):
        raise MalformedResponseError(f"Expected a topics object for {owner}/{repo}")
    names = body.get("names") or []
    if not isinstance(names, list):
        raise MalformedResponseError(f"Expected a list of topic names for {owner}/{repo}")
    return [str(name) for name in names]


def fetch_readme(session: GitHubSession, owner: str, repo: str) -> Optional[str]:
    """Return the decoded README of ``owner/repo`` or None when it has none.

    Failures other than a 404 propagate to the caller.
    """
    response = _get(session, f"/repos/{owner}/{repo}/readme")
    if response.status_code == 404:
        return None
    _raise_for_status(response)
    body = _json(response)
    if not isinstance(body, dict):
        raise MalformedResponseError(f"Expected a README object for {owner}/{repo}")
    return decode_content(body.get("content") or "")


def decode_content(content: str) -> str:
    # The contents API wraps base64 at 60 columns.
    compact = "".join(content.split())
    try:
        raw = base64.b64decode(compact)
    except (binascii.Error, ValueError) as error:
        raise MalformedResponseError(f"README content is not valid base64: {error}") from error
    return raw.decode("utf-8", errors="replace")


def fetch_og_image(session: GitHubSession, owner: str, repo: str) -> Optional[str]:
    url = f"{session.config.web_root}/{owner}/{repo}"
    try:
        response = session.http.get(url, headers=session.headers.web(), timeout=session.config.request_timeout)
        response.raise_for_status()
        return extract_og_image(response.text)
    except (requests.RequestException, ParserRejectedMarkup, ValueError, TypeError):
        return None


def extract_og_image(html: str) -> Optional[str]:
    soup = BeautifulSoup(html, "html.parser")
    tag = soup.find("meta", attrs={"property": "og:image"})
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None
