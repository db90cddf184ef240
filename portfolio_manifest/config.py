from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml


DEFAULT_CONFIG_PATH = Path("config/settings.yaml")
CONFIG_PATH_ENV = "PORTFOLIO_MANIFEST_CONFIG"


@dataclass(slots=True)
class GitHubConfig:
    api_root: str = "https://api.github.com"
    web_root: str = "https://github.com"
    token_env: str = "GITHUB_TOKEN"
    user_agent: str = "portfolio-manifest/0.1"
    accept: str = "application/vnd.github.v3+json"
    per_page: int = 100
    # None leaves requests without a timeout.
    request_timeout: Optional[float] = None


@dataclass(slots=True)
class ImageConfig:
    raw_branch: str = "main"


@dataclass(slots=True)
class OutputConfig:
    owner: str = "JackFShields"
    path: Path = Path("projects.json")


@dataclass(slots=True)
class LoggingConfig:
    level: str = "INFO"


@dataclass(slots=True)
class AppConfig:
    github: GitHubConfig = field(default_factory=GitHubConfig)
    images: ImageConfig = field(default_factory=ImageConfig)
    output: OutputConfig = field(default_factory=OutputConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def load_config(path: Optional[Path] = None) -> AppConfig:
    config_path = path or _path_from_env() or DEFAULT_CONFIG_PATH
    if not config_path.exists():
        return AppConfig()

    with config_path.open("r", encoding="utf-8") as handle:
        raw: Dict[str, Any] = yaml.safe_load(handle) or {}

    github_raw = raw.get("github", {}) or {}
    images_raw = raw.get("images", {}) or {}
    output_raw = raw.get("output", {}) or {}
    logging_raw = raw.get("logging", {}) or {}

    defaults = GitHubConfig()
    timeout = github_raw.get("request_timeout", defaults.request_timeout)

    config = AppConfig(
        github=GitHubConfig(
            api_root=str(github_raw.get("api_root", defaults.api_root)).rstrip("/"),
            web_root=str(github_raw.get("web_root", defaults.web_root)).rstrip("/"),
            token_env=str(github_raw.get("token_env", defaults.token_env)),
            user_agent=str(github_raw.get("user_agent", defaults.user_agent)),
            accept=str(github_raw.get("accept", defaults.accept)),
            per_page=int(github_raw.get("per_page", defaults.per_page)),
            request_timeout=float(timeout) if timeout is not None else None,
        ),
        images=ImageConfig(
            raw_branch=str(images_raw.get("raw_branch", "main")),
        ),
        output=OutputConfig(
            owner=str(output_raw.get("owner", "JackFShields")),
            path=Path(output_raw.get("path", "projects.json")),
        ),
        logging=LoggingConfig(
            level=str(logging_raw.get("level", "INFO")).upper(),
        ),
    )

    return config


def _path_from_env() -> Optional[Path]:
    value = os.getenv(CONFIG_PATH_ENV)
    return Path(value) if value else None
