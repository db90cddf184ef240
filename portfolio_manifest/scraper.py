from __future__ import annotations

from typing import Any, Dict, List, Optional

from loguru import logger

from .config import AppConfig
from .exceptions import RepositoryListingError
from .github_api import GitHubSession, fetch_og_image, fetch_readme, get_repo_topics, list_owner_repos
from .markdown import locate_image, strip_markdown, to_raw_url
from .models import ProjectRecord, RepositorySummary


def collect_projects(owner: str, config: AppConfig, session: Optional[GitHubSession] = None) -> List[ProjectRecord]:
    """Build one ProjectRecord per public, non-fork repository of ``owner``.

    Listing failures raise RepositoryListingError. Failures while processing a
    single repository are logged and that repository is left out.
    """
    owns_session = session is None
    if session is None:
        session = GitHubSession.create(config.github)
    try:
        try:
            payloads = list_owner_repos(session, owner)
        except Exception as error:
            raise RepositoryListingError(owner, str(error)) from error

        records: List[ProjectRecord] = []
        for payload in payloads:
            name = _payload_name(payload)
            try:
                record = _build_record(session, owner, payload, config)
            except Exception as error:
                logger.warning(f"Repository processing failed for {name}: {error}")
                continue
            if record is not None:
                records.append(record)
    finally:
        if owns_session:
            session.close()

    logger.info(f"Collected {len(records)} projects for {owner}")
    return records


def _build_record(
    session: GitHubSession,
    owner: str,
    payload: Dict[str, Any],
    config: AppConfig,
) -> ProjectRecord | None:
    repo = RepositorySummary.from_payload(payload)
    if repo.fork:
        logger.debug(f"Skipping fork {repo.name}")
        return None

    branch = config.images.raw_branch
    topics = _topics_or_empty(session, owner, repo.name)
    markdown = _readme_or_none(session, owner, repo.name)

    readme_text = strip_markdown(markdown)
    readme_image = locate_image(markdown, owner, repo.name, branch=branch)
    if readme_image:
        readme_image = to_raw_url(readme_image, owner, repo.name, branch=branch)

    social = None
    if not readme_image:
        social = fetch_og_image(session, owner, repo.name)

    homepage = repo.homepage or f"https://{owner}.github.io/{repo.name}/"
    return ProjectRecord(
        name=repo.name,
        title=repo.name,
        description=repo.description or "",
        homepage=homepage,
        url=homepage,
        topics=tuple(topics),
        readme_text=readme_text,
        readme_image=readme_image or None,
        image=readme_image or social or None,
        color=None,
    )


def _topics_or_empty(session: GitHubSession, owner: str, name: str) -> List[str]:
    try:
        return get_repo_topics(session, owner, name)
    except Exception as error:
        logger.warning(f"Topics fetch failed for {name}: {error}")
        return []


def _readme_or_none(session: GitHubSession, owner: str, name: str) -> Optional[str]:
    try:
        return fetch_readme(session, owner, name)
    except Exception as error:
        logger.warning(f"README fetch failed for {name}: {error}")
        return None


def _payload_name(payload: Any) -> str:
    if isinstance(payload, dict):
        return str(payload.get("name", "<unknown>"))
    return "<unknown>"
