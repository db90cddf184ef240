"""Best-effort plain text and cover image extraction from README Markdown."""

from __future__ import annotations

import re
from typing import Optional

RAW_CONTENT_ROOT = "https://raw.githubusercontent.com"
DEFAULT_BRANCH = "main"

_CODE_FENCE = re.compile(r"```[\s\S]*?```")
_INLINE_CODE = re.compile(r"`[^`]*`")
_IMAGE = re.compile(r"!\[([^\]]*)\]\(([^)]+)\)")
_LINK = re.compile(r"\[([^\]]+)\]\(([^)]+)\)")
_WHITESPACE = re.compile(r"\s+")
_IMAGE_URL = re.compile(r"https?://\S+\.(?:png|jpe?g|gif|svg)", re.IGNORECASE)
_LEADING_DOT_SLASH = re.compile(r"^\./")
_ANGLE_TARGET = re.compile(r"^<([^>]*)>")
_TARGET_TITLE = re.compile(r"""\s+(?:"[^"]*"|'[^']*')$""")


def strip_markdown(markdown: Optional[str]) -> str:
    if not markdown:
        return ""
    # Code goes first so bracket/paren sequences inside it are never read as links.
    text = _CODE_FENCE.sub(" ", markdown)
    text = _INLINE_CODE.sub(" ", text)
    while True:
        flattened = _LINK.sub(r"\1", _IMAGE.sub(r"\1", text))
        if flattened == text:
            break
        text = flattened
    return _WHITESPACE.sub(" ", text).strip()


def locate_image(
    markdown: Optional[str],
    owner: str,
    repo_name: str,
    branch: str = DEFAULT_BRANCH,
) -> Optional[str]:
    """Return the first image referenced by a README as an absolute URL.

    Embedded ``![alt](target)`` images win over bare image URLs found in the
    text. Relative targets are resolved against the raw content of ``branch``,
    which is assumed rather than looked up.
    """
    if not markdown:
        return None
    match = _IMAGE.search(markdown)
    if match:
        reference = _clean_target(match.group(2))
    else:
        url_match = _IMAGE_URL.search(markdown)
        reference = url_match.group(0) if url_match else ""
    if not reference:
        return None
    return to_raw_url(reference, owner, repo_name, branch=branch)


def to_raw_url(reference: str, owner: str, repo_name: str, branch: str = DEFAULT_BRANCH) -> str:
    if reference.startswith("http"):
        return reference
    path = _LEADING_DOT_SLASH.sub("", reference)
    return f"{RAW_CONTENT_ROOT}/{owner}/{repo_name}/{branch}/{path}"


def _clean_target(target: str) -> str:
    target = target.strip()
    # <path with spaces> keeps everything up to the closing bracket.
    angled = _ANGLE_TARGET.match(target)
    if angled:
        return angled.group(1).strip()
    # Drops an optional link title: ![alt](path "title")
    return _TARGET_TITLE.sub("", target)
