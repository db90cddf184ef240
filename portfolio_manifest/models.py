from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional, Tuple


@dataclass(frozen=True, slots=True)
class RepositorySummary:
    name: str
    description: Optional[str] = None
    homepage: Optional[str] = None
    fork: bool = False

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "RepositorySummary":
        return cls(
            name=str(payload.get("name", "")),
            description=payload.get("description"),
            homepage=payload.get("homepage") or None,
            fork=bool(payload.get("fork", False)),
        )


@dataclass(frozen=True, slots=True)
class ProjectRecord:
    name: str
    title: str
    description: str
    homepage: str
    url: str
    topics: Tuple[str, ...] = ()
    readme_text: str = ""
    readme_image: Optional[str] = None
    image: Optional[str] = None
    color: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "title": self.title,
            "description": self.description,
            "homepage": self.homepage,
            "topics": list(self.topics),
            "readme_text": self.readme_text,
            "readme_image": self.readme_image,
            "image": self.image,
            "color": self.color,
            "url": self.url,
        }
