from __future__ import annotations

import json
from pathlib import Path
from typing import Iterable

from .models import ProjectRecord


def write_manifest(records: Iterable[ProjectRecord], path: Path) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    payload = [record.to_dict() for record in records]
    path.write_text(json.dumps(payload, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return path
