from __future__ import annotations

import json
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict


class ArtifactStore:
    def put_manifest(self, data: Dict[str, Any], *, name: str | None = None) -> str:  # returns key
        raise NotImplementedError

    def get_manifest(self, key: str) -> Dict[str, Any]:
        raise NotImplementedError


@dataclass
class LocalArtifactStore(ArtifactStore):
    root: Path

    def _path(self, key: str) -> Path:
        return Path(self.root) / f"documents-{key}.json"

    def put_manifest(self, data: Dict[str, Any], *, name: str | None = None) -> str:
        Path(self.root).mkdir(parents=True, exist_ok=True)
        key = f"{name}-{uuid.uuid4().hex[:8]}" if name else uuid.uuid4().hex
        self._path(key).write_text(json.dumps(data, ensure_ascii=False), encoding="utf-8")
        return key

    def get_manifest(self, key: str) -> Dict[str, Any]:
        return json.loads(self._path(key).read_text(encoding="utf-8"))
