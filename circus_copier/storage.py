"""JSON-file key/value storage for the copied candidate and ATS mappings.

Two keys are used:
  - candidateData: the single most recently copied candidate
  - atsMappings:   an optional override of the default ATS mapping list

Every write rewrites the whole file. There is no locking: two copies racing
from separate processes end with whichever wrote last.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from circus_copier.models import ATSMapping, CandidateData

logger = logging.getLogger("circus_copier")

CANDIDATE_DATA_KEY = "candidateData"
ATS_MAPPINGS_KEY = "atsMappings"


class KeyValueStore:
    """Flat JSON object on disk, read and written whole."""

    def __init__(self, path: Path | str = "data/storage.json"):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, Any]:
        if not self._path.exists() or self._path.stat().st_size == 0:
            return {}
        with open(self._path, encoding="utf-8") as f:
            return json.load(f)

    def _write(self, data: dict[str, Any]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._path, "w", encoding="utf-8") as f:
            json.dump(data, f, ensure_ascii=False, indent=2)

    def get(self, key: str) -> Any:
        return self._read().get(key)

    def set(self, key: str, value: Any) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if data.pop(key, None) is not None:
            self._write(data)


class CandidateStore:
    """Typed access to the stored candidate and mapping list."""

    def __init__(self, store: KeyValueStore, default_mappings: list[ATSMapping]):
        self._store = store
        self._default_mappings = default_mappings

    def save_candidate_data(self, data: CandidateData) -> None:
        self._store.set(CANDIDATE_DATA_KEY, data.to_dict())
        logger.debug("Saved candidate %s to %s", data.full_name, self._store.path)

    def get_candidate_data(self) -> CandidateData | None:
        raw = self._store.get(CANDIDATE_DATA_KEY)
        if not raw:
            return None
        return CandidateData.from_dict(raw)

    def clear_candidate_data(self) -> None:
        self._store.remove(CANDIDATE_DATA_KEY)
        logger.debug("Cleared stored candidate.")

    def save_ats_mappings(self, mappings: list[ATSMapping]) -> None:
        self._store.set(ATS_MAPPINGS_KEY, [m.to_dict() for m in mappings])

    def get_ats_mappings(self) -> list[ATSMapping]:
        """Stored mappings if any were saved, otherwise the defaults."""
        raw = self._store.get(ATS_MAPPINGS_KEY)
        if not raw:
            return list(self._default_mappings)
        return [ATSMapping.from_dict(m) for m in raw]
