from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging
import threading
import time
import uuid

from roi_services.simulation.engine import ScenarioResult
from roi_services.simulation.inputs import ScenarioInput
from roi_services.storage.errors import DuplicateScenarioError

log = logging.getLogger(__name__)


def _now() -> str:
    return time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())


@dataclass
class StoredScenario:
    id: str
    inputs: Dict[str, Any]
    results: Dict[str, Any]
    created_at: str
    updated_at: str
    seq: int = 0  # creation order; timestamps only have second resolution

    @property
    def scenario_name(self) -> str:
        return self.inputs.get("scenario_name", "")

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            **self.inputs,
            "results": self.results,
            "created_at": self.created_at,
            "updated_at": self.updated_at,
        }

    @classmethod
    def from_dict(cls, doc: Dict[str, Any]) -> "StoredScenario":
        doc = dict(doc)
        sid = doc.pop("id")
        results = doc.pop("results", {})
        created = doc.pop("created_at", "")
        updated = doc.pop("updated_at", created)
        seq = int(doc.pop("seq", 0))
        return cls(id=sid, inputs=doc, results=results, created_at=created, updated_at=updated, seq=seq)


class ScenarioStore:
    """Scenarios keyed by id, unique by scenario_name, persisted under root/scenarios."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root).resolve() / "scenarios"
        self.root.mkdir(parents=True, exist_ok=True)
        self._items: Dict[str, StoredScenario] = {}
        self._lock = threading.Lock()
        self._seq = 0
        self._load()

    def _load(self) -> None:
        for p in sorted(self.root.glob("*.json")):
            try:
                s = StoredScenario.from_dict(json.loads(p.read_text()))
            except (ValueError, KeyError) as e:
                log.warning("Skipping unreadable scenario file %s: %s", p.name, e)
                continue
            self._items[s.id] = s
            self._seq = max(self._seq, s.seq)

    def _persist(self, s: StoredScenario) -> None:
        doc = {**s.to_dict(), "seq": s.seq}
        (self.root / f"{s.id}.json").write_text(json.dumps(doc, indent=2, allow_nan=False))

    def create(self, inputs: ScenarioInput, results: ScenarioResult) -> StoredScenario:
        name = inputs.scenario_name
        with self._lock:
            if any(s.scenario_name == name for s in self._items.values()):
                raise DuplicateScenarioError(name)
            self._seq += 1
            ts = _now()
            s = StoredScenario(
                id=f"s_{uuid.uuid4().hex[:8]}",
                inputs=inputs.to_dict(),
                results=results.to_dict(),
                created_at=ts,
                updated_at=ts,
                seq=self._seq,
            )
            self._persist(s)
            self._items[s.id] = s
        log.info("Saved scenario %s (%s)", s.id, name)
        return s

    def get(self, sid: str) -> Optional[StoredScenario]:
        with self._lock:
            return self._items.get(sid)

    def list(self) -> List[StoredScenario]:
        """All scenarios, newest first."""
        with self._lock:
            items = list(self._items.values())
        return sorted(items, key=lambda s: (s.created_at, s.seq), reverse=True)

    def delete(self, sid: str) -> bool:
        with self._lock:
            s = self._items.pop(sid, None)
            if s is None:
                return False
            path = self.root / f"{sid}.json"
            if path.exists():
                path.unlink()
        log.info("Deleted scenario %s (%s)", sid, s.scenario_name)
        return True
