from __future__ import annotations
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Any, Dict, List, Optional, Union
import json
import logging
import re
import threading
import time
import uuid

from roi_services.storage.errors import InvalidEmailError

log = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^\w+([.-]?\w+)*@\w+([.-]?\w+)*(\.\w{2,3})+$")


def is_valid_email(email: Any) -> bool:
    return isinstance(email, str) and EMAIL_RE.match(email) is not None


@dataclass(frozen=True)
class Lead:
    id: str
    email: str
    scenario_id: str
    report_downloaded: bool
    report_downloaded_at: Optional[str]
    created_at: str

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


class LeadStore:
    """Append-only log of who downloaded which report (root/leads.jsonl)."""

    def __init__(self, root: Union[str, Path]):
        root = Path(root).resolve()
        root.mkdir(parents=True, exist_ok=True)
        self.path = root / "leads.jsonl"
        self._lock = threading.Lock()

    def record(self, email: str, scenario_id: str, report_downloaded: bool = True) -> Lead:
        if not is_valid_email(email):
            raise InvalidEmailError(email)
        ts = time.strftime("%Y-%m-%dT%H:%M:%SZ", time.gmtime())
        lead = Lead(
            id=f"l_{uuid.uuid4().hex[:8]}",
            email=email,
            scenario_id=scenario_id,
            report_downloaded=report_downloaded,
            report_downloaded_at=ts if report_downloaded else None,
            created_at=ts,
        )
        with self._lock:
            with self.path.open("a") as f:
                f.write(json.dumps(lead.to_dict()) + "\n")
        log.info("Recorded lead %s for scenario %s", lead.id, scenario_id)
        return lead

    def list(self, scenario_id: Optional[str] = None) -> List[Lead]:
        if not self.path.exists():
            return []
        with self._lock:
            lines = self.path.read_text().splitlines()
        leads = [Lead(**json.loads(line)) for line in lines if line.strip()]
        if scenario_id is not None:
            leads = [lead for lead in leads if lead.scenario_id == scenario_id]
        return leads
