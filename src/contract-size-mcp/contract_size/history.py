import json
import logging
import os
import time
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

from .scoring import ContractSizeReport, report_from_dict, report_to_dict

logger = logging.getLogger(__name__)

HISTORY_LIMIT = 10


@dataclass(frozen=True)
class HistoryEntry:
    address: str
    report: ContractSizeReport
    observed_at: int  # milliseconds since epoch

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "report": report_to_dict(self.report),
            "observed_at": self.observed_at,
        }

    @classmethod
    def from_dict(cls, data: Any) -> "HistoryEntry":
        if not isinstance(data, dict):
            raise ValueError("history entry must be an object.")
        address = data.get("address")
        if not isinstance(address, str) or not address:
            raise ValueError("history entry is missing an address.")
        return cls(
            address=address,
            report=report_from_dict(data.get("report")),
            observed_at=int(data.get("observed_at", 0)),
        )


class HistoryStore:
    """Most-recent-first list of size checks kept in a single JSON file, keyed by lowercase address."""

    def __init__(self, path: str, limit: int = HISTORY_LIMIT) -> None:
        self.path = path
        self.limit = max(1, int(limit))
        self._entries: List[HistoryEntry] = []

    def _key(self, address: str) -> str:
        return address.strip().lower()

    def load(self) -> List[HistoryEntry]:
        self._entries = []
        if not os.path.exists(self.path):
            return []

        try:
            with open(self.path, "r", encoding="utf-8") as f:
                raw = json.load(f)
            if not isinstance(raw, list):
                raise ValueError("history file does not hold a list.")
            entries = [HistoryEntry.from_dict(item) for item in raw]
        except (OSError, ValueError, KeyError, TypeError) as exc:
            logger.warning("Discarding unreadable history at %s: %s", self.path, exc)
            return []

        self._entries = entries[: self.limit]
        return list(self._entries)

    def save(self) -> None:
        if not self._entries:
            return
        directory = os.path.dirname(self.path)
        if directory:
            os.makedirs(directory, exist_ok=True)
        with open(self.path, "w", encoding="utf-8") as f:
            json.dump([entry.to_dict() for entry in self._entries], f, indent=2)

    def entries(self) -> List[HistoryEntry]:
        return list(self._entries)

    def get(self, address: str) -> Optional[HistoryEntry]:
        key = self._key(address)
        for entry in self._entries:
            if self._key(entry.address) == key:
                return entry
        return None

    def record(
        self,
        address: str,
        report: ContractSizeReport,
        observed_at: Optional[int] = None,
    ) -> HistoryEntry:
        if observed_at is None:
            observed_at = int(time.time() * 1000)
        entry = HistoryEntry(address=address, report=report, observed_at=observed_at)

        key = self._key(address)
        for idx, existing in enumerate(self._entries):
            if self._key(existing.address) == key:
                self._entries[idx] = entry
                return entry

        self._entries = [entry] + self._entries[: self.limit - 1]
        return entry

    def clear(self) -> None:
        self._entries = []
        if os.path.exists(self.path):
            os.remove(self.path)
