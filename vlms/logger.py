from __future__ import annotations

import traceback
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

from .constants import ERROR_LOG_PATH


@dataclass
class AppEvent:
    timestamp: str
    action: str
    entity_type: str
    entity_id: str
    details: str = ""

    @staticmethod
    def from_dict(d: dict[str, Any]) -> "AppEvent":
        return AppEvent(
            timestamp=str(d.get("timestamp", "")),
            action=str(d.get("action", "")),
            entity_type=str(d.get("entityType", "")),
            entity_id=str(d.get("entityId", "")),
            details=str(d.get("details", "")),
        )

    def to_dict(self) -> dict[str, Any]:
        d = asdict(self)
        return {
            "timestamp": d["timestamp"],
            "action": d["action"],
            "entityType": d["entity_type"],
            "entityId": d["entity_id"],
            "details": d["details"],
        }


class ErrorLogger:
    def __init__(self, path: Path = ERROR_LOG_PATH):
        self.path = path

    def log_exception(self, exc: BaseException, context: str = "") -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        ts = datetime.now().isoformat(timespec="seconds")
        with self.path.open("a", encoding="utf-8") as f:
            f.write(f"[{ts}] {context}\n")
            f.write("".join(traceback.format_exception(type(exc), exc, exc.__traceback__)))
            f.write("\n")


def now_ts() -> str:
    return datetime.now().isoformat(timespec="seconds")


def today() -> str:
    return datetime.now().date().isoformat()
