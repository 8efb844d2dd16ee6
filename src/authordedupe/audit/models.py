"""Event envelope written by the audit logger."""

import json
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

__all__ = ["EventLevel", "LogEvent"]


class EventLevel(StrEnum):
    """Severity of an audit event."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARN = "WARN"
    ERROR = "ERROR"


@dataclass(frozen=True)
class LogEvent:
    """One line of the JSONL audit log.

    Attributes
    ----------
    ts : str
        ISO8601 UTC timestamp with a ``Z`` suffix.
    run_id : str
        Identifier shared by every event of one run.
    level : EventLevel
        Severity.
    event : str
        Event type, e.g. ``stage_finished``.
    data : dict[str, Any]
        Event-specific payload.
    stage : str | None
        Stage the event belongs to (``name_feed``, ``author_list``,
        ``consolidation``), if any.
    rid : str | None
        Raw author string the event is about, if any.
    """

    ts: str
    run_id: str
    level: EventLevel
    event: str
    data: dict[str, Any] = field(default_factory=dict)
    stage: str | None = None
    rid: str | None = None

    def to_json(self) -> str:
        """Serialize as one compact JSON line (without newline)."""
        payload = asdict(self)
        payload["level"] = str(self.level)
        return json.dumps(payload, ensure_ascii=False, separators=(",", ":"))
