"""Audit logging subsystem for authordedupe.

Main Components
---------------
- AuditLogger: JSONL event logger
- LogEvent, EventLevel: event envelope and severity
"""

from authordedupe.audit.helpers import (
    calculate_file_sha256,
    generate_run_id,
    get_iso_timestamp,
    get_package_version,
)
from authordedupe.audit.logger import AuditLogger
from authordedupe.audit.models import EventLevel, LogEvent

__all__ = [
    "AuditLogger",
    "EventLevel",
    "LogEvent",
    "calculate_file_sha256",
    "generate_run_id",
    "get_iso_timestamp",
    "get_package_version",
]
