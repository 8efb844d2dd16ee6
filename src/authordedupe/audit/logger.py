"""JSONL audit trail for alias resolution runs.

Every run appends one JSON object per line: run boundaries, loading and
consolidation stages with their counters, skipped name feed records,
written artifacts and errors.
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from authordedupe.audit.helpers import get_iso_timestamp, get_package_version
from authordedupe.audit.models import EventLevel, LogEvent

__all__ = ["AuditLogger"]


class AuditLogger:
    """Append-only JSONL event writer bound to one run.

    The file stays open for the logger's lifetime and is flushed after
    every event, so a crashed run still leaves a readable trail.

    Attributes
    ----------
    run_id : str
        Identifier stamped on every event.
    log_path : Path
        JSONL file events are appended to.
    current_stage : str | None
        Stage inherited by events that name none.
    """

    def __init__(self, run_id: str, log_path: Path) -> None:
        """Open (or create) the event file.

        Parameters
        ----------
        run_id : str
            Identifier stamped on every event.
        log_path : Path
            JSONL file; missing parent directories are created.
        """
        self.run_id = run_id
        self.log_path = Path(log_path)
        self.current_stage: str | None = None

        self.log_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = self.log_path.open("a", encoding="utf-8")

    def __enter__(self) -> "AuditLogger":
        return self

    def __exit__(self, *args: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the event file. Safe to call twice."""
        if not self._file.closed:
            self._file.close()

    def set_stage(self, stage: str | None) -> None:
        """Make *stage* the default stage of following events."""
        self.current_stage = stage

    def event(
        self,
        event_type: str,
        data: dict[str, Any] | None = None,
        level: EventLevel | str = EventLevel.INFO,
        stage: str | None = None,
        rid: str | None = None,
    ) -> None:
        """Append one event.

        Parameters
        ----------
        event_type : str
            Event type, e.g. ``"name_feed_record_skipped"``.
        data : dict[str, Any] | None, optional
            Payload.
        level : EventLevel | str, optional
            Severity, by default INFO.
        stage : str | None, optional
            Stage; defaults to :attr:`current_stage`.
        rid : str | None, optional
            Raw author string the event is about.

        Raises
        ------
        ValueError
            If *level* is not a known severity.
        """
        log_event = LogEvent(
            ts=get_iso_timestamp(),
            run_id=self.run_id,
            level=EventLevel(level),
            event=event_type,
            data=data or {},
            stage=stage if stage is not None else self.current_stage,
            rid=rid,
        )
        self._file.write(log_event.to_json() + "\n")
        self._file.flush()

    def run_started(self, command: list[str], parameters: dict[str, Any]) -> None:
        """Log the start of a run with its command line and package version."""
        self.event(
            "run_started",
            data={
                "command": command,
                "parameters": parameters,
                "version": get_package_version(),
            },
        )

    def run_finished(self, status: str, duration_seconds: float) -> None:
        """Log the end of a run (``status`` is ``"success"`` or ``"failed"``)."""
        self.event("run_finished", data={"status": status, "duration_seconds": duration_seconds})

    def stage_started(self, stage: str) -> None:
        self.set_stage(stage)
        self.event("stage_started", stage=stage)

    def stage_finished(
        self,
        stage: str,
        duration_seconds: float,
        counters: dict[str, int] | None = None,
    ) -> None:
        """Log the end of *stage* and clear the current stage.

        Parameters
        ----------
        stage : str
            Stage name.
        duration_seconds : float
            Wall time spent in the stage.
        counters : dict[str, int] | None, optional
            Stage counters, e.g. ``{"names_in": 12, "groups_out": 7}``.
        """
        data: dict[str, Any] = {"duration_seconds": duration_seconds}
        if counters:
            data["counters"] = counters

        self.event("stage_finished", data=data, stage=stage)
        self.set_stage(None)

    @contextmanager
    def stage(self, name: str) -> Iterator[dict[str, int]]:
        """Time a stage and log its counters when the block completes.

        The yielded dict collects the stage counters. If the block raises,
        no ``stage_finished`` event is written.

        Examples
        --------
            >>> with logger.stage("consolidation") as counters:
            ...     counters["groups_out"] = 3
        """
        counters: dict[str, int] = {}
        start = time.perf_counter()
        self.stage_started(name)
        try:
            yield counters
        except BaseException:
            self.set_stage(None)
            raise
        self.stage_finished(name, time.perf_counter() - start, counters)

    def feed_record_skipped(
        self,
        line_number: int,
        kind: str,
        field_count: int,
        reason: str,
    ) -> None:
        """Log a name feed record dropped as unusable."""
        self.event(
            "name_feed_record_skipped",
            data={"line": line_number, "kind": kind, "fields": field_count, "reason": reason},
            level=EventLevel.WARN,
        )

    def artifact_written(self, path: str, sha256: str, record_count: int | None = None) -> None:
        """Log an output file with its digest."""
        data: dict[str, Any] = {"path": path, "sha256": sha256}
        if record_count is not None:
            data["record_count"] = record_count

        self.event("artifact_written", data=data)

    def error(
        self,
        exception_class: str,
        message: str,
        stage: str | None = None,
        traceback: str | None = None,
    ) -> None:
        """Log a failure.

        Parameters
        ----------
        exception_class : str
            Exception class name, e.g. ``"NameFeedError"``.
        message : str
            Exception message.
        stage : str | None, optional
            Stage the failure happened in.
        traceback : str | None, optional
            Formatted traceback (verbose runs only).
        """
        data: dict[str, Any] = {"exception_class": exception_class, "message": message}
        if traceback is not None:
            data["traceback"] = traceback

        self.event("error", data=data, stage=stage, level=EventLevel.ERROR)
