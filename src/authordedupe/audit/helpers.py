"""Helper utilities for audit logging.

Run ID generation, timestamps, artifact hashing and package version lookup.
"""

import hashlib
import importlib.metadata
import secrets
from datetime import UTC, datetime
from pathlib import Path

__all__ = [
    "calculate_file_sha256",
    "generate_run_id",
    "get_iso_timestamp",
    "get_package_version",
]


def get_iso_timestamp() -> str:
    """Get current UTC timestamp in ISO8601 format with microseconds.

    Returns
    -------
    str
        ISO8601 timestamp (e.g., "2026-02-03T12:34:56.123456Z").
    """
    return datetime.now(UTC).isoformat().replace("+00:00", "Z")


def generate_run_id() -> str:
    """Generate unique run identifier.

    Returns
    -------
    str
        Run ID in format: ISO8601_timestamp__random_suffix.
    """
    return f"{get_iso_timestamp()}__{secrets.token_hex(4)}"


def calculate_file_sha256(path: Path) -> str:
    """Calculate SHA256 hash of a written artifact.

    Parameters
    ----------
    path : Path
        Path to file.

    Returns
    -------
    str
        SHA256 hash with "sha256:" prefix.
    """
    sha256_hash = hashlib.sha256()
    with path.open("rb") as f:
        for chunk in iter(lambda: f.read(8192), b""):
            sha256_hash.update(chunk)
    return f"sha256:{sha256_hash.hexdigest()}"


def get_package_version() -> str:
    """Get authordedupe package version, or "unknown" when not installed."""
    try:
        return importlib.metadata.version("authordedupe")
    except importlib.metadata.PackageNotFoundError:
        return "unknown"
