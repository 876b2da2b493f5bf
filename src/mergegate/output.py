"""GitHub Actions output rendering."""

from __future__ import annotations

import os
import uuid
from pathlib import Path

from mergegate.types import Decision

RESPONSE_OUTPUT = "response"
ALLOWED_MARK = "✔"
DENIED_MARK = "✘"


def format_response(decision: Decision) -> str:
    mark = ALLOWED_MARK if decision.allowed else DENIED_MARK
    return f"{mark} {decision.reason}"


def format_error(message: str) -> str:
    return f"{DENIED_MARK} {message}"


def github_output_path() -> Path | None:
    """Return the step output file GitHub provides, if running inside an action."""
    raw = os.environ.get("GITHUB_OUTPUT", "").strip()
    return Path(raw) if raw else None


def write_action_output(name: str, value: str, path: Path) -> None:
    """Append a step output using the ``name=value`` file protocol.

    Multi-line values use the ``name<<DELIMITER`` form.
    """
    if "\n" in value:
        delimiter = f"ghadelimiter_{uuid.uuid4().hex}"
        record = f"{name}<<{delimiter}\n{value}\n{delimiter}\n"
    else:
        record = f"{name}={value}\n"
    with open(path, "a", encoding="utf-8") as f:
        f.write(record)


def publish_response(message: str) -> Path | None:
    """Write the ``response`` output when running under GitHub Actions."""
    path = github_output_path()
    if path is not None:
        write_action_output(RESPONSE_OUTPUT, message, path)
    return path
