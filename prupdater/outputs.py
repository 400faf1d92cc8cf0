"""
Run output sinks.

Outputs are what the calling workflow sees: ``pr_number``, ``pr_title``,
``pr_url``, ``branch_name``, ``branch_updated`` and ``has_conflicts``.
"""

import os
import sys
import uuid
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol, TextIO


class OutputSink(Protocol):
    """Receives named run outputs."""

    def set_output(self, name: str, value: object) -> None: ...


def _to_string(value: object) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


class MemoryOutputs:
    """Output sink keeping values in memory."""

    def __init__(self) -> None:
        self.values: dict[str, str] = {}

    def set_output(self, name: str, value: object) -> None:
        self.values[name] = _to_string(value)

    def get(self, name: str) -> str | None:
        return self.values.get(name)

    def __contains__(self, name: str) -> bool:
        return name in self.values


class GitHubOutputs:
    """
    Output sink writing to the GitHub Actions output file.

    Appends ``name=value`` lines to the file named by ``$GITHUB_OUTPUT``;
    multi-line values use the heredoc delimiter syntax. Without the variable
    the legacy ``::set-output`` workflow command is written to ``stream``.
    The variable is looked up in ``environ`` (default: the process environment).
    """

    def __init__(
        self,
        path: str | Path | None = None,
        stream: TextIO | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        if path is None:
            path = (os.environ if environ is None else environ).get("GITHUB_OUTPUT") or None
        self.path = Path(path) if path else None
        self.stream = stream

    def set_output(self, name: str, value: object) -> None:
        text = _to_string(value)

        if self.path is None:
            stream = self.stream or sys.stdout
            stream.write(f"::set-output name={name}::{text}\n")
            return

        if "\n" in text or "\r" in text:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            entry = f"{name}<<{delimiter}\n{text}\n{delimiter}\n"
        else:
            entry = f"{name}={text}\n"

        with self.path.open("a", encoding="utf-8") as f:
            f.write(entry)
