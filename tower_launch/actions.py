"""
GitHub Actions step boundary: inputs, named outputs, and the failure signal.
"""
from __future__ import annotations

import os
import sys
import uuid
from typing import Mapping, Optional, TextIO


class ActionsHarness:
    """Reads step inputs from and writes step outputs to the runner environment."""

    def __init__(
        self,
        environ: Optional[Mapping[str, str]] = None,
        stdout: Optional[TextIO] = None,
    ):
        """Initialize ActionsHarness."""
        self.environ = os.environ if environ is None else environ
        self.stdout = stdout or sys.stdout
        self.failed = False

    @staticmethod
    def input_env_name(name: str) -> str:
        """``certificate-path`` -> ``INPUT_CERTIFICATE-PATH``, as the runner sets it."""
        return "INPUT_" + name.replace(" ", "_").upper()

    def get_raw_input(self, name: str) -> Optional[str]:
        """Step input exactly as set; None only when the runner did not set it."""
        return self.environ.get(self.input_env_name(name))

    def get_input(self, name: str) -> Optional[str]:
        """Step input with surrounding whitespace removed; empty means unset."""
        value = self.environ.get(self.input_env_name(name), "").strip()
        return value or None

    def set_output(self, name: str, value: str) -> None:
        """Publish a step output."""
        output_file = self.environ.get("GITHUB_OUTPUT")
        if output_file:
            delimiter = f"ghadelimiter_{uuid.uuid4()}"
            with open(output_file, "a", encoding="utf-8") as fh:
                fh.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
            return
        self.stdout.write(f"::set-output name={name}::{value}\n")
        self.stdout.flush()

    def set_failed(self, message: str) -> None:
        """Emit an error annotation; the caller exits non-zero."""
        self.failed = True
        escaped = str(message).replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
        self.stdout.write(f"::error::{escaped}\n")
        self.stdout.flush()
