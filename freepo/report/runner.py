"""ReportRunner: hands the selected paths to a report generator."""

from __future__ import annotations

import logging
import os
import subprocess
import tempfile
from collections.abc import Sequence
from pathlib import Path

from freepo.config.models import ReportConfig
from freepo.report.builtin import render_report

logger = logging.getLogger(__name__)


class ReportError(Exception):
    """The report generator failed; message is its error text."""

    def __init__(self, message: str, returncode: int | None = None) -> None:
        self.returncode = returncode
        super().__init__(message)


def write_path_list(paths: Sequence[str], directory: str | None = None) -> Path:
    """Write *paths* one per line to a fresh temp file and return its path."""
    fd, name = tempfile.mkstemp(prefix="freepo-paths-", suffix=".txt", dir=directory)
    with os.fdopen(fd, "w", encoding="utf-8") as f:
        f.write("\n".join(paths))
    return Path(name)


class ReportRunner:
    """Runs the configured generator command, or the built-in one when unset."""

    def __init__(self, config: ReportConfig | None = None) -> None:
        self.config = config or ReportConfig()

    def generate(self, paths: Sequence[str]) -> str:
        """Return report text for *paths*; raises ReportError on failure."""
        list_file = write_path_list(paths)
        try:
            if self.config.command:
                return self._run_command(list_file)
            return render_report(self._read_path_list(list_file))
        finally:
            list_file.unlink(missing_ok=True)

    @staticmethod
    def _read_path_list(list_file: Path) -> list[str]:
        lines = list_file.read_text(encoding="utf-8").splitlines()
        return [line for line in lines if line]

    def _run_command(self, list_file: Path) -> str:
        argv = [*self.config.command, str(list_file)]
        logger.debug("running report generator: %s", argv)
        try:
            result = subprocess.run(
                argv,
                capture_output=True,
                text=True,
                timeout=self.config.timeout,
            )
        except FileNotFoundError as e:
            raise ReportError(f"Error: report generator not found: {argv[0]}") from e
        except subprocess.TimeoutExpired as e:
            raise ReportError(
                f"Error: report generator timed out after {self.config.timeout}s"
            ) from e

        if result.returncode != 0:
            detail = result.stderr.strip() or f"exited with status {result.returncode}"
            raise ReportError(f"Error: {detail}", returncode=result.returncode)
        if result.stderr:
            raise ReportError(f"Error: {result.stderr.strip()}", returncode=result.returncode)
        logger.info("report generated (%d chars)", len(result.stdout))
        return result.stdout
