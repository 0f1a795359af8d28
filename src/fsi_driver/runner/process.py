from __future__ import annotations

import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from fsi_driver.errors import ToolFailedError
from fsi_driver.utils import get_logger

logger = get_logger(__name__)


@dataclass
class CommandResult:
    command: str
    returncode: int
    log_path: Optional[Path] = None

    @property
    def succeeded(self) -> bool:
        return self.returncode == 0


def run_command(
    command: str,
    *,
    capture_output: bool = False,
    log_path: Optional[Path] = None,
    cwd: Optional[Path] = None,
    fail_on_error: bool = False,
) -> CommandResult:
    """Run ``command`` through the shell and block until it exits.

    No timeout is applied. When ``capture_output`` is set, standard output is
    collected and written to ``log_path`` once the process has finished.
    """

    if capture_output and log_path is None:
        raise ValueError("log_path is required when capturing output")

    logger.debug("Running command: %s", command)
    if capture_output:
        completed = subprocess.run(
            command,
            shell=True,
            cwd=cwd,
            stdout=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
        )
        log_path = Path(log_path)
        log_path.write_text(completed.stdout or "", encoding="utf-8")
    else:
        completed = subprocess.run(command, shell=True, cwd=cwd)
        log_path = None

    result = CommandResult(command=command, returncode=completed.returncode, log_path=log_path)
    if not result.succeeded:
        logger.warning("Command exited with status %d: %s", result.returncode, command)
        if fail_on_error:
            raise ToolFailedError(command, result.returncode)
    return result
