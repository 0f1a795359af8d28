from __future__ import annotations

from pathlib import Path
from typing import Optional

from fsi_driver.config.settings import RunSettings, ToolSettings
from fsi_driver.runner.process import CommandResult, run_command
from fsi_driver.utils import get_logger

logger = get_logger(__name__)


class ToolRunner:
    """Builds and runs the structural and CFD command lines for one study."""

    def __init__(self, settings: RunSettings, tools: ToolSettings, workdir: Path) -> None:
        self.settings = settings
        self.tools = tools
        self.workdir = workdir

    def run_structural(self) -> CommandResult:
        logger.info("Abaqus is building the solid model and the fluid geometry/mesh")
        result = run_command(
            self.tools.structural_command(),
            cwd=self.workdir,
            fail_on_error=self.tools.fail_on_error,
        )
        logger.info("Abaqus has finished building the solid model and the fluid geometry/mesh")
        return result

    def run_cfd(self, iteration: Optional[int] = None, total: int = 1) -> CommandResult:
        mode = self.settings.mode.value
        logger.info("Star-CCM+ is now building the fluid model and setting up the %s problem", mode)
        if self.settings.run_cfd:
            if iteration is not None:
                logger.info(
                    "Model %d of %d will automatically start running after it has completed building",
                    iteration,
                    total,
                )
            else:
                logger.info("The %s model will automatically start running after it has completed building", mode)

        capture = self.settings.create_log_file
        result = run_command(
            self.tools.cfd_command(self.settings.cfd_processes),
            capture_output=capture,
            log_path=self.workdir / self.tools.cfd_log_file if capture else None,
            cwd=self.workdir,
            fail_on_error=self.tools.fail_on_error,
        )

        if not self.settings.run_cfd:
            logger.info("Star-CCM+ has finished building the fluid model and the %s problem", mode)
        elif iteration is not None:
            logger.info("Model %d of %d has finished running", iteration, total)
        else:
            logger.info("The %s model has finished running", mode)
        return result
