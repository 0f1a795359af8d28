from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum
from pathlib import Path
from typing import List, Optional

from fsi_driver.config import (
    ParameterLoad,
    RunSettings,
    ToolSettings,
    load_parameters,
    load_tool_settings,
)
from fsi_driver.config.settings import DEFAULT_INPUT_FILE
from fsi_driver.runner import CommandResult, ToolRunner
from fsi_driver.sweeps import SweepDriver, SweepResult
from fsi_driver.utils import get_logger

logger = get_logger(__name__)


class ExitCode(IntEnum):
    OK = 0
    ERROR = 1
    INVALID_GEOMETRY = 2


@dataclass
class PipelineConfig:
    workdir: Path = Path(".")
    settings_path: Optional[Path] = None
    strict: bool = False

    def resolve_input_path(self) -> Path:
        # the solver scripts read InputFile.txt from their own working directory
        return self.workdir / DEFAULT_INPUT_FILE

    def resolve_tool_settings(self) -> ToolSettings:
        tools = load_tool_settings(self.settings_path)
        if self.strict:
            tools.fail_on_error = True
        return tools


@dataclass
class PipelineResult:
    exit_code: ExitCode
    settings: Optional[RunSettings] = None
    commands: List[CommandResult] = field(default_factory=list)
    sweep: Optional[SweepResult] = None


class StudyPipeline:
    """Checks the plate stack and runs either a parametric or a single build."""

    def __init__(self, config: PipelineConfig) -> None:
        self.config = config
        self.tool_settings = config.resolve_tool_settings()

    def run(self) -> PipelineResult:
        input_path = self.config.resolve_input_path()
        loaded: ParameterLoad = load_parameters(input_path)
        settings = RunSettings.from_parameters(loaded.table)
        logger.info(
            "Building/running fluid-structure interaction models of parallel plate assemblies (%s mode)",
            settings.mode.value,
        )

        if settings.plate_stack_conflict():
            logger.error("Plate stack must have equal small and large channel heights")
            return PipelineResult(exit_code=ExitCode.INVALID_GEOMETRY, settings=settings)

        tools = ToolRunner(settings, self.tool_settings, self.config.workdir)
        if settings.parametric:
            driver = SweepDriver(input_path, loaded.table, settings, tools, self.config.workdir)
            sweep = driver.run()
            sweep_commands = [
                command
                for item in sweep.iterations
                for command in (item.structural, item.cfd)
            ]
            return PipelineResult(ExitCode.OK, settings, sweep_commands, sweep)

        commands: List[CommandResult] = []
        if settings.create_structural_inputs:
            commands.append(tools.run_structural())
        if settings.create_cfd_file:
            commands.append(tools.run_cfd())
        return PipelineResult(ExitCode.OK, settings, commands)
