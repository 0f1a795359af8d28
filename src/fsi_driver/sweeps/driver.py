from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional

from fsi_driver.artifacts import ToolKind, rename_artifacts
from fsi_driver.config.parameters import ParameterTable, rewrite_parameter
from fsi_driver.config.settings import Mode, RunSettings, SweepSpec
from fsi_driver.errors import SettingsError
from fsi_driver.runner import CommandResult, ToolRunner
from fsi_driver.sweeps.grid import format_sweep_value, sweep_values
from fsi_driver.utils import get_logger

logger = get_logger(__name__)


@dataclass
class IterationResult:
    iteration: int
    value: float
    structural: CommandResult
    cfd: CommandResult
    renamed: List[Path] = field(default_factory=list)


@dataclass
class SweepResult:
    parameter: str
    values: List[float]
    iterations: List[IterationResult] = field(default_factory=list)


class SweepDriver:
    """Runs the full build pipeline once per value of the swept parameter.

    Each iteration writes the new value into the parameter file, which the
    external tools read on their own. The in-memory table is left as loaded.
    """

    def __init__(
        self,
        input_path: Path,
        table: ParameterTable,
        settings: RunSettings,
        tools: ToolRunner,
        workdir: Optional[Path] = None,
    ) -> None:
        if settings.sweep is None:
            raise SettingsError("Parametric study requested without sweep settings")
        self.input_path = input_path
        self.table = table
        self.settings = settings
        self.spec: SweepSpec = settings.sweep
        self.tools = tools
        self.workdir = workdir or input_path.parent

    def run(self) -> SweepResult:
        spec = self.spec
        kind = self.table.type_of(spec.parameter)
        values = sweep_values(spec.minimum, spec.maximum, spec.step)
        logger.info(
            "A parametric study has been started where %s will be varied from %s to %s in increments of %s",
            spec.parameter,
            spec.minimum,
            spec.maximum,
            spec.step,
        )

        result = SweepResult(parameter=spec.parameter, values=values)
        total = len(values)
        for iteration, value in enumerate(values, start=1):
            logger.info("Model %d of %d in the parametric study is being built", iteration, total)
            rewrite_parameter(self.input_path, spec.parameter, format_sweep_value(value, kind))
            structural = self.tools.run_structural()
            cfd = self.tools.run_cfd(iteration, total)
            renamed = self._rename(iteration)
            result.iterations.append(
                IterationResult(
                    iteration=iteration,
                    value=value,
                    structural=structural,
                    cfd=cfd,
                    renamed=renamed,
                )
            )
        return result

    def _rename(self, iteration: int) -> List[Path]:
        settings = self.settings
        renamed = rename_artifacts(
            ToolKind.CFD,
            settings.mode,
            iteration,
            self.workdir,
            cfd_run_enabled=settings.run_cfd,
        )
        if settings.run_cfd and settings.mode is Mode.FSI:
            renamed += rename_artifacts(ToolKind.STRUCTURAL, settings.mode, iteration, self.workdir)
        return renamed
