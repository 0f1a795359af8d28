from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from fsi_driver.config.parameters import ParameterTable
from fsi_driver.errors import SettingsError

DEFAULT_INPUT_FILE = "InputFile.txt"
DEFAULT_STRUCTURAL_EXECUTABLE = "abaqus"
DEFAULT_STRUCTURAL_SCRIPT = "AbaqusScript.py"
DEFAULT_CFD_EXECUTABLE = "starccm+"
DEFAULT_CFD_MACRO = "StarScript.java"
DEFAULT_CFD_LOG_FILE = "StarOutput.txt"


class Mode(str, Enum):
    CFD = "CFD"
    FSI = "FSI"


@dataclass
class SweepSpec:
    parameter: str
    minimum: float
    maximum: float
    step: float


@dataclass
class RunSettings:
    """Flags of the parameter file decoded into typed values."""

    mode: Mode
    small_channel_height: float
    large_channel_height: float
    num_plates: int
    parametric: bool
    run_cfd: bool
    create_structural_inputs: bool
    create_cfd_file: bool
    cfd_processes: str
    create_log_file: bool
    sweep: Optional[SweepSpec] = None

    @classmethod
    def from_parameters(cls, table: ParameterTable) -> "RunSettings":
        raw_mode = table.get_string("CFDOrFSI")
        try:
            mode = Mode(raw_mode)
        except ValueError:
            raise SettingsError(f"CFDOrFSI must be CFD or FSI, got '{raw_mode}'") from None

        parametric = table.get_string("parametricSwitch") == "true"
        sweep = None
        if parametric:
            sweep = SweepSpec(
                parameter=table.get_string("parameter2Change"),
                minimum=table.get_float("minParameter"),
                maximum=table.get_float("maxParameter"),
                step=table.get_float("stepSize"),
            )

        create_cfd_file = _flag(table, "createStarFile", required=not parametric)
        cfd_step = parametric or create_cfd_file
        if cfd_step:
            cfd_processes = table.get_string("starProcesses")
        else:
            cfd_processes = table.strings.get("starProcesses", "")
        return cls(
            mode=mode,
            small_channel_height=table.get_float("smChHeight"),
            large_channel_height=table.get_float("lgChHeight"),
            num_plates=table.get_int("numOfPlates"),
            parametric=parametric,
            run_cfd=_flag(table, "runStar", required=cfd_step),
            create_structural_inputs=_flag(table, "createAbqInpFiles", required=not parametric),
            create_cfd_file=create_cfd_file,
            cfd_processes=cfd_processes,
            create_log_file=_flag(table, "createLogFile", required=cfd_step),
            sweep=sweep,
        )

    def plate_stack_conflict(self) -> bool:
        return self.num_plates > 1 and self.small_channel_height != self.large_channel_height


@dataclass
class ToolSettings:
    structural_executable: str = DEFAULT_STRUCTURAL_EXECUTABLE
    structural_script: str = DEFAULT_STRUCTURAL_SCRIPT
    cfd_executable: str = DEFAULT_CFD_EXECUTABLE
    cfd_macro: str = DEFAULT_CFD_MACRO
    cfd_log_file: str = DEFAULT_CFD_LOG_FILE
    fail_on_error: bool = False

    def structural_command(self) -> str:
        return f"{self.structural_executable} cae noGUI={self.structural_script}"

    def cfd_command(self, processes: str) -> str:
        return f"{self.cfd_executable} -new -np {processes} -batch {self.cfd_macro} -batch-report"


def load_tool_settings(path: Optional[Path]) -> ToolSettings:
    data = yaml.safe_load(path.read_text()) if path and path.exists() else {}
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise SettingsError(f"Tool settings must be a mapping: {path}")

    structural: Dict[str, Any] = data.get("structural") or {}
    cfd: Dict[str, Any] = data.get("cfd") or {}
    return ToolSettings(
        structural_executable=str(structural.get("executable", DEFAULT_STRUCTURAL_EXECUTABLE)),
        structural_script=str(structural.get("script", DEFAULT_STRUCTURAL_SCRIPT)),
        cfd_executable=str(cfd.get("executable", DEFAULT_CFD_EXECUTABLE)),
        cfd_macro=str(cfd.get("macro", DEFAULT_CFD_MACRO)),
        cfd_log_file=str(cfd.get("log_file", DEFAULT_CFD_LOG_FILE)),
        fail_on_error=bool(data.get("fail_on_error", False)),
    )


def _flag(table: ParameterTable, name: str, required: bool = True) -> bool:
    if not required and name not in table.strings:
        return False
    return table.get_string(name) == "yes"
