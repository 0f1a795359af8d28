from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import List, Tuple

from fsi_driver.config.settings import Mode
from fsi_driver.errors import ArtifactExistsError, MissingArtifactError
from fsi_driver.utils import get_logger

logger = get_logger(__name__)

STUDY_PREFIX = "Parametric_Study"

STRUCTURAL_EXTENSIONS: Tuple[str, ...] = (
    ".com",
    ".dat",
    ".log",
    ".msg",
    ".odb",
    ".prt",
    ".sim",
    ".sta",
    "CSE.log",
    "CSE_config.xml",
    "CSE_statechart.xml",
)
CFD_EXTENSIONS: Tuple[str, ...] = (".sim", ".sim~")


class ToolKind(str, Enum):
    STRUCTURAL = "structural"
    CFD = "cfd"


@dataclass(frozen=True)
class ArtifactSet:
    tool: ToolKind
    label: str
    extensions: Tuple[str, ...]

    def generic_name(self, mode: Mode, extension: str) -> str:
        return f"{STUDY_PREFIX}_{mode.value}_Model_{self.label}{extension}"

    def numbered_name(self, mode: Mode, iteration: int, extension: str) -> str:
        label = f"_{self.label}" if self.label else ""
        return f"{STUDY_PREFIX}_{mode.value}_Model_{iteration}{label}{extension}"


STRUCTURAL_ARTIFACTS = ArtifactSet(ToolKind.STRUCTURAL, "Abaqus", STRUCTURAL_EXTENSIONS)
CFD_ARTIFACTS = ArtifactSet(ToolKind.CFD, "", CFD_EXTENSIONS)


def artifact_set(tool: ToolKind, cfd_run_enabled: bool = True) -> ArtifactSet:
    """Return the files ``tool`` leaves behind for one model.

    The CFD backup file (``.sim~``) is only written when the solver actually
    runs the model, so it is dropped from the set when the run step is off.
    """

    if tool is ToolKind.STRUCTURAL:
        return STRUCTURAL_ARTIFACTS
    if cfd_run_enabled:
        return CFD_ARTIFACTS
    return ArtifactSet(ToolKind.CFD, CFD_ARTIFACTS.label, CFD_EXTENSIONS[:1])


def rename_artifacts(
    tool: ToolKind,
    mode: Mode,
    iteration: int,
    directory: Path,
    *,
    cfd_run_enabled: bool = True,
) -> List[Path]:
    """Move generic tool outputs to their iteration-numbered names.

    Stops at the first missing source or already existing target; files
    renamed before it stay renamed.
    """

    artifacts = artifact_set(tool, cfd_run_enabled)
    renamed: List[Path] = []
    for extension in artifacts.extensions:
        source = directory / artifacts.generic_name(mode, extension)
        target = directory / artifacts.numbered_name(mode, iteration, extension)
        if not source.exists():
            raise MissingArtifactError(source)
        if target.exists():
            raise ArtifactExistsError(target)
        source.rename(target)
        renamed.append(target)
    logger.info("Renamed %d %s artifacts for model %d", len(renamed), tool.value, iteration)
    return renamed
