from .renamer import (
    CFD_EXTENSIONS,
    STRUCTURAL_EXTENSIONS,
    ArtifactSet,
    ToolKind,
    artifact_set,
    rename_artifacts,
)

__all__ = [
    "CFD_EXTENSIONS",
    "STRUCTURAL_EXTENSIONS",
    "ArtifactSet",
    "ToolKind",
    "artifact_set",
    "rename_artifacts",
]
