from __future__ import annotations

from pathlib import Path
from typing import Optional


class FsiDriverError(Exception):
    """Base class for every error raised by the driver."""


class SettingsError(FsiDriverError):
    pass


class ParameterFormatError(FsiDriverError):
    def __init__(self, path: Path, line_no: int, message: str) -> None:
        self.path = path
        self.line_no = line_no
        super().__init__(f"{path}:{line_no}: {message}")


class DuplicateParameterError(ParameterFormatError):
    def __init__(self, path: Path, line_no: int, name: str, first_line: int) -> None:
        self.name = name
        self.first_line = first_line
        super().__init__(
            path, line_no, f"parameter '{name}' already defined on line {first_line}"
        )


class UnknownParameterError(FsiDriverError, KeyError):
    def __init__(self, name: str, expected: Optional[str] = None) -> None:
        self.name = name
        self.expected = expected
        super().__init__(name)

    def __str__(self) -> str:
        if self.expected:
            return f"Unknown {self.expected} parameter: '{self.name}'"
        return f"Unknown parameter: '{self.name}'"


class MissingArtifactError(FsiDriverError, FileNotFoundError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Expected tool output not found: {path}")


class ToolFailedError(FsiDriverError):
    def __init__(self, command: str, returncode: int) -> None:
        self.command = command
        self.returncode = returncode
        super().__init__(f"Command exited with status {returncode}: {command}")


class ArtifactExistsError(FsiDriverError, FileExistsError):
    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"Refusing to overwrite existing model output: {path}")
