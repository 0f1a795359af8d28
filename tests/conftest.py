from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Callable, Dict, List

import pytest

BASE_PARAMETERS: Dict[str, tuple[str, str]] = {
    "plateLength": ("float", "0.6096"),
    "smChHeight": ("float", "0.003"),
    "lgChHeight": ("float", "0.003"),
    "numOfPlates": ("integer", "1"),
    "avgChVelocity": ("float", "1.0"),
    "CFDOrFSI": ("string", "FSI"),
    "parametricSwitch": ("string", "true"),
    "parameter2Change": ("string", "avgChVelocity"),
    "minParameter": ("float", "1.0"),
    "maxParameter": ("float", "2.0"),
    "stepSize": ("float", "0.5"),
    "runStar": ("string", "no"),
    "createAbqInpFiles": ("string", "yes"),
    "createStarFile": ("string", "yes"),
    "starProcesses": ("string", "4"),
    "createLogFile": ("string", "no"),
}


def render_input(overrides: Dict[str, str] | None = None) -> str:
    values = {name: value for name, (_, value) in BASE_PARAMETERS.items()}
    values.update(overrides or {})
    lines = ["# FSI input file", "# name : type : value : note", ""]
    for name, (kind, _) in BASE_PARAMETERS.items():
        lines.append(f"{name}:\t{kind}:\t\t{values[name]}:\t-")
    return "\n".join(lines) + "\n"


@pytest.fixture
def write_input(tmp_path: Path) -> Callable[..., Path]:
    def _write(directory: Path | None = None, **overrides: str) -> Path:
        directory = directory or tmp_path
        directory.mkdir(parents=True, exist_ok=True)
        path = directory / "InputFile.txt"
        path.write_text(render_input(overrides))
        return path

    return _write


class FakeTools:
    """Stands in for ``subprocess.run`` and fakes solver output files."""

    def __init__(self, returncode: int = 0, stdout: str = "") -> None:
        self.calls: List[dict] = []
        self.outputs: Dict[str, List[str]] = {}
        self.returncode = returncode
        self.stdout = stdout
        self.snapshots: List[str] = []

    def __call__(self, command, shell=False, cwd=None, stdout=None, text=None, encoding=None, errors=None):  # type: ignore[no-untyped-def]
        workdir = Path(cwd) if cwd else Path(".")
        self.calls.append(
            {"command": command, "shell": shell, "cwd": cwd, "stdout": stdout, "errors": errors}
        )
        input_file = workdir / "InputFile.txt"
        if command.startswith("abaqus") and input_file.exists():
            self.snapshots.append(input_file.read_text())
        for prefix, names in self.outputs.items():
            if command.startswith(prefix):
                for name in names:
                    (workdir / name).write_text(command)
        return subprocess.CompletedProcess(
            command, self.returncode, stdout=self.stdout if stdout is not None else None
        )

    def commands(self, prefix: str) -> List[str]:
        return [call["command"] for call in self.calls if call["command"].startswith(prefix)]


@pytest.fixture
def fake_tools(monkeypatch: pytest.MonkeyPatch) -> FakeTools:
    fake = FakeTools()
    monkeypatch.setattr("fsi_driver.runner.process.subprocess.run", fake)
    return fake
