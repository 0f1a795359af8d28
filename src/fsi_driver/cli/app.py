from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from fsi_driver.config import RunSettings, load_parameters
from fsi_driver.config.settings import DEFAULT_INPUT_FILE
from fsi_driver.errors import FsiDriverError
from fsi_driver.pipeline import ExitCode, PipelineConfig, StudyPipeline
from fsi_driver.sweeps import sweep_values

console = Console()
app = typer.Typer(help="Abaqus / Star-CCM+ FSI model builder and parametric study driver")


@app.command()
def run(
    workdir: Path = typer.Option(
        Path("."), "--workdir", "-w", help="Case directory holding InputFile.txt; the tools run here"
    ),
    settings: Optional[Path] = typer.Option(None, "--settings", help="Tool settings yaml"),
    strict: bool = typer.Option(False, help="Abort when a tool exits with a non-zero status"),
) -> None:
    config = PipelineConfig(workdir=workdir, settings_path=settings, strict=strict)
    try:
        result = StudyPipeline(config).run()
    except (FsiDriverError, ValueError) as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=int(ExitCode.ERROR))

    if result.exit_code is ExitCode.INVALID_GEOMETRY:
        console.print("Plate stack must have equal small and large channel heights!", style="red")
        raise typer.Exit(code=int(result.exit_code))

    failed = [command for command in result.commands if not command.succeeded]
    if result.sweep is not None:
        console.print(
            f"Parametric study of {result.sweep.parameter} finished: "
            f"{len(result.sweep.iterations)} models",
            style="green",
        )
    elif result.commands:
        console.print(f"Ran {len(result.commands)} tool step(s)", style="green")
    else:
        console.print("Nothing to build", style="yellow")
    for command in failed:
        console.print(f"exit {command.returncode}: {command.command}", style="yellow")


@app.command()
def show(
    input_file: Path = typer.Option(Path(DEFAULT_INPUT_FILE), "--input", "-i"),
) -> None:
    loaded = load_parameters(input_file)
    if loaded.missing:
        console.print(f"Parameter file not found: {input_file}", style="yellow")
        raise typer.Exit(code=int(ExitCode.ERROR))

    table = Table("name", "type", "value")
    for name, kind, value in loaded.table.items():
        table.add_row(name, kind.value, str(value))
    console.print(table)


@app.command()
def values(
    input_file: Path = typer.Option(Path(DEFAULT_INPUT_FILE), "--input", "-i"),
) -> None:
    try:
        settings = RunSettings.from_parameters(load_parameters(input_file).table)
    except FsiDriverError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=int(ExitCode.ERROR))
    if settings.sweep is None:
        console.print("parametricSwitch is off; a single model would be built", style="yellow")
        return

    spec = settings.sweep
    try:
        grid = sweep_values(spec.minimum, spec.maximum, spec.step)
    except ValueError as exc:
        console.print(str(exc), style="red")
        raise typer.Exit(code=int(ExitCode.ERROR))
    for index, value in enumerate(grid, start=1):
        console.print(f"{index:3d}  {spec.parameter} = {value}")


def main() -> None:
    app()
