from .driver import IterationResult, SweepDriver, SweepResult
from .grid import format_sweep_value, sweep_values

__all__ = [
    "IterationResult",
    "SweepDriver",
    "SweepResult",
    "format_sweep_value",
    "sweep_values",
]
