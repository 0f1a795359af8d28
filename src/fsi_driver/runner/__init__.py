from .process import CommandResult, run_command
from .tools import ToolRunner

__all__ = ["CommandResult", "run_command", "ToolRunner"]
