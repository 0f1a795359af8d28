from .parameters import (
    LoadStatus,
    ParameterLoad,
    ParameterTable,
    ParameterType,
    dump_parameters,
    load_parameters,
    rewrite_parameter,
)
from .settings import Mode, RunSettings, SweepSpec, ToolSettings, load_tool_settings

__all__ = [
    "LoadStatus",
    "ParameterLoad",
    "ParameterTable",
    "ParameterType",
    "dump_parameters",
    "load_parameters",
    "rewrite_parameter",
    "Mode",
    "RunSettings",
    "SweepSpec",
    "ToolSettings",
    "load_tool_settings",
]
