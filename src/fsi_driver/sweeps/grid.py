from __future__ import annotations

import math
from typing import List

from fsi_driver.config.parameters import ParameterType
from fsi_driver.errors import SettingsError

DRIFT_TOLERANCE = 1e-9
VALUE_DIGITS = 12


def sweep_values(minimum: float, maximum: float, step: float) -> List[float]:
    """Values from ``minimum`` to ``maximum`` inclusive in increments of ``step``.

    Each value is computed as ``minimum + k * step`` so rounding error does
    not build up over long sweeps.
    """

    if not all(math.isfinite(bound) for bound in (minimum, maximum, step)):
        raise ValueError(f"Sweep bounds must be finite, got {minimum}, {maximum}, {step}")
    if step <= 0:
        raise ValueError(f"Sweep step must be positive, got {step}")
    if minimum > maximum:
        return []
    count = int(math.floor((maximum - minimum) / step + DRIFT_TOLERANCE)) + 1
    return [round(minimum + k * step, VALUE_DIGITS) for k in range(count)]


def format_sweep_value(value: float, kind: ParameterType) -> str:
    if kind is ParameterType.INTEGER:
        if not float(value).is_integer():
            raise SettingsError(f"Cannot write non-integral value {value} to an integer parameter")
        return str(int(value))
    return repr(float(value))
