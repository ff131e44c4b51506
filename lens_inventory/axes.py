from __future__ import annotations

"""
Grading axes for the stock grid.

Sphere rows run from +10.00 down to -10.00 and cylinder columns from 0.00 up
to +6.50, both in quarter-diopter steps. Values are kept as two-decimal
strings because they double as keys in the inventory store.

Values are generated from integer hundredths so that float rounding can never
produce labels such as "-0.00".
"""

from typing import Tuple


STEP = 0.25

SPHERE_MAX = 10.00
SPHERE_MIN = -10.00
CYLINDER_MIN = 0.00
CYLINDER_MAX = 6.50


def format_grading(value: float) -> str:
    """Format a grading value the way grid keys are written ("2.50", "-0.25")."""
    hundredths = int(round(value * 100))
    if hundredths == 0:
        return "0.00"
    return f"{hundredths / 100:.2f}"


def generate_axis(start: float, stop: float, step: float) -> Tuple[str, ...]:
    """Return the inclusive sequence start..stop walking by `step`.

    `step` may be negative for a descending axis. Raises ValueError when the
    step is zero or points away from `stop`.
    """
    start_h = int(round(start * 100))
    stop_h = int(round(stop * 100))
    step_h = int(round(step * 100))
    if step_h == 0:
        raise ValueError("Axis step must be non-zero")
    if (stop_h - start_h) * step_h < 0:
        raise ValueError(f"Axis step {step} never reaches {stop} from {start}")

    count = (stop_h - start_h) // step_h + 1
    return tuple(format_grading((start_h + i * step_h) / 100) for i in range(count))


SPHERE_VALUES: Tuple[str, ...] = generate_axis(SPHERE_MAX, SPHERE_MIN, -STEP)
CYLINDER_VALUES: Tuple[str, ...] = generate_axis(CYLINDER_MIN, CYLINDER_MAX, STEP)


def parse_grading(value: str) -> float:
    """Parse a grading string ("+2.00", "-0.75") into a float."""
    return float(str(value).strip())


__all__ = [
    "STEP",
    "SPHERE_VALUES",
    "CYLINDER_VALUES",
    "format_grading",
    "generate_axis",
    "parse_grading",
]
