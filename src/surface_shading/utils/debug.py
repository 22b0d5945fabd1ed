"""Debug utilities."""

from __future__ import annotations
from typing import Tuple
import os

DEBUG_ENV_VAR = "SHADING_DEBUG"


def is_debug_enabled() -> bool:
    """Check if debug mode is enabled via environment variable."""
    return os.environ.get(DEBUG_ENV_VAR, "0").lower() not in ("0", "", "false")


def debug_print(*args, **kwargs):
    """Print debug message if debug mode is enabled."""
    if is_debug_enabled():
        print(*args, **kwargs)


def debug_log(name: str, message: str):
    """Print a debug message tagged with its component, e.g. '[Shadow] ...'."""
    debug_print(f"[{name}] {message}")


def get_array_stats(values) -> Tuple[float, float, float]:
    """
    Get min, max, mean statistics of an array.

    Args:
        values: Non-empty NumPy array

    Returns:
        (min, max, mean) as floats
    """
    return (
        float(values.min()),
        float(values.max()),
        float(values.mean())
    )


def debug_array_info(name: str, values):
    """Print shape and value range of an array under the component tag."""
    if not is_debug_enabled():
        return

    summary = f"shape={tuple(values.shape)} dtype={values.dtype}"
    if values.size == 0:
        debug_log(name, f"{summary} (empty)")
    else:
        mn, mx, mean = get_array_stats(values)
        debug_log(name, f"{summary} min={mn:.4f} max={mx:.4f} mean={mean:.4f}")
