"""Common utilities for shading."""

from .conversion import (
    to_torch_tensor,
    to_numpy_array,
    as_vector_rows,
    normalize_to_float32,
)
from .validation import (
    validate_fragment_inputs,
    validate_shadow_map,
)
from .debug import (
    is_debug_enabled,
    debug_print,
    debug_log,
    debug_array_info,
    get_array_stats,
)

__all__ = [
    # Conversion
    "to_torch_tensor",
    "to_numpy_array",
    "as_vector_rows",
    "normalize_to_float32",

    # Validation
    "validate_fragment_inputs",
    "validate_shadow_map",

    # Debug
    "is_debug_enabled",
    "debug_print",
    "debug_log",
    "debug_array_info",
    "get_array_stats",
]
