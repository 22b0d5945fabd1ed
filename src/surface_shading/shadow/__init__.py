"""Shadow filter: PCF visibility against a shadow depth map."""

from .config import ComparisonSampler, ShadowMap, COMPARISON_FUNCS
from .pcf import compute_visibility, PCF_OFFSETS

__all__ = [
    "ComparisonSampler",
    "ShadowMap",
    "COMPARISON_FUNCS",
    "compute_visibility",
    "PCF_OFFSETS",
]
