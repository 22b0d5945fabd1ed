"""Shading composer: ambient + shadowed lighting over surface color."""

from .config import (
    FragmentInput,
    PassConstants,
    MaterialConstants,
    ShadeConfig,
)
from .main import ShadingComposer, shade_fragments

__all__ = [
    # Config
    "FragmentInput",
    "PassConstants",
    "MaterialConstants",
    "ShadeConfig",

    # Composition
    "ShadingComposer",
    "shade_fragments",
]
